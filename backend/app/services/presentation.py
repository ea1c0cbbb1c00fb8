"""
Presentation helpers — read-only transforms applied to payment records before display.
Nothing here touches the stored record.
"""
from typing import Optional, Union

from app.schemas.schemas import StatusCategory

Number = Union[int, float]

DEFAULT_INR_PER_USD = 75.0

_STATUS_CATEGORIES = {
    "success": StatusCategory.SUCCESS,
    "succeeded": StatusCategory.SUCCESS,
    "pending": StatusCategory.PENDING,
    "failed": StatusCategory.FAILED,
}


def normalize_for_display(amount: Number, currency: str, inr_per_usd: float = DEFAULT_INR_PER_USD) -> Number:
    """INR amounts become USD at a fixed rate, rounded to 2 places; any other currency passes through."""
    if currency == "INR":
        return round(amount / inr_per_usd, 2)
    return amount


def classify_status(status: Optional[str]) -> StatusCategory:
    """Map a free-form lifecycle status onto a display category (case-insensitive)."""
    if not status:
        return StatusCategory.UNKNOWN
    return _STATUS_CATEGORIES.get(status.lower(), StatusCategory.UNKNOWN)


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def amount_label(amount: Number, currency: str, inr_per_usd: float = DEFAULT_INR_PER_USD) -> str:
    """Render ``$X`` for USD, ``$X (Y CUR)`` for everything else.

    >>> amount_label(750, "INR")
    '$10.00 (750 INR)'
    """
    display = normalize_for_display(amount, currency, inr_per_usd)
    shown = f"{display:.2f}" if currency == "INR" else _format_number(display)
    if currency == "USD":
        return f"${shown}"
    return f"${shown} ({_format_number(amount)} {currency})"


class DetailToggle:
    """Which payment row has its detail panel open. At most one at a time."""

    def __init__(self):
        self.expanded_id: Optional[int] = None

    def toggle(self, payment_id: int) -> Optional[int]:
        self.expanded_id = None if self.expanded_id == payment_id else payment_id
        return self.expanded_id

    def is_expanded(self, payment_id: int) -> bool:
        return self.expanded_id == payment_id

    def collapse(self) -> None:
        self.expanded_id = None
