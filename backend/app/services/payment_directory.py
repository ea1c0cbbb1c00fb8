"""
Payment Directory — Read, search, edit and delete payment records.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import store_errors
from app.errors import NotFound, ValidationFailed
from app.models.payment import PaymentRecord
from app.schemas.schemas import PaymentDisplay, PaymentRecordOut, PaymentUpdateRequest
from app.services.presentation import amount_label, classify_status, normalize_for_display

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "amount", "currency")


def matches(record, search: Optional[str]) -> bool:
    """True when ``search`` is a case-insensitive substring of any searchable field."""
    if not search:
        return True
    needle = search.lower()
    haystack = (
        record.name,
        record.email,
        record.plan_name,
        record.status,
        None if record.id is None else str(record.id),
        None if record.user_id is None else str(record.user_id),
    )
    return any(value and needle in value.lower() for value in haystack)


def filter_payments(records: Iterable, search: Optional[str] = None) -> list:
    """Keep matching records in their original order."""
    if not search:
        return list(records)
    return [r for r in records if matches(r, search)]


class PaymentDirectory:
    """CRUD over the payments table plus the display view."""

    @staticmethod
    def list(db: Session, search: Optional[str] = None) -> List[PaymentRecord]:
        """All payments in retrieval (id) order, optionally filtered."""
        with store_errors(db, "list payments"):
            records = db.query(PaymentRecord).order_by(PaymentRecord.id.asc()).all()
        return filter_payments(records, search)

    @staticmethod
    def get(db: Session, payment_id: int) -> PaymentRecord:
        with store_errors(db, "get payment"):
            record = db.query(PaymentRecord).filter(PaymentRecord.id == payment_id).first()
        if record is None:
            raise NotFound("Payment", payment_id)
        return record

    @staticmethod
    def edit(db: Session, payment_id: int, changes: PaymentUpdateRequest) -> PaymentRecord:
        """Apply a partial update. The record id is immutable.

        Raises:
            ValidationFailed: ``changes`` carries a different id.
            NotFound: no payment with ``payment_id``.
        """
        fields = changes.model_dump(exclude_unset=True)
        new_id = fields.pop("id", None)
        if new_id is not None and new_id != payment_id:
            raise ValidationFailed(
                "Payment id cannot be changed",
                details={"id": payment_id, "requested_id": new_id},
            )

        cleared = sorted(k for k in REQUIRED_FIELDS if k in fields and fields[k] is None)
        if cleared:
            raise ValidationFailed(
                "Required payment fields cannot be cleared",
                details={"fields": cleared},
            )

        record = PaymentDirectory.get(db, payment_id)
        with store_errors(db, "edit payment"):
            for key, value in fields.items():
                setattr(record, key, value)
            db.commit()
            db.refresh(record)

        logger.info("Payment %s updated (%s)", payment_id, ", ".join(sorted(fields)) or "no changes")
        return record

    @staticmethod
    def delete(db: Session, payment_id: int) -> None:
        """Remove a payment. Deleting a missing id raises NotFound, never succeeds silently."""
        record = PaymentDirectory.get(db, payment_id)
        with store_errors(db, "delete payment"):
            db.delete(record)
            db.commit()
        logger.info("Payment %s deleted", payment_id)

    @staticmethod
    def to_display(record, inr_per_usd: Optional[float] = None) -> PaymentDisplay:
        """Stored fields unchanged, plus normalized amounts and a status category."""
        rate = inr_per_usd if inr_per_usd is not None else get_settings().INR_PER_USD
        base = PaymentRecordOut.model_validate(record)
        plan_price = base.plan_price
        return PaymentDisplay(
            **base.model_dump(),
            display_amount=normalize_for_display(base.amount, base.currency, rate),
            display_plan_price=None if plan_price is None else normalize_for_display(plan_price, base.currency, rate),
            amount_label=amount_label(base.amount, base.currency, rate),
            status_category=classify_status(base.status),
        )
