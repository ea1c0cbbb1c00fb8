"""
Payments API client — what the dashboard front end does, as a Python client.

The bearer token lives on the client instance and is attached explicitly to
every payments call; ``logout`` drops it. Non-2xx answers come back as the
same error classes the server raises.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from app.config import get_settings
from app.errors import (
    AppError, AuthenticationFailed, NotFound, RateLimited, TransientStoreFailure, ValidationFailed,
)
from app.schemas.schemas import PaymentRecordOut, PaymentUpdateRequest
from app.services.payment_directory import filter_payments

logger = logging.getLogger(__name__)


class PaymentsClient:
    """Synchronous client for the payments admin API.

    Args:
        base_url: Server root, e.g. ``http://localhost:5000``.
        timeout: Per-request timeout in seconds; defaults to REQUEST_TIMEOUT_SECONDS.
        http: Pre-built ``httpx.Client`` (a FastAPI ``TestClient`` works too).
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: Optional[float] = None,
        http: Optional[httpx.Client] = None,
    ):
        if timeout is None:
            timeout = get_settings().REQUEST_TIMEOUT_SECONDS
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ─── Session ─────────────────────────────────────────────────────

    def login(self, email: str, password: str) -> str:
        try:
            data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        except AuthenticationFailed:
            # One message whatever the server said
            raise AuthenticationFailed()
        self.token = data["token"]
        return self.token

    def logout(self) -> None:
        self.token = None

    # ─── Payments ────────────────────────────────────────────────────

    def fetch_payments(self) -> List[PaymentRecordOut]:
        data = self._request("GET", "/api/payments", token=self._require_token())
        return [PaymentRecordOut.model_validate(item) for item in data]

    def list_payments(self, search: Optional[str] = None) -> List[PaymentRecordOut]:
        """Fetch the full snapshot and filter it locally."""
        return filter_payments(self.fetch_payments(), search)

    def edit_payment(self, payment_id: int, changes: dict) -> PaymentRecordOut:
        try:
            request = PaymentUpdateRequest(**changes)
        except ValidationError as exc:
            raise ValidationFailed(
                "Invalid payment changes",
                details=exc.errors(include_url=False, include_input=False),
            ) from exc
        body = request.model_dump(by_alias=True, exclude_unset=True)
        data = self._request("PATCH", f"/api/payments/{payment_id}", json=body, token=self._require_token())
        return PaymentRecordOut.model_validate(data)

    def delete_payment(self, payment_id: int) -> None:
        self._request("DELETE", f"/api/payments/{payment_id}", token=self._require_token())

    # ─── Internals ───────────────────────────────────────────────────

    def _require_token(self) -> str:
        if not self.token:
            raise AuthenticationFailed("Not authenticated")
        return self.token

    def _request(self, method: str, path: str, json: Optional[dict] = None, token: Optional[str] = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            response = self._http.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, path)
            raise TransientStoreFailure("Request timed out") from exc
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransientStoreFailure("Server unreachable") from exc

        if response.is_success:
            return response.json()
        raise self._error_for(response)

    @staticmethod
    def _error_for(response: httpx.Response) -> AppError:
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if not isinstance(detail, str):
            detail = None

        status = response.status_code
        if status == 401:
            return AuthenticationFailed(detail)
        if status == 404:
            return NotFound("Payment")
        if status in (400, 422):
            return ValidationFailed(detail)
        if status == 429:
            retry_after = response.headers.get("Retry-After", "")
            return RateLimited(int(retry_after) if retry_after.isdigit() else 1)
        if status >= 500:
            return TransientStoreFailure(detail)
        return AppError(detail or f"Unexpected response {status}")
