"""
Pydantic Schemas — Request & Response models for API validation.
Field names are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ──────────────── Auth ────────────────

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Admin email address")
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class AdminUserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    last_login_at: Optional[datetime] = None


# ──────────────── Payments ────────────────

class StatusCategory(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"
    UNKNOWN = "unknown"


class PaymentRecordOut(CamelModel):
    id: int
    user_id: int
    name: Optional[str] = None
    email: Optional[str] = None
    amount: float
    currency: str
    plan_name: Optional[str] = None
    plan_type: Optional[str] = None
    plan_price: Optional[float] = None
    discount: Optional[int] = None
    status: Optional[str] = None
    provider: Optional[str] = None
    transaction_id: Optional[str] = None
    custom_invoice_id: Optional[str] = None
    email_send_credits: int = 0
    sms_credits: int = 0
    whatsapp_credits: int = 0
    email_verification_credits: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaymentUpdateRequest(CamelModel):
    """Partial update. ``id`` may be echoed back but never changed."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[int] = None
    user_id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=128)
    email: Optional[str] = Field(None, max_length=256)
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=8)
    plan_name: Optional[str] = Field(None, max_length=64)
    plan_type: Optional[str] = Field(None, max_length=32)
    plan_price: Optional[float] = Field(None, ge=0)
    discount: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[str] = Field(None, min_length=1, max_length=24)
    provider: Optional[str] = Field(None, max_length=32)
    transaction_id: Optional[str] = Field(None, max_length=128)
    custom_invoice_id: Optional[str] = Field(None, max_length=64)
    email_send_credits: Optional[int] = Field(None, ge=0)
    sms_credits: Optional[int] = Field(None, ge=0)
    whatsapp_credits: Optional[int] = Field(None, ge=0)
    email_verification_credits: Optional[int] = Field(None, ge=0)


class PaymentDisplay(PaymentRecordOut):
    """A stored record plus its presentation-only fields."""

    display_amount: float
    display_plan_price: Optional[float] = None
    amount_label: str
    status_category: StatusCategory


class DeleteResponse(BaseModel):
    success: bool = True
    id: int
    message: str = "Payment deleted"


# ──────────────── Generic ────────────────

class HealthResponse(BaseModel):
    status: str
    database: str
    version: str
    uptime_seconds: float


class ErrorResponse(BaseModel):
    detail: str
    error_code: Optional[str] = None
    retryable: bool = False
