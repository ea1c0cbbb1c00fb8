"""
Payment Routes — Payment records dashboard API.
Every endpoint requires a bearer token.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.routes.deps import get_current_admin
from app.schemas.schemas import (
    PaymentRecordOut, PaymentUpdateRequest, PaymentDisplay, DeleteResponse, ErrorResponse,
)
from app.services.payment_directory import PaymentDirectory

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
    dependencies=[Depends(get_current_admin)],
    responses={401: {"model": ErrorResponse}},
)

SEARCH_QUERY = Query(
    None,
    description="Case-insensitive match on name, email, plan name, status, id or user id",
)


@router.get("", response_model=list[PaymentRecordOut])
def list_payments(search: Optional[str] = SEARCH_QUERY, db: Session = Depends(get_db)):
    """List payment records in stored order."""
    return PaymentDirectory.list(db, search)


@router.get("/display", response_model=list[PaymentDisplay])
def list_payments_for_display(search: Optional[str] = SEARCH_QUERY, db: Session = Depends(get_db)):
    """List payment records with USD-normalized amounts and status categories."""
    rate = get_settings().INR_PER_USD
    return [PaymentDirectory.to_display(p, rate) for p in PaymentDirectory.list(db, search)]


@router.get("/{payment_id}", response_model=PaymentRecordOut, responses={404: {"model": ErrorResponse}})
def get_payment(payment_id: int, db: Session = Depends(get_db)):
    return PaymentDirectory.get(db, payment_id)


@router.put(
    "/{payment_id}",
    response_model=PaymentRecordOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
@router.patch(
    "/{payment_id}",
    response_model=PaymentRecordOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_payment(payment_id: int, payload: PaymentUpdateRequest, db: Session = Depends(get_db)):
    """Update some or all fields of a payment. The id itself cannot change."""
    return PaymentDirectory.edit(db, payment_id, payload)


@router.delete("/{payment_id}", response_model=DeleteResponse, responses={404: {"model": ErrorResponse}})
def delete_payment(payment_id: int, db: Session = Depends(get_db)):
    """Delete a payment. A second delete of the same id answers 404."""
    PaymentDirectory.delete(db, payment_id)
    return DeleteResponse(id=payment_id)
