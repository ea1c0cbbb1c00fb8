"""
Payment Record Model — Payments made by users of the SaaS product.
Rows are created by the external payment flow; this service reads, edits and deletes them.
"""
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Numeric

from app.database import Base


class PaymentRecord(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)   # owning user, not a FK we manage

    # Payer identity snapshot at time of payment
    name = Column(String(128))
    email = Column(String(256), index=True)

    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    currency = Column(String(8), nullable=False, default="USD")   # INR | USD | ...

    plan_name = Column(String(64))
    plan_type = Column(String(32))                # monthly | yearly | one-time
    plan_price = Column(Numeric(12, 2, asdecimal=False), default=0)   # same currency as amount
    discount = Column(Integer, default=0)         # percent, 0-100

    status = Column(String(24), default="pending")  # success | succeeded | pending | failed | ...

    # External correlation identifiers
    provider = Column(String(32))                 # razorpay | stripe | ...
    transaction_id = Column(String(128))
    custom_invoice_id = Column(String(64))

    # Credits granted by this payment
    email_send_credits = Column(Integer, default=0)
    sms_credits = Column(Integer, default=0)
    whatsapp_credits = Column(Integer, default=0)
    email_verification_credits = Column(Integer, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
