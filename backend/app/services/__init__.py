from app.services.auth_service import AuthService
from app.services.payment_directory import PaymentDirectory

__all__ = ["AuthService", "PaymentDirectory"]
