from app.models.user import AdminUser
from app.models.payment import PaymentRecord

__all__ = ["AdminUser", "PaymentRecord"]
