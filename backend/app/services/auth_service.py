"""
Auth Service — Credential verification and bearer-token issuance.
"""
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import store_errors
from app.errors import AuthenticationFailed
from app.models.user import AdminUser

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both failure paths cost one bcrypt check
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt()).decode("utf-8")


class AuthService:
    """Verifies admin credentials and mints JWT bearer tokens."""

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Malformed hash in the store
            logger.warning("Unreadable password hash encountered")
            return False

    @staticmethod
    def create_token(user: AdminUser) -> str:
        settings = get_settings()
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "iat": datetime.now(timezone.utc),
            "exp": datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRATION_HOURS),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> dict:
        """Decode and validate a bearer token.

        Raises:
            AuthenticationFailed: expired, tampered, or malformed token.
        """
        settings = get_settings()
        try:
            payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationFailed("Invalid token")

        if not str(payload.get("sub", "")).isdigit():
            raise AuthenticationFailed("Invalid token payload")
        return payload

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> str:
        """Check an email/password pair and return a fresh token.

        Unknown email and wrong password raise the same AuthenticationFailed,
        so a caller cannot probe which accounts exist.
        """
        with store_errors(db, "authenticate"):
            user = (
                db.query(AdminUser)
                .filter(AdminUser.email == email.strip().lower(), AdminUser.is_active.is_(True))
                .first()
            )

        hashed = user.password_hash if user else _DUMMY_HASH
        if not AuthService.verify_password(password, hashed) or user is None:
            logger.info("Failed login attempt")
            raise AuthenticationFailed()

        with store_errors(db, "record login"):
            user.last_login_at = datetime.utcnow()
            db.commit()

        logger.info("Admin %s signed in", user.id)
        return AuthService.create_token(user)

    @staticmethod
    def get_user(db: Session, user_id: int) -> AdminUser:
        with store_errors(db, "load admin"):
            user = db.query(AdminUser).filter(AdminUser.id == user_id).first()
        if user is None or not user.is_active:
            raise AuthenticationFailed("User not found")
        return user

    @staticmethod
    def create_admin(db: Session, email: str, password: str, name: str = None) -> AdminUser:
        user = AdminUser(
            email=email.strip().lower(),
            password_hash=AuthService.hash_password(password),
            name=name,
            is_active=True,
        )
        with store_errors(db, "create admin"):
            db.add(user)
            db.commit()
            db.refresh(user)
        return user

    @staticmethod
    def ensure_admin(db: Session, email: str, password: str, name: str = None) -> AdminUser:
        """Create the bootstrap admin unless one with this email already exists."""
        with store_errors(db, "load admin"):
            existing = db.query(AdminUser).filter(AdminUser.email == email.strip().lower()).first()
        if existing:
            return existing
        user = AuthService.create_admin(db, email, password, name)
        logger.info("Bootstrap admin %s created", user.email)
        return user
