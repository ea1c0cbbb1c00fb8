"""
Shared route dependencies — bearer-token authentication.
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import AuthenticationFailed
from app.models.user import AdminUser
from app.services.auth_service import AuthService

security = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> AdminUser:
    """Resolve the admin behind the ``Authorization: Bearer`` header."""
    if not credentials or not credentials.credentials:
        raise AuthenticationFailed("Not authenticated")

    payload = AuthService.decode_token(credentials.credentials.strip())
    return AuthService.get_user(db, int(payload["sub"]))
