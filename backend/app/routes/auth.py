"""
Auth Routes — Admin sign-in.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.user import AdminUser
from app.routes.deps import get_current_admin
from app.schemas.schemas import LoginRequest, TokenResponse, AdminUserResponse, ErrorResponse
from app.services.auth_service import AuthService
from app.utils.rate_limiter import rate_limit

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    _throttle: bool = Depends(rate_limit(
        requests=settings.LOGIN_RATE_LIMIT_REQUESTS,
        window=settings.LOGIN_RATE_LIMIT_WINDOW_SECONDS,
    )),
):
    """Exchange an email/password pair for a bearer token."""
    token = AuthService.authenticate(db, payload.email, payload.password)
    return TokenResponse(token=token, expires_in=settings.JWT_EXPIRATION_HOURS * 3600)


@router.get("/me", response_model=AdminUserResponse)
def me(admin: AdminUser = Depends(get_current_admin)):
    """The admin the presented token belongs to."""
    return admin
