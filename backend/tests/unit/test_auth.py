"""
Auth Tests — login handshake, bearer token checks and login throttling
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.config import get_settings
from app.errors import AuthenticationFailed
from app.services.auth_service import AuthService
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


class TestAuthService:
    def test_password_hash_round_trip(self):
        hashed = AuthService.hash_password("s3cret")
        assert hashed != "s3cret"
        assert AuthService.verify_password("s3cret", hashed)
        assert not AuthService.verify_password("S3cret", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not AuthService.verify_password("anything", "not-a-bcrypt-hash")

    def test_authenticate_returns_decodable_token(self, db, admin):
        token = AuthService.authenticate(db, ADMIN_EMAIL, ADMIN_PASSWORD)
        payload = AuthService.decode_token(token)
        assert payload["sub"] == str(admin.id)
        assert payload["email"] == ADMIN_EMAIL

    def test_email_lookup_ignores_case_and_spaces(self, db, admin):
        assert AuthService.authenticate(db, f"  {ADMIN_EMAIL.upper()} ", ADMIN_PASSWORD)

    def test_wrong_password_and_unknown_email_look_the_same(self, db, admin):
        with pytest.raises(AuthenticationFailed) as wrong_password:
            AuthService.authenticate(db, ADMIN_EMAIL, "wrong")
        with pytest.raises(AuthenticationFailed) as unknown_email:
            AuthService.authenticate(db, "nobody@bouncecure.io", ADMIN_PASSWORD)

        assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"
        assert wrong_password.value.code == unknown_email.value.code

    def test_inactive_admin_cannot_sign_in(self, db, admin):
        admin.is_active = False
        db.commit()
        with pytest.raises(AuthenticationFailed):
            AuthService.authenticate(db, ADMIN_EMAIL, ADMIN_PASSWORD)

    def test_successful_login_records_time(self, db, admin):
        AuthService.authenticate(db, ADMIN_EMAIL, ADMIN_PASSWORD)
        db.refresh(admin)
        assert admin.last_login_at is not None

    def test_ensure_admin_is_idempotent(self, db):
        first = AuthService.ensure_admin(db, "boot@bouncecure.io", "pw-1", "Boot")
        second = AuthService.ensure_admin(db, "BOOT@bouncecure.io", "pw-2")
        assert first.id == second.id


class TestTokenDecoding:
    def test_expired_token(self, admin):
        settings = get_settings()
        token = jwt.encode(
            {"sub": str(admin.id), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationFailed, match="expired"):
            AuthService.decode_token(token)

    def test_token_signed_with_other_secret(self, admin):
        token = jwt.encode({"sub": str(admin.id)}, "x" * 64, algorithm="HS256")
        with pytest.raises(AuthenticationFailed, match="Invalid token"):
            AuthService.decode_token(token)

    def test_token_without_subject(self):
        settings = get_settings()
        token = jwt.encode({"email": "a@b.com"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        with pytest.raises(AuthenticationFailed):
            AuthService.decode_token(token)


class TestLoginEndpoint:
    def test_login_returns_token(self, client, admin):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == get_settings().JWT_EXPIRATION_HOURS * 3600

    def test_wrong_password_is_401_not_store_error(self, client, admin):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
        assert response.status_code == 401
        assert response.json() == {
            "detail": "Invalid email or password",
            "error_code": "AUTHENTICATION_FAILED",
            "retryable": False,
        }
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_email_is_indistinguishable(self, client, admin):
        wrong_password = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
        unknown = client.post("/api/auth/login", json={"email": "ghost@bouncecure.io", "password": "nope"})
        assert wrong_password.status_code == unknown.status_code == 401
        assert wrong_password.json() == unknown.json()

    def test_empty_fields_rejected(self, client):
        response = client.post("/api/auth/login", json={"email": "", "password": ""})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_FAILED"

    def test_missing_email_does_not_echo_password(self, client):
        response = client.post("/api/auth/login", json={"password": "hunter2-secret"})
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_FAILED"
        assert body["retryable"] is False
        assert body["details"]["errors"][0]["loc"] == ["body", "email"]
        assert "hunter2-secret" not in response.text

    def test_login_is_throttled(self, client, admin):
        limit = get_settings().LOGIN_RATE_LIMIT_REQUESTS
        for _ in range(limit):
            response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "guess"})
            assert response.status_code == 401

        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        assert response.status_code == 429
        assert "Retry-After" in response.headers
        body = response.json()
        assert body["error_code"] == "RATE_LIMITED"
        assert body["retryable"] is True
        assert "store" not in body["detail"]


class TestBearerToken:
    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["email"] == ADMIN_EMAIL
        assert "lastLoginAt" in response.json()

    def test_missing_token(self, client, admin):
        response = client.get("/api/payments")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_garbage_token(self, client, admin):
        response = client.get("/api/payments", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTHENTICATION_FAILED"

    def test_token_of_deleted_admin(self, client, db, auth_headers, admin):
        db.delete(admin)
        db.commit()
        response = client.get("/api/payments", headers=auth_headers)
        assert response.status_code == 401
