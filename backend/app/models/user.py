"""
Admin User Model — Operators allowed to sign in to the payments dashboard.
"""
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Boolean

from app.database import Base


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(128), nullable=False)   # bcrypt
    name = Column(String(128))
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    last_login_at = Column(DateTime, nullable=True)
