import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from codearena.config import Config, logger

token_logger = logger.getChild("tokens")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def generate_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _issue_token(user_data: dict, lifetime_seconds: int, is_refresh: bool) -> str:
    issued_at = datetime.now(timezone.utc)
    claims = {
        "user": user_data,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=lifetime_seconds),
        "jti": str(uuid.uuid4()),
        "is_refresh": is_refresh,
    }
    return jwt.encode(claims, Config.JWT_SECRET, algorithm=Config.JWT_ALGORITHM)


def create_access_token(user_data: dict) -> str:
    """Short-lived token carrying ``{"id", "username", "role"}``."""
    return _issue_token(user_data, Config.JWT_ACCESS_TOKEN_EXPIRY, is_refresh=False)


def create_refresh_token(user_data: dict) -> str:
    return _issue_token(user_data, Config.JWT_REFRESH_TOKEN_EXPIRY, is_refresh=True)


def decode_token(token: str) -> Optional[dict]:
    """Claims of a valid token, or None when it is malformed, forged or expired."""
    try:
        return jwt.decode(token, Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        token_logger.debug(f"Rejected token: {str(e)}")
        return None
