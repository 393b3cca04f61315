"""Password hashing and session tokens.

Tokens are HS256 JWTs carrying ``{"data": {"username", "email", "_id"}}``.
The rest of the storefront only ever sees the ``Identity`` a verified token
yields.
"""

from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from storefront.config import get_settings
from storefront.domain import logger
from storefront.gate import Identity


def hash_password(password: str) -> str:
    rounds = get_settings().password_hash_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def sign_token(username: str, email: str, user_id: str) -> str:
    settings = get_settings()
    payload = {
        "data": {"username": username, "email": email, "_id": str(user_id)},
        "exp": datetime.now(UTC) + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str | None) -> Identity | None:
    """Return the identity a token carries, or ``None`` if it is missing, invalid or expired."""
    if not token:
        return None

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        data = payload["data"]
        return Identity(user_id=data["_id"], username=data["username"], email=data["email"])
    except (jwt.PyJWTError, KeyError, TypeError) as exc:
        logger.info("Invalid token", error=str(exc))
        return None
