"""Request-scoped inputs: caller identity and originating address."""

from urllib.parse import urlsplit

from fastapi import Header

from storefront.gate import Identity
from storefront.identity.credentials import verify_token


def current_identity(authorization: str | None = Header(default=None)) -> Identity | None:
    """Identity from ``Authorization: Bearer <token>``. Missing or bad tokens yield ``None``."""
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return verify_token(token.strip())


def referer_origin(referer: str | None = Header(default=None)) -> str | None:
    if not referer:
        return None

    parts = urlsplit(referer)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"
