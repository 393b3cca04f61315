"""Sign-up and sign-in, returning a session token alongside the user."""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.errors import BadCredentials
from storefront.identity.credentials import hash_password, sign_token, verify_password
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User
from storefront.utils.locks import serialized


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User


def _issue(user: User) -> AuthResult:
    token = sign_token(user.username, user.email, str(user.id))
    return AuthResult(token=token, user=user)


def register_user(username: str, email: str, password: str) -> AuthResult:
    if not password:
        raise ValidationError({"password": ["Password is required"]})

    command = RegisterUser(username=username, email=email, password_hash=hash_password(password))
    # Registrations are serialized so the uniqueness checks cannot race
    with serialized(("User", "registration")):
        user_id = current_domain.process(command, asynchronous=False)

    return _issue(current_domain.repository_for(User).get(user_id))


def authenticate(email: str, password: str) -> AuthResult:
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed", email=email)
        raise BadCredentials()

    return _issue(user)
