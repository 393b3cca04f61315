"""User registration: command and handler.

The password arrives already hashed; plaintext never enters a command or an
event.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class RegisterUser:
    username = String(required=True, max_length=50)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.find_by_username(command.username) is not None:
            raise ValidationError({"username": ["Username is already taken"]})
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(
            username=command.username,
            email=command.email,
            password_hash=command.password_hash,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), username=user.username)
        return str(user.id)
