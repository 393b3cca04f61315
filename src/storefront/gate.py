"""Authorization gate: every mutation passes through here.

Callers hand over the verified identity explicitly; nothing reads an ambient
session. A command is refused before any state is read when there is no
identity, or when it names a user or author other than the caller. Accepted
commands run under per-aggregate locks for the whole unit of work.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.errors import Forbidden
from storefront.utils.locks import serialized

# Command field carrying the identity of the aggregate a command writes
_AGGREGATE_ID_FIELDS = {
    "Product": "product_id",
    "Category": "category_id",
    "User": "user_id",
}

# Fields that must stay unique when a command creates an aggregate without an id
_NATURAL_KEY_FIELDS = {
    "Category": "name",
}


@dataclass(frozen=True)
class Identity:
    """A caller whose token has already been verified."""

    user_id: str
    username: str
    email: str


def require_identity(identity, error=Forbidden):
    if identity is None:
        raise error()
    return identity


def _check_ownership(command, identity):
    name = type(command).__name__
    user_id = getattr(command, "user_id", None)
    if user_id is not None and str(user_id) != str(identity.user_id):
        logger.warning("Command refused for another user", command=name, user_id=str(identity.user_id))
        raise Forbidden("You can only act on your own account.")

    username = getattr(command, "username", None)
    if username is not None and username != identity.username:
        logger.warning("Command refused for another author", command=name, username=identity.username)
        raise Forbidden("You can only act under your own username.")


def lock_keys(command):
    """Lock keys for the aggregate ``command`` writes. Aggregates it only reads are not locked."""
    aggregate = command.meta_.part_of.__name__
    field_name = _AGGREGATE_ID_FIELDS.get(aggregate)
    value = getattr(command, field_name, None) if field_name else None
    if value is not None:
        return [(aggregate, str(value))]

    natural_field = _NATURAL_KEY_FIELDS.get(aggregate)
    natural_value = getattr(command, natural_field, None) if natural_field else None
    if natural_value is not None:
        return [(aggregate, f"{natural_field}:{natural_value}")]
    return []


def dispatch(command, identity, error=Forbidden):
    """Authorize ``command`` for ``identity`` and process it synchronously.

    Returns whatever the command handler returns.
    """
    if identity is None:
        logger.warning("Command refused without identity", command=type(command).__name__)
        raise error()
    _check_ownership(command, identity)

    with serialized(*lock_keys(command)):
        return current_domain.process(command, asynchronous=False)
