"""Schema management and data reset for the storefront's persistence providers."""

from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield provider, create_engine(provider.conn_info["database_uri"])


def setup_db(domain: Domain):
    """Create tables for every aggregate and entity on SQL-backed providers.

    Memory providers need no schema and are skipped.
    """
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
            for record in records:
                if record.cls.meta_.provider == provider.name:
                    # Touching the DAO registers the model on the provider's metadata
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop all tables on SQL-backed providers."""
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            provider._metadata.drop_all(engine)


def reset_data(domain: Domain):
    """Wipe every provider and the event store. Must run inside a domain context."""
    for _, provider in domain.providers.items():
        provider._data_reset()

    domain.event_store.store._data_reset()
