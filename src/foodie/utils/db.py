"""Schema management for the SQL providers configured in ``domain.toml``."""

from protean.domain import Domain

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield provider


def _build_models(domain: Domain, provider) -> None:
    """Touch each repository's DAO so its table is declared on the provider metadata."""
    for _, record in domain.registry.aggregates.items():
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    for _, record in domain.registry.entities.items():
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create every table that does not exist yet."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _build_models(domain, provider)
            provider._metadata.create_all(provider._engine)


def drop_db(domain: Domain) -> None:
    """Drop every table."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _build_models(domain, provider)
            provider._metadata.drop_all(provider._engine)
