"""Process settings that sit outside the domain, read from ``FOODIE_*`` variables.

Database and logging configuration belong to the domain and live in
``domain.toml``; what is left here is HTTP wiring and the storefront client.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FOODIE_", env_file=".env", extra="ignore")

    frontend_url: str = "http://localhost:3000"

    # Client side
    api_url: str = "http://localhost:3001"
    cart_path: str = "~/.foodie/cart.json"
    poll_interval: float = 3.0
    simulate_delay: float = 10.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
