"""
config.py
What this file does:
- Uses pydantic-settings (BaseSettings) to load env vars + .env automatically.
- Holds the connection target for the event store: address, database, collection.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EventStoreSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # host:port or a full mongodb:// URI
    address: str = Field(default="localhost:27017", alias="EVENTSTORE_ADDRESS")
    database_name: str = Field(default="event-sourcing", alias="EVENTSTORE_DATABASE_NAME")
    collection_name: str = Field(default="event", alias="EVENTSTORE_COLLECTION_NAME")

    min_pool_size: int = Field(default=0, alias="EVENTSTORE_MIN_POOL_SIZE")
    max_pool_size: int = Field(default=100, alias="EVENTSTORE_MAX_POOL_SIZE")
    server_selection_timeout_ms: int = Field(
        default=30000, alias="EVENTSTORE_SERVER_SELECTION_TIMEOUT_MS"
    )

    def with_overrides(self, **overrides) -> "EventStoreSettings":
        """Return a validated copy with the given fields replaced; unknown names are rejected."""
        unknown = set(overrides) - set(type(self).model_fields)
        if unknown:
            raise TypeError(f"unknown event store option(s): {', '.join(sorted(unknown))}")
        return type(self).model_validate({**self.model_dump(), **overrides})
