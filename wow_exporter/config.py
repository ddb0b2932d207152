"""
Exporter configuration loaded from environment variables.
Credentials are injected via environment (never hard-coded).
"""
from __future__ import annotations

import re
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

# user:pass@tcp(host:port)/dbname?params  (go-sql-driver/mysql format)
_GO_DSN = re.compile(
    r"^(?P<user>[^:@/]*)(?::(?P<password>.*))?@tcp\((?P<host>[^:)]*)(?::(?P<port>\d+))?\)/(?P<database>[^?]*)"
)

CHARACTERS = "characters"
AUTH = "auth"
WORLD = "world"

DATABASES = (CHARACTERS, AUTH, WORLD)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    # ── Database ──────────────────────────────────────────────────────────────
    db_user: str = Field("", validation_alias=AliasChoices("WOW_DB_USER", "db_user"))
    db_password: str = Field("", validation_alias=AliasChoices("WOW_DB_PASS", "db_password"))
    db_host: str = Field("localhost", validation_alias=AliasChoices("WOW_DB_HOST", "db_host"))
    db_port: int = Field(3306, validation_alias=AliasChoices("WOW_DB_PORT", "db_port"))
    # Full DSN overrides the individual components above
    db_dsn: str = Field("", validation_alias=AliasChoices("WOW_DB_DSN", "db_dsn"))
    db_driver: str = "mysql+aiomysql"
    db_pool_size: int = Field(5, validation_alias=AliasChoices("WOW_DB_POOL_SIZE", "db_pool_size"))

    characters_database: str = Field(
        "acore_characters", validation_alias=AliasChoices("WOW_DB_CHARACTERS", "characters_database")
    )
    auth_database: str = Field("acore_auth", validation_alias=AliasChoices("WOW_DB_AUTH", "auth_database"))
    world_database: str = Field("acore_world", validation_alias=AliasChoices("WOW_DB_WORLD", "world_database"))

    # ── Collection ────────────────────────────────────────────────────────────
    realm_id: int = Field(1, validation_alias=AliasChoices("WOW_REALM_ID", "realm_id"))
    # Upper bound for a single metric group, in seconds
    query_timeout_seconds: float = Field(
        10.0, gt=0, validation_alias=AliasChoices("WOW_QUERY_TIMEOUT", "query_timeout_seconds")
    )

    # ── HTTP server ───────────────────────────────────────────────────────────
    host: str = Field("0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    port: int = Field(7000, validation_alias=AliasChoices("PORT", "port"))

    # Logging
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    def database_name(self, name: str) -> str:
        try:
            return {
                CHARACTERS: self.characters_database,
                AUTH: self.auth_database,
                WORLD: self.world_database,
            }[name]
        except KeyError:
            raise ValueError(f"unknown database {name!r}") from None

    def base_url(self) -> URL:
        """SQLAlchemy URL of the characters database, from the DSN or the components."""
        if self.db_dsn:
            return parse_dsn(self.db_dsn, self.db_driver)
        return URL.create(
            self.db_driver,
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.characters_database,
        )

    def database_url(self, name: str) -> URL:
        """URL for one logical database: the base URL with its database swapped."""
        return self.base_url().set(database=self.database_name(name))


def parse_dsn(dsn: str, driver: str = "mysql+aiomysql") -> URL:
    """
    Accepts either a SQLAlchemy URL or a go-sql-driver DSN
    (``user:pass@tcp(host:port)/acore_characters?parseTime=true``).
    """
    match = _GO_DSN.match(dsn)
    if match is None:
        url = make_url(dsn)
        # plain "mysql://" has no async driver
        if url.drivername == "mysql":
            url = url.set(drivername=driver)
        return url
    port = match.group("port")
    return URL.create(
        driver,
        username=match.group("user") or None,
        password=match.group("password") or None,
        host=match.group("host") or "localhost",
        port=int(port) if port else None,
        database=match.group("database") or None,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
