"""Database URL construction shared by service settings and migrations."""

from __future__ import annotations

import os
from urllib.parse import quote_plus


def build_database_url(
    *,
    database_name: str,
    user: str,
    password: str,
    host: str = "localhost",
    port: int = 5432,
    driver: str = "postgresql+asyncpg",
    override_env_var: str | None = None,
) -> str:
    """Return an SQLAlchemy async URL for the service database.

    A complete URL in ``override_env_var`` wins over the individual parts.
    Credentials are URL-encoded so passwords may contain reserved characters.
    """
    if override_env_var:
        override = os.getenv(override_env_var)
        if override:
            return override

    if not user:
        raise ValueError("Missing required database user for URL construction")

    credentials = quote_plus(user)
    if password:
        credentials = f"{credentials}:{quote_plus(password)}"

    return f"{driver}://{credentials}@{host}:{port}/{database_name}"
