"""Helpers for building database connection URLs from settings components"""


def get_database_url(
    driver: str,
    host: str,
    port: int,
    user: str,
    password: str,
    name: str,
) -> str:
    """
    Construct an SQLAlchemy database URL from its components.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "guard", "secret", "assetguard")
        'postgresql+asyncpg://guard:secret@db:5432/assetguard'
    """
    return f"{driver}://{user}:{password}@{host}:{port}/{name}"
