from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all AssetGuard ORM models.

    Keeps engine/session imports out so Alembic and seed scripts can import
    the metadata without pulling in async drivers.
    """
    pass
