# api/assets/queries.py
"""
SQLAlchemy query builders for asset operations.
"""
from sqlalchemy import select

from db_models.asset import Asset


def select_all_assets():
    """Select all assets, most recently purchased first."""
    return select(Asset).order_by(Asset.purchase_date.desc())


def select_asset_by_tag(tag: str):
    """Select an asset by its tag."""
    return select(Asset).where(Asset.tag == tag)
