# api/dashboard/queries.py
"""
SQLAlchemy query builders for dashboard statistics.
"""
from sqlalchemy import select, func

from db_models.asset import Asset


def count_total_assets():
    """Count total assets."""
    return select(func.count(Asset.id))


def sum_asset_value():
    """Total purchase cost of the inventory."""
    return select(func.coalesce(func.sum(Asset.cost), 0.0))


def count_assets_by_status():
    """Asset counts grouped by status."""
    return select(Asset.status, func.count(Asset.id)).group_by(Asset.status)


def count_assets_by_category_and_status():
    """Asset counts grouped by category then status."""
    return (
        select(Asset.category, Asset.status, func.count(Asset.id))
        .group_by(Asset.category, Asset.status)
        .order_by(Asset.category)
    )
