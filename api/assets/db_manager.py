# api/assets/db_manager.py
"""
Business logic for the asset inventory.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset
from .models import AssetPayload
from . import queries


class AssetNotFoundError(Exception):
    """Raised when asset doesn't exist."""
    pass


class DuplicateTagError(Exception):
    """Raised when another asset already carries the tag."""
    pass


async def list_assets(db: AsyncSession) -> list[Asset]:
    result = await db.execute(queries.select_all_assets())
    return list(result.scalars().all())


async def upsert_asset(db: AsyncSession, payload: AssetPayload) -> Asset:
    """
    Insert the asset, or overwrite every column of the existing one.

    Raises:
        DuplicateTagError: If a different asset already uses the tag
    """
    result = await db.execute(queries.select_asset_by_tag(payload.tag))
    clash = result.scalar_one_or_none()
    if clash is not None and clash.id != payload.id:
        raise DuplicateTagError(f"Asset tag '{payload.tag}' already exists")

    values = payload.model_dump(mode="python")
    values["status"] = payload.status.value
    values["condition"] = payload.condition.value

    asset = await db.get(Asset, payload.id)
    if asset is None:
        asset = Asset(**values)
        db.add(asset)
    else:
        for field, value in values.items():
            setattr(asset, field, value)

    await db.commit()
    await db.refresh(asset)
    return asset


async def delete_asset(db: AsyncSession, asset_id: str) -> None:
    """
    Delete an asset. Assignments and maintenance logs pointing at it are kept.

    Raises:
        AssetNotFoundError: If asset doesn't exist
    """
    asset = await db.get(Asset, asset_id)
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    await db.delete(asset)
    await db.commit()
