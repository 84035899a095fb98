"""Asset domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from dompet.database.base import Database
from dompet.domain.cache import ASSETS, DASHBOARD, QueryCache
from dompet.domain.entities import ASSET_TYPES
from dompet.domain.entities import Asset as AssetEntity
from dompet.domain.errors import NotFoundError, ValidationError, asset_not_found
from dompet.domain.validation import (
    optional_text,
    require_length,
    require_non_negative,
    require_not_future,
    require_positive,
)

NAME_MIN = 2
NAME_MAX = 100
DESCRIPTION_MAX = 255


def _check_type(asset_type: str) -> str:
    if asset_type not in ASSET_TYPES:
        raise ValidationError(
            f"Asset type '{asset_type}' must be one of: {', '.join(ASSET_TYPES)}"
        )
    return asset_type


class AssetService:
    """Service for managing owned assets."""

    def __init__(self, db: Database, cache: Optional[QueryCache] = None):
        """Initialize asset service.

        Args:
            db: Database instance
            cache: Query cache to invalidate after mutations
        """
        self.db = db
        self.cache = cache if cache is not None else QueryCache()

    def create_asset(
        self,
        name: str,
        type: str,
        purchase_value: Decimal,
        current_value: Decimal,
        purchase_date: date,
        description: Optional[str] = None,
    ) -> str:
        """Create an asset.

        Args:
            name: Asset name, 2 to 100 characters
            type: One of ASSET_TYPES
            purchase_value: Price paid, greater than 0
            current_value: Current estimated value, not negative
            purchase_date: Purchase date, not in the future
            description: Optional description

        Returns:
            Asset ID

        Raises:
            ValidationError: If a field is invalid
        """
        asset_id = self.db.create_asset(
            name=require_length(name, "Asset name", NAME_MIN, NAME_MAX),
            type=_check_type(type),
            purchase_value=require_positive(purchase_value, "Purchase value"),
            current_value=require_non_negative(current_value, "Current value"),
            purchase_date=require_not_future(purchase_date, "Purchase date"),
            description=optional_text(description, "Description", DESCRIPTION_MAX),
        )
        self.cache.invalidate(ASSETS, DASHBOARD)
        return asset_id

    def get_asset(self, asset_id: str) -> Optional[AssetEntity]:
        return self.db.get_asset(asset_id)

    def list_assets(self) -> list[AssetEntity]:
        return list(self.cache.fetch(QueryCache.key(ASSETS), self.db.list_assets))

    def update_asset(
        self,
        asset_id: str,
        name: Optional[str] = None,
        type: Optional[str] = None,
        purchase_value: Optional[Decimal] = None,
        current_value: Optional[Decimal] = None,
        purchase_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update asset fields that are given.

        Raises:
            NotFoundError: If the asset doesn't exist
            ValidationError: If a field is invalid
        """
        if self.db.get_asset(asset_id) is None:
            raise NotFoundError(asset_not_found(asset_id))

        self.db.update_asset(
            asset_id,
            name=None if name is None else require_length(name, "Asset name", NAME_MIN, NAME_MAX),
            type=None if type is None else _check_type(type),
            purchase_value=(
                None
                if purchase_value is None
                else require_positive(purchase_value, "Purchase value")
            ),
            current_value=(
                None
                if current_value is None
                else require_non_negative(current_value, "Current value")
            ),
            purchase_date=(
                None
                if purchase_date is None
                else require_not_future(purchase_date, "Purchase date")
            ),
            description=(
                None
                if description is None
                else optional_text(description, "Description", DESCRIPTION_MAX) or ""
            ),
        )
        self.cache.invalidate(ASSETS, DASHBOARD)

    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset.

        Raises:
            NotFoundError: If the asset doesn't exist
        """
        if self.db.get_asset(asset_id) is None:
            raise NotFoundError(asset_not_found(asset_id))
        self.db.delete_asset(asset_id)
        self.cache.invalidate(ASSETS, DASHBOARD)
