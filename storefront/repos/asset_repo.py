# storefront/repos/asset_repo.py
from typing import List

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from storefront.data.models.asset import AssetModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order_item import OrderItemModel


class AssetRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_asset(self, asset_id: int) -> AssetModel | None:
        return self.db.get(AssetModel, asset_id)

    def list_for_user(self, user_id: int) -> List[AssetModel]:
        stmt = select(AssetModel).where(AssetModel.user_id == user_id).order_by(AssetModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def create_asset(self, asset: AssetModel) -> AssetModel:
        self.db.add(asset)
        self.db.flush()
        return asset

    def delete_asset(self, asset: AssetModel) -> None:
        self.db.delete(asset)
        self.db.flush()

    def count_preview_usage(self, url: str) -> tuple[int, int]:
        # dopasowanie po podciagu (contains), nie po rownosci
        cart_items = self.db.execute(
            select(func.count(CartItemModel.id)).where(
                or_(
                    CartItemModel.front_preview_url.contains(url, autoescape=True),
                    CartItemModel.back_preview_url.contains(url, autoescape=True),
                )
            )
        ).scalar_one()
        order_items = self.db.execute(
            select(func.count(OrderItemModel.id)).where(
                or_(
                    OrderItemModel.front_preview_url.contains(url, autoescape=True),
                    OrderItemModel.back_preview_url.contains(url, autoescape=True),
                )
            )
        ).scalar_one()
        return cart_items, order_items
