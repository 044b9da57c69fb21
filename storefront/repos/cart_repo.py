# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.catalog import VariantModel


class CartRepo:
    """Repo nie commituje - granice transakcji ustala serwis."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int, for_update: bool = False) -> CartModel | None:
        stmt = select(CartModel).where(CartModel.user_id == user_id)
        if for_update:
            #blokada wiersza koszyka na czas checkout
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .options(selectinload(CartItemModel.variant).selectinload(VariantModel.product))
            .order_by(CartItemModel.id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_item(self, item_id: int) -> CartItemModel | None:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.id == item_id)
            .options(
                selectinload(CartItemModel.cart),
                selectinload(CartItemModel.variant).selectinload(VariantModel.product),
            )
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
        )
        return result.rowcount or 0
