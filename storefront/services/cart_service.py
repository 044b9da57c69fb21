# storefront/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import Conflict, NotFound, PermissionDenied
from storefront.domain.pricing import validate_quantity
from storefront.domain.schemas import CartItemOut, DesignPayload
from storefront.repos.cart_repo import CartRepo
from storefront.services.pricing_service import PricingResolver
from storefront.services.security_service import assert_ownership
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka.
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt, cena zawsze liczona z aktualnego katalogu
    """

    def __init__(self, db: Session, pricing: PricingResolver | None = None):
        self.db = db
        self.repo = CartRepo(db)
        self.pricing = pricing or PricingResolver(db)

    #query - odczyt
    def get_my_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.get_or_create_cart(user_id)
        items = self.repo.get_cart_items(cart.id)
        lines = self.pricing.price_cart_items(items)

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {
                    **CartItemOut.model_validate(item).model_dump(),
                    "unit_price": line.price,
                    "subtotal": line.subtotal,
                }
                for item, line in zip(items, lines)
            ],
            "total": sum((line.subtotal for line in lines), Decimal("0.00")),
        }

    def get_item(self, user_id: int, item_id: int) -> CartItemModel:
        item = self.repo.get_item(item_id)
        if item is None:
            raise NotFound("Cart item not found")
        try:
            assert_ownership(user_id, item.cart.user_id, "cart item")
        except PermissionDenied:
            #nie zdradzamy ze cudzy item istnieje
            raise NotFound("Cart item not found") from None
        return item

    #commands
    def get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        try:
            with transaction(self.db):
                cart = self.repo.create_cart(CartModel(user_id=user_id))
        except Conflict:
            # koszyk utworzony rownolegle przez inne zadanie
            cart = self.repo.get_cart_by_user(user_id)
            if cart is None:
                raise
            return cart

        logger.info(f"Created cart {cart.id} for user {user_id}")
        return cart

    def add_item(
        self,
        user_id: int,
        variant_id: int,
        quantity: int,
        front_design: Optional[DesignPayload] = None,
        back_design: Optional[DesignPayload] = None,
        front_preview_url: Optional[str] = None,
        back_preview_url: Optional[str] = None,
    ) -> CartItemModel:
        validate_quantity(quantity)
        #wariant musi istniec, ale cena nie jest zapisywana w koszyku
        self.pricing.resolve_unit_price(variant_id)

        cart = self.get_or_create_cart(user_id)

        # zawsze nowa linia, bez scalania po wariancie
        with transaction(self.db):
            item = self.repo.add_item(
                CartItemModel(
                    cart_id=cart.id,
                    variant_id=variant_id,
                    quantity=quantity,
                    front_design=front_design,
                    back_design=back_design,
                    front_preview_url=front_preview_url,
                    back_preview_url=back_preview_url,
                )
            )

        logger.info(f"Added variant {variant_id} x{quantity} to cart {cart.id} as item {item.id}")
        return self.repo.get_item(item.id)

    def update_item(
        self,
        user_id: int,
        item_id: int,
        quantity: int,
        front_design: Optional[DesignPayload] = None,
        back_design: Optional[DesignPayload] = None,
    ) -> CartItemModel:
        validate_quantity(quantity)
        item = self.get_item(user_id, item_id)

        with transaction(self.db):
            item.quantity = quantity
            if front_design is not None:
                item.front_design = front_design
            if back_design is not None:
                item.back_design = back_design
            self.db.flush()

        logger.info(f"Updated cart item {item_id}: quantity={quantity}")
        return self.repo.get_item(item_id)

    def remove_item(self, user_id: int, item_id: int) -> None:
        item = self.get_item(user_id, item_id)

        with transaction(self.db):
            self.repo.delete_item(item)

        logger.info(f"Removed cart item {item_id} for user {user_id}")

    def clear_cart(self, user_id: int) -> int:
        cart = self.repo.get_cart_by_user(user_id)
        if cart is None:
            return 0

        assert_ownership(user_id, cart.user_id, "cart")

        with transaction(self.db):
            deleted = self.repo.clear_items(cart.id)

        logger.info(f"Cleared cart {cart.id}, removed {deleted} items")
        return deleted
