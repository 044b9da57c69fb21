# storefront/services/checkout_service.py
from typing import Any, Dict, Iterable

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import UNKNOWN, OrderStatus, PaymentStatus
from storefront.domain.errors import CartEmpty
from storefront.domain.pricing import PricedLine, compute_total
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.pricing_service import PricingResolver
from storefront.services.security_service import assert_ownership
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def shipping_snapshot(details: Dict[str, Any]) -> Dict[str, str]:
    """Dane wysylki zapisywane w zamowieniu. Brakujacy region/adres -> "Unknown"."""
    return {
        "customer_name": details["customer_name"],
        "customer_phone": details["customer_phone"],
        "region": details.get("region") or UNKNOWN,
        "address": details.get("address") or details.get("delivery_address") or UNKNOWN,
    }


def build_order(user_id: int, shipping: Dict[str, Any], lines: Iterable[PricedLine]) -> OrderModel:
    """
    Buduje agregat zamowienia z linii o zamrozonych cenach.
    total_price jest zawsze suma price * quantity tych samych linii.
    """
    lines = list(lines)
    order = OrderModel(
        user_id=user_id,
        status=OrderStatus.PENDING.value,
        payment_status=PaymentStatus.PENDING.value,
        total_price=compute_total(lines),
        **shipping_snapshot(shipping),
    )
    order.items = [order_item_from_line(line) for line in lines]
    return order


def order_item_from_line(line: PricedLine) -> OrderItemModel:
    return OrderItemModel(
        variant_id=line.variant_id,
        quantity=line.quantity,
        price=line.price,
        front_design=line.front_design,
        back_design=line.back_design,
        front_preview_url=line.front_preview_url,
        back_preview_url=line.back_preview_url,
    )


class CheckoutService:
    """
    Zamiana koszyka w zamowienie.

    Wszystko w jednej transakcji: odczyt koszyka (z blokada wiersza), wycena
    z aktualnego katalogu, zapis Order + OrderItems, usuniecie CartItems.
    Jakikolwiek blad = rollback, koszyk zostaje nietkniety i zamowienia nie ma.
    """

    def __init__(self, db: Session, pricing: PricingResolver | None = None):
        self.db = db
        self.cart_repo = CartRepo(db)
        self.order_repo = OrderRepo(db)
        self.pricing = pricing or PricingResolver(db)

    def convert_cart_to_order(self, user_id: int, shipping_details: Dict[str, Any]) -> OrderModel:
        with transaction(self.db, integrity_as_conflict=False):
            # 1. koszyk + pozycje, wiersz koszyka zablokowany do konca transakcji
            cart = self.cart_repo.get_cart_by_user(user_id, for_update=True)
            if cart is None:
                raise CartEmpty()
            assert_ownership(user_id, cart.user_id, "cart")

            items = self.cart_repo.get_cart_items(cart.id)
            if not items:
                raise CartEmpty()

            # 2. ceny z katalogu, nie z koszyka
            lines = self.pricing.price_cart_items(items)

            # 3 + 4. zamowienie z zamrozonymi cenami
            order = self.order_repo.add_order(build_order(user_id, shipping_details, lines))

            # 5. koszyk zostaje, pozycje znikaja
            removed = self.cart_repo.clear_items(cart.id)
            order_id = order.id
            cart_id = cart.id

        logger.info(
            f"Order {order_id} created from cart {cart_id} for user {user_id}, "
            f"{removed} items moved"
        )
        return self.order_repo.get_order(order_id)
