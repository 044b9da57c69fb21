# storefront/services/order_service.py
import math
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_snake
from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.domain.enums import (
    ORDER_TRANSITIONS,
    PAYMENT_TRANSITIONS,
    OrderStatus,
    PaymentStatus,
    Role,
)
from storefront.domain.errors import InvalidInput, NotFound
from storefront.domain.pricing import PricedLine, compute_total, validate_quantity
from storefront.domain.schemas import OrderCreate, OrderItemIn, OrderUpdate
from storefront.repos.order_repo import OrderRepo
from storefront.services.checkout_service import build_order, order_item_from_line
from storefront.services.pricing_service import PricingResolver
from storefront.services.security_service import assert_ownership, has_role
from storefront.utils.logging import get_logger
from storefront.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = get_logger(__name__)

SORTABLE_COLUMNS = {column.key for column in OrderModel.__table__.columns}


def lines_from_input(items: List[OrderItemIn]) -> List[PricedLine]:
    lines = []
    for item in items:
        validate_quantity(item.quantity)
        if item.price < 0:
            raise InvalidInput("Price must not be negative")
        lines.append(
            PricedLine(
                variant_id=item.variant_id,
                quantity=item.quantity,
                price=item.price,
                front_design=item.front_design,
                back_design=item.back_design,
                front_preview_url=item.front_preview_url,
                back_preview_url=item.back_preview_url,
            )
        )
    return lines


class OrderService:
    """
    Serwis odpowiedzialny za zamowienia po ich utworzeniu.
    Separacja od CheckoutService: tu nie ma koszyka.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.pricing = PricingResolver(db)

    #query
    def get_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound(f"Order with ID {order_id} not found")
        return order

    def get_print_details(self, order_id: int) -> OrderModel:
        """Zamowienie do wydruku: pozycje z wariantem i produktem, kontakt klienta."""
        order = self.get_order(order_id)
        logger.info(f"Print details requested for order {order_id}")
        return order

    def get_order_for(self, order_id: int, user_id: int, role: Role) -> OrderModel:
        """Wlasciciel albo ADMIN i wyzej."""
        order = self.get_order(order_id)
        if not has_role(role, Role.ADMIN):
            assert_ownership(user_id, order.user_id, "order")
        return order

    def find_all(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        status: Optional[OrderStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
        search: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        if page < 1:
            raise InvalidInput("Page must be at least 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise InvalidInput(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        sort_by = to_snake(sort_by)
        if sort_by not in SORTABLE_COLUMNS:
            raise InvalidInput(f"Cannot sort by {sort_by}")
        if sort_order not in ("asc", "desc"):
            raise InvalidInput("Sort order must be 'asc' or 'desc'")

        filters = {}
        if status:
            filters["status"] = OrderStatus(status).value
        if payment_status:
            filters["payment_status"] = PaymentStatus(payment_status).value
        if user_id:
            filters["user_id"] = user_id

        orders, total = self.repo.list_orders(
            filters=filters,
            search=search,
            sort_column=OrderModel.__table__.columns[sort_by],
            descending=sort_order == "desc",
            offset=(page - 1) * limit,
            limit=limit,
        )

        return {
            "data": orders,
            "meta": {
                "total": total,
                "page": page,
                "last_page": math.ceil(total / limit),
                "per_page": limit,
            },
        }

    def find_user_orders(self, user_id: int) -> List[OrderModel]:
        return self.repo.list_user_orders(user_id)

    #commands
    def create_order(self, payload: OrderCreate) -> OrderModel:
        """
        Reczne zamowienie (admin). Ceny od wywolujacego, koszyk nie jest ruszany.
        Total liczony tak samo jak przy checkout.
        """
        lines = lines_from_input(payload.items)
        for line in lines:
            # wariant musi istniec, cena zostaje ta podana
            self.pricing.resolve_unit_price(line.variant_id)

        shipping = payload.model_dump(include={"customer_name", "customer_phone", "region", "address", "delivery_address"})
        with transaction(self.db):
            order = self.repo.add_order(build_order(payload.user_id, shipping, lines))
            order_id = order.id

        logger.info(f"Manual order {order_id} created for user {payload.user_id}")
        return self.get_order(order_id)

    def update(self, order_id: int, patch: OrderUpdate) -> OrderModel:
        order = self.get_order(order_id)
        lines = lines_from_input(patch.items) if patch.items is not None else None
        fields = patch.model_dump(
            include={"customer_name", "customer_phone", "region", "address"},
            exclude_unset=True,
            exclude_none=True,
        )

        with transaction(self.db):
            for name, value in fields.items():
                setattr(order, name, value)

            if patch.status is not None:
                self._apply_status(order, patch.status)
            if patch.payment_status is not None:
                self._apply_payment_status(order, patch.payment_status)

            if lines is not None:
                #total i pozycje w tej samej transakcji
                order.total_price = compute_total(lines)
                self.repo.replace_items(order, [order_item_from_line(line) for line in lines])
            self.db.flush()

        logger.info(f"Order {order_id} updated: fields={sorted(fields)}, items_replaced={lines is not None}")
        return self.get_order(order_id)

    def change_status(self, order_id: int, status: OrderStatus) -> OrderModel:
        order = self.get_order(order_id)
        with transaction(self.db):
            self._apply_status(order, status)
        return self.get_order(order_id)

    def change_payment_status(self, order_id: int, payment_status: PaymentStatus) -> OrderModel:
        order = self.get_order(order_id)
        with transaction(self.db):
            self._apply_payment_status(order, payment_status)
        return self.get_order(order_id)

    def remove(self, order_id: int) -> Dict[str, str]:
        order = self.get_order(order_id)

        with transaction(self.db):
            self.repo.delete_order(order)

        logger.info(f"Order {order_id} deleted")
        return {"message": f"Order with ID {order_id} has been deleted"}

    def _apply_status(self, order: OrderModel, status: OrderStatus) -> None:
        current, target = OrderStatus(order.status), OrderStatus(status)
        if current == target:
            return
        if target not in ORDER_TRANSITIONS[current]:
            raise InvalidInput(f"Cannot change order status from {current.value} to {target.value}")
        order.status = target.value
        logger.info(f"Order {order.id} status {current.value} -> {target.value}")

    def _apply_payment_status(self, order: OrderModel, payment_status: PaymentStatus) -> None:
        current, target = PaymentStatus(order.payment_status), PaymentStatus(payment_status)
        if current == target:
            return
        if target not in PAYMENT_TRANSITIONS[current]:
            raise InvalidInput(
                f"Cannot change payment status from {current.value} to {target.value}"
            )
        order.payment_status = target.value
        logger.info(f"Order {order.id} payment status {current.value} -> {target.value}")
