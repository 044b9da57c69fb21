from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import OrderStatus, PaymentStatus, Role
from storefront.domain.errors import InvalidInput, NotFound, PermissionDenied, UnknownVariant
from storefront.domain.schemas import OrderCreate, OrderUpdate
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService


@pytest.fixture()
def orders(db):
    return OrderService(db)


@pytest.fixture()
def place_order(db, make_variant):
    def _place(user, name="Ali", phone="+998901234567", region=None, address=None, price=1000, quantity=1):
        variant = make_variant(price)
        CartService(db).add_item(user.id, variant.id, quantity)
        details = {"customer_name": name, "customer_phone": phone, "region": region, "address": address}
        return CheckoutService(db).convert_cart_to_order(user.id, details)

    return _place


def _manual(user_id, variant_id, *lines):
    return OrderCreate(
        user_id=user_id,
        customer_name="Manual",
        customer_phone="+998907777777",
        items=[{"variant_id": variant_id, "quantity": qty, "price": price} for qty, price in lines],
    )


class TestManualOrder:
    def test_total_comes_from_caller_prices(self, orders, db, alice, make_variant):
        variant = make_variant(1000)

        order = orders.create_order(_manual(alice.id, variant.id, (2, Decimal("750")), (1, Decimal("10.50"))))

        assert order.total_price == Decimal("1510.50")
        assert [i.price for i in order.items] == [Decimal("750"), Decimal("10.50")]
        assert order.region == "Unknown"

    def test_does_not_touch_cart(self, orders, db, alice, make_variant):
        variant = make_variant(1000)
        CartService(db).add_item(alice.id, variant.id, 1)

        orders.create_order(_manual(alice.id, variant.id, (1, Decimal("1"))))

        assert len(CartService(db).get_my_cart(alice.id)["items"]) == 1

    def test_unknown_variant(self, orders, alice):
        with pytest.raises(UnknownVariant):
            orders.create_order(_manual(alice.id, 999, (1, Decimal("1"))))


class TestReadAccess:
    def test_owner_can_read(self, orders, alice, place_order):
        order = place_order(alice)
        assert orders.get_order_for(order.id, alice.id, Role.USER).id == order.id

    def test_other_user_is_denied(self, orders, alice, bob, place_order):
        order = place_order(alice)
        with pytest.raises(PermissionDenied):
            orders.get_order_for(order.id, bob.id, Role.USER)

    def test_admin_can_read_any(self, orders, alice, admin, place_order):
        order = place_order(alice)
        assert orders.get_order_for(order.id, admin.id, Role.ADMIN).id == order.id

    def test_missing_order(self, orders):
        with pytest.raises(NotFound):
            orders.get_order(12345)

    def test_user_history_is_newest_first(self, orders, db, alice, bob, place_order):
        first = place_order(alice)
        second = place_order(alice)
        place_order(bob)
        db.get(OrderModel, first.id).created_at = datetime.now(timezone.utc) - timedelta(days=1)
        db.commit()

        history = orders.find_user_orders(alice.id)

        assert [o.id for o in history] == [second.id, first.id]

    def test_order_carries_customer(self, orders, alice, place_order):
        order = place_order(alice)

        loaded = orders.get_order(order.id)

        assert loaded.user.id == alice.id
        assert loaded.user.full_name == "Alice"

    def test_print_details(self, orders, alice, place_order):
        order = place_order(alice, name="Ali", region="Tashkent", price=1000, quantity=2)

        printable = orders.get_print_details(order.id)

        assert printable.user.phone == "+998901111111"
        assert printable.items[0].variant.product.name == "T-shirt"
        assert printable.total_price == Decimal("2000")

    def test_print_details_missing_order(self, orders):
        with pytest.raises(NotFound):
            orders.get_print_details(12345)


class TestFindAll:
    def test_pagination_meta(self, orders, alice, place_order):
        for _ in range(3):
            place_order(alice)

        page = orders.find_all(page=2, limit=2)

        assert len(page["data"]) == 1
        assert page["meta"] == {"total": 3, "page": 2, "last_page": 2, "per_page": 2}

    def test_search_is_case_insensitive_over_shipping_fields(self, orders, alice, place_order):
        place_order(alice, name="Ali Valiyev", region="Tashkent")
        place_order(alice, name="Bobur", phone="+998935555555", address="Samarkand, Registan 5")

        assert len(orders.find_all(search="tashKENT")["data"]) == 1
        assert len(orders.find_all(search="registan")["data"]) == 1
        assert len(orders.find_all(search="5555")["data"]) == 1
        assert len(orders.find_all(search="nobody")["data"]) == 0

    def test_search_wildcards_are_literal(self, orders, alice, place_order):
        place_order(alice, name="Ali")
        place_order(alice, name="Bobur")
        discounted = place_order(alice, name="Sale 50%_off")

        assert orders.find_all(search="%")["meta"]["total"] == 1
        assert [o.id for o in orders.find_all(search="50%_")["data"]] == [discounted.id]
        assert orders.find_all(search="_")["meta"]["total"] == 1

    def test_filter_by_status(self, orders, alice, place_order):
        confirmed = place_order(alice)
        place_order(alice)
        orders.change_status(confirmed.id, OrderStatus.CONFIRMED)

        result = orders.find_all(status=OrderStatus.CONFIRMED)

        assert [o.id for o in result["data"]] == [confirmed.id]

    def test_filter_by_payment_status(self, orders, alice, place_order):
        paid = place_order(alice)
        place_order(alice)
        orders.change_payment_status(paid.id, PaymentStatus.PAID)

        assert [o.id for o in orders.find_all(payment_status=PaymentStatus.PAID)["data"]] == [paid.id]

    def test_sort_by_total_ascending(self, orders, alice, place_order):
        place_order(alice, price=300)
        place_order(alice, price=100)
        place_order(alice, price=200)

        result = orders.find_all(sort_by="totalPrice", sort_order="asc")

        assert [o.total_price for o in result["data"]] == [Decimal("100"), Decimal("200"), Decimal("300")]

    def test_unknown_sort_column(self, orders):
        with pytest.raises(InvalidInput):
            orders.find_all(sort_by="password")


class TestUpdate:
    def test_items_are_replaced_and_total_recomputed(self, orders, db, alice, place_order, make_variant):
        order = place_order(alice, price=1000, quantity=2)
        variant = make_variant(1)

        patch = OrderUpdate(
            address="Chilonzor 9",
            items=[{"variant_id": variant.id, "quantity": 3, "price": Decimal("40")}],
        )
        updated = orders.update(order.id, patch)

        assert updated.address == "Chilonzor 9"
        assert updated.total_price == Decimal("120")
        assert [(i.variant_id, i.quantity, i.price) for i in updated.items] == [(variant.id, 3, Decimal("40"))]
        assert db.query(OrderItemModel).filter_by(order_id=order.id).count() == 1

    def test_invalid_status_in_patch_rolls_back_other_fields(self, orders, alice, place_order):
        order = place_order(alice)

        with pytest.raises(InvalidInput):
            orders.update(order.id, OrderUpdate(customer_name="Changed", status=OrderStatus.DELIVERED))

        assert orders.get_order(order.id).customer_name == "Ali"


class TestTransitions:
    def test_lifecycle(self, orders, alice, place_order):
        order = place_order(alice)

        for status in (OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            order = orders.change_status(order.id, status)

        assert order.status == "DELIVERED"

    def test_terminal_status_cannot_change(self, orders, alice, place_order):
        order = place_order(alice)
        orders.change_status(order.id, OrderStatus.CANCELLED)

        with pytest.raises(InvalidInput):
            orders.change_status(order.id, OrderStatus.CONFIRMED)

    def test_same_status_is_noop(self, orders, alice, place_order):
        order = place_order(alice)
        assert orders.change_status(order.id, OrderStatus.PENDING).status == "PENDING"

    def test_payment_refund_needs_paid(self, orders, alice, place_order):
        order = place_order(alice)

        with pytest.raises(InvalidInput):
            orders.change_payment_status(order.id, PaymentStatus.REFUNDED)

        orders.change_payment_status(order.id, PaymentStatus.PAID)
        assert orders.change_payment_status(order.id, PaymentStatus.REFUNDED).payment_status == "REFUNDED"

    def test_status_change_keeps_items_and_total(self, orders, alice, place_order):
        order = place_order(alice, price=250, quantity=4)

        changed = orders.change_status(order.id, OrderStatus.CONFIRMED)

        assert changed.total_price == Decimal("1000")
        assert [(i.quantity, i.price) for i in changed.items] == [(4, Decimal("250"))]


class TestRemove:
    def test_remove_deletes_items(self, orders, db, alice, place_order):
        order_id = place_order(alice).id

        orders.remove(order_id)

        assert db.query(OrderModel).count() == 0
        assert db.query(OrderItemModel).count() == 0
        with pytest.raises(NotFound):
            orders.remove(order_id)
