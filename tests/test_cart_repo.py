from unittest import mock

from sqlalchemy.dialects import postgresql

from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService


def _compiled_cart_lookup(for_update):
    session = mock.Mock()
    CartRepo(session).get_cart_by_user(7, for_update=for_update)
    stmt = session.execute.call_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


def test_cart_lookup_for_update_locks_row_on_postgres():
    sql = _compiled_cart_lookup(for_update=True)

    assert "FROM carts" in sql
    assert sql.rstrip().endswith("FOR UPDATE")


def test_plain_cart_lookup_does_not_lock():
    assert "FOR UPDATE" not in _compiled_cart_lookup(for_update=False)


def test_checkout_reads_cart_with_lock(db, alice, make_variant, monkeypatch):
    CartService(db).add_item(alice.id, make_variant(100).id, 1)
    calls = []
    original = CartRepo.get_cart_by_user

    def recording(self, user_id, for_update=False):
        calls.append(for_update)
        return original(self, user_id, for_update=for_update)

    monkeypatch.setattr(CartRepo, "get_cart_by_user", recording)

    CheckoutService(db).convert_cart_to_order(alice.id, {"customer_name": "Ali", "customer_phone": "+998901234567"})

    assert calls[0] is True
