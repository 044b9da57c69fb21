from decimal import Decimal

import pytest

from storefront.domain.errors import InvalidInput, UnknownVariant
from storefront.domain.pricing import PricedLine, compute_total, validate_quantity
from storefront.services.pricing_service import PricingResolver


def test_total_is_sum_of_price_times_quantity():
    lines = [
        PricedLine(variant_id=1, quantity=2, price=Decimal("1000")),
        PricedLine(variant_id=2, quantity=1, price=Decimal("500")),
        PricedLine(variant_id=3, quantity=3, price=Decimal("0.10")),
    ]
    assert compute_total(lines) == Decimal("2500.30")


def test_total_of_nothing_is_zero():
    assert compute_total([]) == Decimal("0.00")


def test_priced_line_is_frozen():
    line = PricedLine(variant_id=1, quantity=1, price=Decimal("5"))
    with pytest.raises(AttributeError):
        line.price = Decimal("1")


@pytest.mark.parametrize("quantity", [0, -1, None])
def test_quantity_bound(quantity):
    with pytest.raises(InvalidInput):
        validate_quantity(quantity)


def test_resolver_reads_current_price(db, make_variant):
    variant = make_variant(1000)
    resolver = PricingResolver(db)
    assert resolver.resolve_unit_price(variant.id) == Decimal("1000")

    variant.price = Decimal("1250.50")
    db.commit()

    assert resolver.resolve_unit_price(variant.id) == Decimal("1250.50")


def test_resolver_unknown_variant(db):
    with pytest.raises(UnknownVariant) as exc:
        PricingResolver(db).resolve_unit_price(77)
    assert exc.value.variant_id == 77
