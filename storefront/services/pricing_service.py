# storefront/services/pricing_service.py
from decimal import Decimal
from typing import Iterable, List

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import UnknownVariant
from storefront.domain.pricing import PricedLine
from storefront.repos.catalog_repo import CatalogRepo


class PricingResolver:
    """
    Jedyne zrodlo cen: aktualny wiersz wariantu w katalogu.
    Cena podana przez klienta nigdy nie jest ostateczna.
    """

    def __init__(self, db: Session):
        self.catalog = CatalogRepo(db)

    def resolve_unit_price(self, variant_id: int) -> Decimal:
        variant = self.catalog.get_variant(variant_id)
        if variant is None:
            raise UnknownVariant(variant_id)
        return Decimal(variant.price)

    def price_cart_items(self, items: Iterable[CartItemModel]) -> List[PricedLine]:
        #kazda linia osobno przez resolver, zadnych cen z koszyka
        return [
            PricedLine(
                variant_id=item.variant_id,
                quantity=item.quantity,
                price=self.resolve_unit_price(item.variant_id),
                front_design=item.front_design,
                back_design=item.back_design,
                front_preview_url=item.front_preview_url,
                back_preview_url=item.back_preview_url,
            )
            for item in items
        ]
