# storefront/domain/pricing.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from storefront.domain.errors import InvalidInput


@dataclass(frozen=True)
class PricedLine:
    """Linia zamowienia z zamrozona cena jednostkowa."""

    variant_id: int
    quantity: int
    price: Decimal
    front_design: Optional[Dict[str, Any]] = None
    back_design: Optional[Dict[str, Any]] = None
    front_preview_url: Optional[str] = None
    back_preview_url: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


def validate_quantity(quantity: int) -> None:
    if quantity is None or quantity < 1:
        raise InvalidInput("Quantity must be at least 1")


def compute_total(lines: Iterable[PricedLine]) -> Decimal:
    return sum((line.subtotal for line in lines), Decimal("0.00"))
