# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.domain.enums import OrderStatus, PaymentStatus, Role

# projekt dowolny, przekazywany bez walidacji
DesignPayload = Dict[str, Any]


class ApiModel(BaseModel):
    """JSON w camelCase, w Pythonie snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ProductOut(ApiModel):
    id: int
    name: str
    description: str | None = None


class VariantOut(ApiModel):
    id: int
    product_id: int
    size: str | None = None
    color: str | None = None
    price: Decimal
    product: ProductOut | None = None


class LineItem(ApiModel):
    """Wspolny ksztalt linii koszyka i zamowienia."""

    variant_id: int = Field(..., gt=0, description="ID wariantu produktu")
    quantity: int = Field(..., ge=1, description="Ilosc (co najmniej 1)")
    front_design: Optional[DesignPayload] = None
    back_design: Optional[DesignPayload] = None
    front_preview_url: Optional[str] = None
    back_preview_url: Optional[str] = None


# ---------------------------------------------------------------- cart


class AddToCartIn(LineItem):
    quantity: int = Field(1, ge=1, description="Ilosc (co najmniej 1)")


class UpdateCartItemIn(ApiModel):
    quantity: int = Field(..., ge=1, description="Nowa ilosc (co najmniej 1)")
    front_design: Optional[DesignPayload] = None
    back_design: Optional[DesignPayload] = None


class CartItemOut(LineItem):
    """Linia koszyka - bez zamrozonej ceny."""

    id: int
    cart_id: int
    variant: VariantOut | None = None


class CartLineOut(CartItemOut):
    unit_price: Decimal
    subtotal: Decimal


class CartOut(ApiModel):
    cart_id: int
    user_id: int
    items: List[CartLineOut]
    total: Decimal


class ClearCartOut(ApiModel):
    message: str
    deleted: int


# ---------------------------------------------------------------- orders


class ShippingDetailsIn(ApiModel):
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: str = Field(..., min_length=1, max_length=50)
    region: Optional[str] = None
    address: Optional[str] = None
    delivery_address: Optional[str] = None


class OrderItemIn(LineItem):
    price: Decimal = Field(..., ge=0, description="Cena jednostkowa podana przez administratora")


class OrderCreate(ApiModel):
    """Reczne zamowienie (panel admina), bez koszyka."""

    user_id: int = Field(..., gt=0)
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: str = Field(..., min_length=1, max_length=50)
    region: Optional[str] = None
    address: Optional[str] = None
    delivery_address: Optional[str] = None
    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderUpdate(ApiModel):
    customer_name: Optional[str] = Field(None, min_length=1, max_length=200)
    customer_phone: Optional[str] = Field(None, min_length=1, max_length=50)
    region: Optional[str] = None
    address: Optional[str] = None
    items: Optional[List[OrderItemIn]] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None


class StatusChangeIn(ApiModel):
    status: OrderStatus


class PaymentStatusChangeIn(ApiModel):
    payment_status: PaymentStatus


class OrderItemOut(LineItem):
    """Linia zamowienia - cena zamrozona."""

    id: int
    price: Decimal
    variant: VariantOut | None = None


class UserBrief(ApiModel):
    """Dane kontaktowe zamawiajacego dolaczane do zamowienia."""

    id: int
    full_name: str
    email: str | None = None
    phone: str | None = None


class OrderOut(ApiModel):
    id: int
    user_id: int
    user: UserBrief | None = None
    status: OrderStatus
    payment_status: PaymentStatus
    total_price: Decimal
    customer_name: str
    customer_phone: str
    region: str
    address: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemOut]


class PageMeta(ApiModel):
    total: int
    page: int
    last_page: int
    per_page: int


class OrderPage(ApiModel):
    data: List[OrderOut]
    meta: PageMeta


# ---------------------------------------------------------------- users


class UserCreate(ApiModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Role = Role.USER
    is_active: bool = True


class UserRead(ApiModel):
    id: int
    full_name: str
    email: str | None = None
    phone: str | None = None
    role: Role
    is_active: bool


class RoleUpdate(ApiModel):
    role: str


# ---------------------------------------------------------------- assets


class AssetOut(ApiModel):
    id: int
    url: str
    user_id: int
    created_at: datetime


class MessageOut(ApiModel):
    message: str
