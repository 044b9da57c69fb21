#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import Identity, get_identity
from storefront.data.database import get_db
from storefront.domain.schemas import (
    AddToCartIn,
    CartItemOut,
    CartOut,
    ClearCartOut,
    MessageOut,
    OrderOut,
    ShippingDetailsIn,
    UpdateCartItemIn,
)
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_my_cart(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return get_service(db).get_my_cart(identity.user_id)


@router.post("/add", response_model=CartItemOut, status_code=201)
def add_item(
    payload: AddToCartIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return get_service(db).add_item(
        user_id=identity.user_id,
        variant_id=payload.variant_id,
        quantity=payload.quantity,
        front_design=payload.front_design,
        back_design=payload.back_design,
        front_preview_url=payload.front_preview_url,
        back_preview_url=payload.back_preview_url,
    )


@router.patch("/item/{item_id}", response_model=CartItemOut)
def update_item(
    item_id: int,
    payload: UpdateCartItemIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return get_service(db).update_item(
        identity.user_id,
        item_id,
        payload.quantity,
        front_design=payload.front_design,
        back_design=payload.back_design,
    )


@router.delete("/item/{item_id}", response_model=MessageOut)
def remove_item(item_id: int, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    get_service(db).remove_item(identity.user_id, item_id)
    return {"message": "Item deleted successfully"}


@router.delete("/clear", response_model=ClearCartOut)
def clear_cart(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    deleted = get_service(db).clear_cart(identity.user_id)
    return {"message": "Cart cleared", "deleted": deleted}


@router.post("/checkout", response_model=OrderOut, status_code=201)
def checkout(
    payload: ShippingDetailsIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """
    Zamienia koszyk w zamowienie (jedna transakcja) i oproznia koszyk.
    """
    return CheckoutService(db).convert_cart_to_order(identity.user_id, payload.model_dump())
