from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import Identity, get_identity
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemOut, MessageOut, UpdateCartItemIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart-items", tags=["cart items"])


@router.get("/{item_id}", response_model=CartItemOut)
def get_item(item_id: int, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return CartService(db).get_item(identity.user_id, item_id)


@router.patch("/{item_id}", response_model=CartItemOut)
def update_item(
    item_id: int,
    payload: UpdateCartItemIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return CartService(db).update_item(
        identity.user_id,
        item_id,
        payload.quantity,
        front_design=payload.front_design,
        back_design=payload.back_design,
    )


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(item_id: int, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    CartService(db).remove_item(identity.user_id, item_id)
    return {"message": "Item deleted successfully"}
