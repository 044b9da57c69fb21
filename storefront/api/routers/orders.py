# storefront/api/routers/orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import Identity, get_identity, require_admin
from storefront.data.database import get_db
from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.domain.schemas import (
    MessageOut,
    OrderCreate,
    OrderOut,
    OrderPage,
    OrderUpdate,
    PaymentStatusChangeIn,
    StatusChangeIn,
)
from storefront.services.order_service import OrderService
from storefront.utils.settings import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=OrderPage)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    sort_by: str = Query("created_at", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    status: Optional[OrderStatus] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None, alias="paymentStatus"),
    search: Optional[str] = Query(None),
    user_id: Optional[int] = Query(None, alias="userId"),
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).find_all(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        status=status,
        payment_status=payment_status,
        search=search,
        user_id=user_id,
    )


@router.get("/my", response_model=List[OrderOut])
def my_orders(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    """
    Historia zamowien zalogowanego uzytkownika, najnowsze pierwsze.
    """
    return get_service(db).find_user_orders(identity.user_id)


@router.get("/{order_id}/print", response_model=OrderOut)
def print_order(order_id: int, identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return get_service(db).get_print_details(order_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return get_service(db).get_order_for(order_id, identity.user_id, identity.role)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Reczne zamowienie z gotowych pozycji, bez koszyka.
    """
    return get_service(db).create_order(payload)


@router.patch("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).update(order_id, payload)


@router.patch("/{order_id}/status", response_model=OrderOut)
def change_status(
    order_id: int,
    payload: StatusChangeIn,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).change_status(order_id, payload.status)


@router.patch("/{order_id}/payment-status", response_model=OrderOut)
def change_payment_status(
    order_id: int,
    payload: PaymentStatusChangeIn,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).change_payment_status(order_id, payload.payment_status)


@router.delete("/{order_id}", response_model=MessageOut)
def delete_order(order_id: int, identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return get_service(db).remove(order_id)
