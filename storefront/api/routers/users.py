from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import Identity, get_identity, require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, RoleUpdate, UserCreate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead, status_code=201)
def create_user(
    payload: UserCreate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserService(db).create_user(payload, identity.role)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)


@router.patch("/{user_id}/role", response_model=UserRead)
def promote_user(
    user_id: int,
    payload: RoleUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return UserService(db).promote_user(user_id, payload.role, identity.user_id)


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserService(db).remove_user(user_id)
