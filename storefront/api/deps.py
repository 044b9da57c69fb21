# storefront/api/deps.py
from fastapi import Depends, Header
from pydantic import BaseModel

from storefront.domain.enums import Role
from storefront.services.security_service import assert_role


class Identity(BaseModel):
    """Kto wola - dostarczane przez warstwe uwierzytelniania przed serwisem."""

    user_id: int
    role: Role = Role.USER


def get_identity(
    x_user_id: int = Header(..., gt=0, description="ID uwierzytelnionego uzytkownika"),
    x_user_role: Role = Header(Role.USER, description="Rola uwierzytelnionego uzytkownika"),
) -> Identity:
    return Identity(user_id=x_user_id, role=x_user_role)


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    assert_role(identity.role, Role.ADMIN)
    return identity
