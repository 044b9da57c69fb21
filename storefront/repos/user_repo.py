from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.enums import Role


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def find_by_contact(self, email: str | None, phone: str | None) -> UserModel | None:
        conditions = []
        if email:
            conditions.append(UserModel.email == email)
        if phone:
            conditions.append(UserModel.phone == phone)
        if not conditions:
            return None
        return self.db.execute(select(UserModel).where(or_(*conditions)).limit(1)).scalar_one_or_none()

    def get_super_admin(self) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.role == Role.SUPER_ADMIN.value).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def delete_user(self, user: UserModel) -> None:
        self.db.delete(user)
        self.db.flush()
