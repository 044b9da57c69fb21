from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.user import UserModel
from storefront.domain.enums import Role
from storefront.domain.errors import Conflict, NotFound, PermissionDenied
from storefront.domain.schemas import UserCreate
from storefront.repos.user_repo import UserRepo
from storefront.services.security_service import assert_is_super_admin, validate_role_assignment
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate, requester_role: Role | None = None) -> UserModel:
        if payload.role == Role.SUPER_ADMIN:
            raise PermissionDenied("Cannot create SUPER_ADMIN users")
        #role wyzsze niz USER nadaje tylko SUPER_ADMIN
        if requester_role is not None and payload.role != Role.USER:
            assert_is_super_admin(requester_role)

        if self.repo.find_by_contact(payload.email, payload.phone):
            raise Conflict("User with this email or phone already exists")

        with transaction(self.db):
            user = self.repo.create_user(
                UserModel(
                    full_name=payload.full_name,
                    email=payload.email,
                    phone=payload.phone,
                    role=payload.role.value,
                    is_active=payload.is_active,
                )
            )

        logger.info(f"Created user {user.id} with role {payload.role.value}")
        return user

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound(f"User with ID {user_id} not found")
        return user

    def ensure_super_admin(self) -> UserModel:
        """Tworzy jedynego SUPER_ADMIN jesli jeszcze go nie ma."""
        existing = self.repo.get_super_admin()
        if existing:
            logger.info("Super admin already exists")
            return existing

        with transaction(self.db):
            user = self.repo.create_user(
                UserModel(
                    full_name=settings.SUPER_ADMIN_NAME,
                    email=settings.SUPER_ADMIN_EMAIL,
                    phone=settings.SUPER_ADMIN_PHONE,
                    role=Role.SUPER_ADMIN.value,
                    is_active=True,
                )
            )

        logger.info(f"Super admin created with ID {user.id}")
        return user

    def promote_user(self, user_id: int, new_role: str, requesting_user_id: int) -> UserModel:
        target = self.get_user(user_id)

        # rola SUPER_ADMIN nigdy sie nie zmienia
        if target.role == Role.SUPER_ADMIN.value:
            raise PermissionDenied("Cannot change the role of the existing SUPER_ADMIN user")

        requesting = self.repo.get_user(requesting_user_id)
        if not requesting:
            raise NotFound(f"Requesting user with ID {requesting_user_id} not found")

        assert_is_super_admin(requesting.role)

        role = validate_role_assignment(new_role)
        if role == Role.SUPER_ADMIN:
            raise PermissionDenied("The SUPER_ADMIN role is unique and cannot be assigned")

        with transaction(self.db):
            target.role = role.value

        logger.info(f"User {user_id} promoted to {role.value} by {requesting_user_id}")
        return self.get_user(user_id)

    def remove_user(self, user_id: int) -> dict:
        user = self.get_user(user_id)
        if user.role == Role.SUPER_ADMIN.value:
            raise PermissionDenied("Cannot delete SUPER_ADMIN users")

        with transaction(self.db):
            self.repo.delete_user(user)

        logger.info(f"User {user_id} deleted")
        return {"message": f"User with ID {user_id} has been deleted"}
