# storefront/services/security_service.py
from storefront.domain.enums import ROLE_RANK, Role
from storefront.domain.errors import InvalidInput, PermissionDenied
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def assert_ownership(caller_id: int, resource_owner_id: int, resource_label: str = "resource") -> None:
    """Uzytkownik ma dostep tylko do wlasnych zasobow."""
    if caller_id != resource_owner_id:
        logger.warning(
            f"Ownership check failed: user {caller_id} tried to access {resource_label} "
            f"of user {resource_owner_id}"
        )
        raise PermissionDenied(f"Access denied: You can only access your own {resource_label}")


def has_role(caller_role: Role, minimum_role: Role) -> bool:
    return ROLE_RANK[Role(caller_role)] >= ROLE_RANK[Role(minimum_role)]


def assert_role(caller_role: Role, minimum_role: Role) -> None:
    if not has_role(caller_role, minimum_role):
        raise PermissionDenied(f"Insufficient permissions: Required {Role(minimum_role).value} role")


def assert_is_super_admin(caller_role: Role) -> None:
    if Role(caller_role) != Role.SUPER_ADMIN:
        raise PermissionDenied("Insufficient permissions: Required SUPER_ADMIN role")


def validate_role_assignment(role) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise InvalidInput(f"Invalid role: {role}") from None
