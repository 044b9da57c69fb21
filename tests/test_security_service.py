import pytest

from storefront.domain.enums import Role
from storefront.domain.errors import InvalidInput, PermissionDenied
from storefront.services.security_service import (
    assert_is_super_admin,
    assert_ownership,
    assert_role,
    has_role,
    validate_role_assignment,
)


def test_ownership_passes_silently_for_owner():
    assert assert_ownership(7, 7, "cart") is None


def test_ownership_rejects_other_user():
    with pytest.raises(PermissionDenied) as exc:
        assert_ownership(7, 8, "order")
    assert "your own order" in exc.value.message


@pytest.mark.parametrize(
    "caller, minimum, allowed",
    [
        (Role.USER, Role.USER, True),
        (Role.USER, Role.ADMIN, False),
        (Role.ADMIN, Role.ADMIN, True),
        (Role.ADMIN, Role.SUPER_ADMIN, False),
        (Role.SUPER_ADMIN, Role.ADMIN, True),
    ],
)
def test_role_hierarchy(caller, minimum, allowed):
    assert has_role(caller, minimum) is allowed
    if allowed:
        assert_role(caller, minimum)
    else:
        with pytest.raises(PermissionDenied):
            assert_role(caller, minimum)


def test_role_accepts_plain_strings():
    assert has_role("ADMIN", Role.USER)


def test_super_admin_check_is_exact():
    assert_is_super_admin(Role.SUPER_ADMIN)
    with pytest.raises(PermissionDenied):
        assert_is_super_admin(Role.ADMIN)


def test_role_assignment_validation():
    assert validate_role_assignment("ADMIN") is Role.ADMIN
    with pytest.raises(InvalidInput):
        validate_role_assignment("OWNER")
