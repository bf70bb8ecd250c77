from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends

from jwt_pizza.core.deps import get_current_user
from jwt_pizza.core.errors import Forbidden, Unauthorized
from jwt_pizza.core.roles import AuthUser, Role, has_role


@dataclass(frozen=True)
class AnyAuthenticated:
    def is_satisfied_by(self, user: AuthUser) -> bool:
        return True


@dataclass(frozen=True)
class HasRole:
    role: Any

    def is_satisfied_by(self, user: AuthUser) -> bool:
        return has_role(user, self.role)


@dataclass(frozen=True)
class IsSelfOrRole:
    target_user_id: int
    role: Any = Role.admin

    def is_satisfied_by(self, user: AuthUser) -> bool:
        return user.id == int(self.target_user_id) or has_role(user, self.role)


@dataclass(frozen=True)
class IsFranchiseAdminOrRole:
    franchise_id: int
    role: Any = Role.admin

    def is_satisfied_by(self, user: AuthUser) -> bool:
        return user.is_franchise_admin(self.franchise_id) or has_role(user, self.role)


def is_authorized(user: Optional[AuthUser], requirement) -> bool:
    return user is not None and requirement.is_satisfied_by(user)


def authorize(user: Optional[AuthUser], requirement) -> AuthUser:
    """Return the user when the requirement holds, otherwise raise Forbidden."""
    if not is_authorized(user, requirement):
        raise Forbidden()
    return user


def require_authenticated(user: Optional[AuthUser] = Depends(get_current_user)) -> AuthUser:
    if user is None:
        raise Unauthorized()
    return user


def require_role(role: Any):
    def dependency(user: AuthUser = Depends(require_authenticated)) -> AuthUser:
        return authorize(user, HasRole(role))

    return dependency
