from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional


class Role(str, Enum):
    diner = "diner"
    franchisee = "franchisee"
    admin = "admin"


@dataclass(frozen=True)
class RoleAssignment:
    role: str
    object_id: Optional[int] = None

    def to_claim(self) -> dict[str, Any]:
        claim: dict[str, Any] = {"role": self.role}
        if self.object_id is not None:
            claim["objectId"] = self.object_id
        return claim

    @classmethod
    def from_claim(cls, claim: dict[str, Any]) -> "RoleAssignment":
        object_id = claim.get("objectId")
        return cls(role=str(claim["role"]), object_id=int(object_id) if object_id is not None else None)


def _role_name(role: Any) -> str:
    return role.value if isinstance(role, Role) else str(role)


@dataclass(frozen=True)
class AuthUser:
    """Identity decoded from a session token, as attached to the request."""

    id: int
    name: str
    email: str
    roles: frozenset = frozenset()

    def has_role(self, role: Any) -> bool:
        return has_role(self, role)

    def is_franchise_admin(self, franchise_id: int) -> bool:
        return RoleAssignment(Role.franchisee.value, int(franchise_id)) in self.roles

    def to_claims(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "roles": [r.to_claim() for r in sorted(self.roles, key=lambda r: (r.role, r.object_id or 0))],
        }

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthUser":
        return cls(
            id=int(claims["id"]),
            name=claims.get("name") or "",
            email=claims.get("email") or "",
            roles=frozenset(RoleAssignment.from_claim(c) for c in claims.get("roles") or []),
        )

    @classmethod
    def build(cls, id: int, name: str, email: str, roles: Iterable[RoleAssignment]) -> "AuthUser":
        return cls(id=id, name=name, email=email, roles=frozenset(roles))


def has_role(user: Optional[AuthUser], role: Any) -> bool:
    """Role membership by name only; franchise scoping is ignored."""
    if user is None:
        return False
    name = _role_name(role)
    return any(r.role == name for r in user.roles)
