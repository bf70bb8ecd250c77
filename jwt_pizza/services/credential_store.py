from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jwt_pizza.core.errors import Conflict, StorageUnavailable
from jwt_pizza.core.roles import RoleAssignment
from jwt_pizza.models import AuthToken, User, UserRole


logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    def create_user(self, name: str, email: str, hashed_password: str, roles: List[RoleAssignment]) -> User: ...

    def find_user_by_email(self, email: str) -> Optional[User]: ...

    def find_user_by_id(self, user_id: int) -> Optional[User]: ...

    def get_roles_for_user(self, user_id: int) -> List[RoleAssignment]: ...

    def insert_active_token(self, signature: str, user_id: int) -> None: ...

    def delete_active_token(self, signature: str) -> None: ...

    def active_token_exists(self, signature: str) -> bool: ...


class SqlCredentialStore:
    """SQLAlchemy-backed users, role assignments and active token records."""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, exc: SQLAlchemyError) -> StorageUnavailable:
        self.db.rollback()
        logger.error("credential store %s failed: %s", action, exc.__class__.__name__)
        return StorageUnavailable(f"unable to {action}")

    def create_user(self, name: str, email: str, hashed_password: str, roles: List[RoleAssignment]) -> User:
        try:
            if self.db.query(User).filter(User.email == email).first():
                raise Conflict("email already registered")
            user = User(name=name, email=email, hashed_password=hashed_password)
            user.roles = [UserRole(role=r.role, object_id=r.object_id) for r in set(roles)]
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict("email already registered") from exc
        except SQLAlchemyError as exc:
            raise self._fail("create user", exc) from exc

    def find_user_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as exc:
            raise self._fail("find user", exc) from exc

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            raise self._fail("find user", exc) from exc

    def get_roles_for_user(self, user_id: int) -> List[RoleAssignment]:
        try:
            rows = self.db.execute(
                select(UserRole.role, UserRole.object_id).where(UserRole.user_id == user_id)
            ).all()
        except SQLAlchemyError as exc:
            raise self._fail("load roles", exc) from exc
        return sorted({RoleAssignment(role, object_id) for role, object_id in rows}, key=lambda r: (r.role, r.object_id or 0))

    def add_role(self, user_id: int, assignment: RoleAssignment) -> None:
        try:
            exists = (
                self.db.query(UserRole)
                .filter(
                    UserRole.user_id == user_id,
                    UserRole.role == assignment.role,
                    UserRole.object_id.is_(None) if assignment.object_id is None else UserRole.object_id == assignment.object_id,
                )
                .first()
            )
            if not exists:
                self.db.add(UserRole(user_id=user_id, role=assignment.role, object_id=assignment.object_id))
                self.db.flush()
        except SQLAlchemyError as exc:
            raise self._fail("add role", exc) from exc

    def update_user(self, user_id: int, name: Optional[str], email: Optional[str], hashed_password: Optional[str]) -> Optional[User]:
        try:
            user = self.db.get(User, user_id)
            if user is None:
                return None
            if email and email != user.email:
                if self.db.query(User).filter(User.email == email, User.id != user_id).first():
                    raise Conflict("email already registered")
                user.email = email
            if name:
                user.name = name
            if hashed_password:
                user.hashed_password = hashed_password
            self.db.commit()
            self.db.refresh(user)
            return user
        except SQLAlchemyError as exc:
            raise self._fail("update user", exc) from exc

    def delete_user(self, user_id: int) -> bool:
        try:
            user = self.db.get(User, user_id)
            if user is None:
                return False
            self.db.delete(user)
            self.db.commit()
            return True
        except SQLAlchemyError as exc:
            raise self._fail("delete user", exc) from exc

    def list_users(self, skip: int, limit: int, name: Optional[str] = None) -> Tuple[List[User], bool]:
        try:
            query = self.db.query(User)
            if name and name != "*":
                query = query.filter(User.name.like(name.replace("*", "%")))
            rows = query.order_by(User.id).offset(skip).limit(limit + 1).all()
        except SQLAlchemyError as exc:
            raise self._fail("list users", exc) from exc
        return rows[:limit], len(rows) > limit

    def insert_active_token(self, signature: str, user_id: int) -> None:
        try:
            self.db.add(AuthToken(token=signature, user_id=user_id))
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("record session", exc) from exc

    def delete_active_token(self, signature: str) -> None:
        try:
            self.db.query(AuthToken).filter(AuthToken.token == signature).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("remove session", exc) from exc

    def active_token_exists(self, signature: str) -> bool:
        if not signature:
            return False
        try:
            return self._token_exists(signature)
        except SQLAlchemyError as exc:
            raise self._fail("check session", exc) from exc

    def _token_exists(self, signature: str) -> bool:
        return self.db.query(AuthToken.token).filter(AuthToken.token == signature).first() is not None
