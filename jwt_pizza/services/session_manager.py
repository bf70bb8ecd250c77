from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from passlib.context import CryptContext

from jwt_pizza.core.errors import AuthFailed
from jwt_pizza.core.roles import AuthUser, Role, RoleAssignment
from jwt_pizza.core.security import TokenCodec, extract_signature, hash_password, verify_password
from jwt_pizza.models import User
from jwt_pizza.services.credential_store import CredentialStore


logger = logging.getLogger(__name__)


class SessionManager:
    """
    Login, logout and active-session checks.

    Holds only immutable collaborators; every call receives the request-scoped
    credential store, so the active token records live entirely in storage.
    """

    def __init__(self, codec: TokenCodec, password_context: CryptContext):
        self.codec = codec
        self.password_context = password_context

    def hash_password(self, password: str) -> str:
        return hash_password(self.password_context, password)

    def resolve_user(self, store: CredentialStore, user: User) -> AuthUser:
        return AuthUser.build(user.id, user.name, user.email, store.get_roles_for_user(user.id))

    def issue(self, store: CredentialStore, user: AuthUser) -> str:
        claims = user.to_claims()
        # iat and jti make every issued token, and so its signature, distinct
        claims["iat"] = datetime.now(timezone.utc)
        claims["jti"] = uuid.uuid4().hex
        token = self.codec.sign(claims)
        # Raises before the token is handed out if the record cannot be written
        store.insert_active_token(extract_signature(token), user.id)
        return token

    def login(self, store: CredentialStore, email: str, password: str) -> Tuple[AuthUser, str]:
        user = store.find_user_by_email(email)
        if user is None or not verify_password(self.password_context, password, user.hashed_password):
            logger.info("login rejected")
            raise AuthFailed()
        auth_user = self.resolve_user(store, user)
        token = self.issue(store, auth_user)
        logger.info("login user_id=%s", auth_user.id)
        return auth_user, token

    def register(self, store: CredentialStore, name: str, email: str, password: str) -> Tuple[AuthUser, str]:
        user = store.create_user(name, email, self.hash_password(password), [RoleAssignment(Role.diner.value)])
        auth_user = self.resolve_user(store, user)
        logger.info("registered user_id=%s", auth_user.id)
        return auth_user, self.issue(store, auth_user)

    def logout(self, store: CredentialStore, token: str) -> None:
        store.delete_active_token(extract_signature(token))

    def is_active(self, store: CredentialStore, token: Optional[str]) -> bool:
        if not token:
            return False
        return store.active_token_exists(extract_signature(token))
