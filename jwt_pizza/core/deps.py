import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from jwt_pizza.core.database import get_db
from jwt_pizza.core.errors import InvalidToken
from jwt_pizza.core.roles import AuthUser
from jwt_pizza.core.security import TokenCodec
from jwt_pizza.services.credential_store import SqlCredentialStore
from jwt_pizza.services.session_manager import SessionManager


logger = logging.getLogger(__name__)


def get_store(db: Session = Depends(get_db)) -> SqlCredentialStore:
    return SqlCredentialStore(db)


def get_codec(request: Request) -> TokenCodec:
    return request.app.state.codec


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def read_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()


def resolve_user(
    authorization: Optional[str],
    codec: TokenCodec,
    sessions: SessionManager,
    store: SqlCredentialStore,
) -> Optional[AuthUser]:
    """Return the token's user, or None for anything short of a verified, active token."""
    token = read_bearer_token(authorization)
    if token is None:
        return None
    try:
        claims = codec.verify(token)
        if not sessions.is_active(store, token):
            logger.debug("token not active")
            return None
        return AuthUser.from_claims(claims)
    except InvalidToken:
        logger.debug("invalid token presented")
        return None
    except Exception as exc:
        logger.warning("authentication degraded to anonymous: %s", exc.__class__.__name__)
        return None


def set_auth_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    store: SqlCredentialStore = Depends(get_store),
) -> None:
    request.state.user = resolve_user(
        authorization,
        get_codec(request),
        get_session_manager(request),
        store,
    )


def get_current_user(request: Request) -> Optional[AuthUser]:
    return getattr(request.state, "user", None)
