from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, EmailStr

from jwt_pizza.core.authz import IsSelfOrRole, authorize, require_authenticated, require_role
from jwt_pizza.core.deps import get_session_manager, get_store
from jwt_pizza.core.errors import NotFound
from jwt_pizza.core.roles import AuthUser, Role
from jwt_pizza.routes.auth import SessionResponse, UserOut, session_response
from jwt_pizza.services.credential_store import SqlCredentialStore
from jwt_pizza.services.session_manager import SessionManager


router = APIRouter()

docs = [
    {"method": "GET", "path": "/api/user/me", "requiresAuth": True, "description": "Get authenticated user"},
    {"method": "PUT", "path": "/api/user/:userId", "requiresAuth": True, "description": "Update user"},
    {"method": "DELETE", "path": "/api/user/:userId", "requiresAuth": True, "description": "Delete user"},
    {"method": "GET", "path": "/api/user?page=1&limit=10&name=*", "requiresAuth": True, "description": "Gets a list of users"},
]


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserListResponse(BaseModel):
    users: List[UserOut]
    more: bool


@router.get("/me", response_model=UserOut)
def get_me(user: AuthUser = Depends(require_authenticated)):
    return UserOut(**user.to_claims())


@router.put("/{user_id}", response_model=SessionResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    user: AuthUser = Depends(require_authenticated),
    store: SqlCredentialStore = Depends(get_store),
    sessions: SessionManager = Depends(get_session_manager),
):
    authorize(user, IsSelfOrRole(user_id, Role.admin))
    hashed = sessions.hash_password(data.password) if data.password else None
    updated = store.update_user(user_id, data.name, data.email, hashed)
    if updated is None:
        raise NotFound("user not found")
    auth_user = sessions.resolve_user(store, updated)
    return session_response(auth_user, sessions.issue(store, auth_user))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    user: AuthUser = Depends(require_authenticated),
    store: SqlCredentialStore = Depends(get_store),
):
    authorize(user, IsSelfOrRole(user_id, Role.admin))
    if not store.delete_user(user_id):
        raise NotFound("user not found")
    return {"message": "user deleted"}


@router.get("", response_model=UserListResponse)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    name: str = Query("*"),
    user: AuthUser = Depends(require_role(Role.admin)),
    store: SqlCredentialStore = Depends(get_store),
):
    users, more = store.list_users((page - 1) * limit, limit, name)
    out = [UserOut(id=u.id, name=u.name, email=u.email, roles=[r.to_claim() for r in store.get_roles_for_user(u.id)]) for u in users]
    return UserListResponse(users=out, more=more)
