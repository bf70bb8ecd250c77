from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, EmailStr

from jwt_pizza.core.authz import require_authenticated
from jwt_pizza.core.deps import get_session_manager, get_store, read_bearer_token
from jwt_pizza.core.roles import AuthUser
from jwt_pizza.services.credential_store import SqlCredentialStore
from jwt_pizza.services.session_manager import SessionManager


router = APIRouter()

docs = [
    {"method": "POST", "path": "/api/auth", "requiresAuth": False, "description": "Register a new user"},
    {"method": "PUT", "path": "/api/auth", "requiresAuth": False, "description": "Login existing user"},
    {"method": "DELETE", "path": "/api/auth", "requiresAuth": True, "description": "Logout a user"},
]


class RoleOut(BaseModel):
    role: str
    objectId: int | None = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    roles: List[RoleOut]


class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SessionResponse(BaseModel):
    user: UserOut
    token: str


def session_response(user: AuthUser, token: str) -> SessionResponse:
    return SessionResponse(user=UserOut(**user.to_claims()), token=token)


@router.post("", response_model=SessionResponse)
def register(
    data: RegisterRequest,
    store: SqlCredentialStore = Depends(get_store),
    sessions: SessionManager = Depends(get_session_manager),
):
    user, token = sessions.register(store, data.name, data.email, data.password)
    return session_response(user, token)


@router.put("", response_model=SessionResponse)
def login(
    data: LoginRequest,
    store: SqlCredentialStore = Depends(get_store),
    sessions: SessionManager = Depends(get_session_manager),
):
    user, token = sessions.login(store, data.email, data.password)
    return session_response(user, token)


@router.delete("")
def logout(
    request: Request,
    user: AuthUser = Depends(require_authenticated),
    store: SqlCredentialStore = Depends(get_store),
    sessions: SessionManager = Depends(get_session_manager),
):
    token = read_bearer_token(request.headers.get("authorization"))
    sessions.logout(store, token)
    return {"message": "logout successful"}
