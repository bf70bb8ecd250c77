from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, EmailStr
from sqlalchemy.orm import Session

from jwt_pizza.core.authz import IsFranchiseAdminOrRole, IsSelfOrRole, authorize, is_authorized, require_authenticated, require_role
from jwt_pizza.core.database import get_db
from jwt_pizza.core.deps import get_current_user
from jwt_pizza.core.roles import AuthUser, Role, has_role
from jwt_pizza.services import franchise_service


router = APIRouter()

docs = [
    {"method": "GET", "path": "/api/franchise?page=0&limit=10&name=*", "requiresAuth": False, "description": "List all the franchises"},
    {"method": "GET", "path": "/api/franchise/:userId", "requiresAuth": True, "description": "List a user's franchises"},
    {"method": "POST", "path": "/api/franchise", "requiresAuth": True, "description": "Create a new franchise"},
    {"method": "DELETE", "path": "/api/franchise/:franchiseId", "requiresAuth": True, "description": "Delete a franchise"},
    {"method": "POST", "path": "/api/franchise/:franchiseId/store", "requiresAuth": True, "description": "Create a new franchise store"},
    {"method": "DELETE", "path": "/api/franchise/:franchiseId/store/:storeId", "requiresAuth": True, "description": "Delete a store"},
]


class AdminRef(BaseModel):
    email: EmailStr


class FranchiseCreate(BaseModel):
    name: str
    admins: List[AdminRef] = []


class StoreCreate(BaseModel):
    name: str


@router.get("")
def list_franchises(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    name: str = Query("*"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    franchises, more = franchise_service.list_franchises(
        db, (page - 1) * limit, limit, name, detailed=has_role(user, Role.admin)
    )
    return {"franchises": franchises, "more": more}


@router.get("/{user_id}")
def list_user_franchises(
    user_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_authenticated),
):
    # Other users' franchises are not disclosed, the list is just empty
    if not is_authorized(user, IsSelfOrRole(user_id, Role.admin)):
        return []
    return franchise_service.user_franchises(db, user_id)


@router.post("")
def create_franchise(
    data: FranchiseCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_role(Role.admin)),
):
    return franchise_service.create_franchise(db, data.name, [a.email for a in data.admins])


@router.delete("/{franchise_id}")
def delete_franchise(
    franchise_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_role(Role.admin)),
):
    franchise_service.delete_franchise(db, franchise_id)
    return {"message": "franchise deleted"}


@router.post("/{franchise_id}/store")
def create_store(
    franchise_id: int,
    data: StoreCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_authenticated),
):
    authorize(user, IsFranchiseAdminOrRole(franchise_id, Role.admin))
    return franchise_service.create_store(db, franchise_id, data.name)


@router.delete("/{franchise_id}/store/{store_id}")
def delete_store(
    franchise_id: int,
    store_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_authenticated),
):
    authorize(user, IsFranchiseAdminOrRole(franchise_id, Role.admin))
    franchise_service.delete_store(db, franchise_id, store_id)
    return {"message": "store deleted"}
