from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from jwt_pizza.core.errors import Conflict, NotFound
from jwt_pizza.core.roles import Role, RoleAssignment
from jwt_pizza.models import DinerOrder, Franchise, Store, User, UserRole
from jwt_pizza.services.credential_store import SqlCredentialStore


logger = logging.getLogger(__name__)


def _admins_for(db: Session, franchise_id: int) -> List[Dict[str, Any]]:
    rows = (
        db.query(User)
        .join(UserRole, UserRole.user_id == User.id)
        .filter(UserRole.role == Role.franchisee.value, UserRole.object_id == franchise_id)
        .order_by(User.id)
        .all()
    )
    return [{"id": u.id, "name": u.name, "email": u.email} for u in rows]


def _store_revenue(db: Session, store_id: int) -> float:
    orders = db.query(DinerOrder).filter(DinerOrder.store_id == store_id).all()
    return float(sum(item.price for order in orders for item in order.items))


def franchise_out(db: Session, franchise: Franchise, detailed: bool = False) -> Dict[str, Any]:
    stores = []
    for store in franchise.stores:
        entry: Dict[str, Any] = {"id": store.id, "name": store.name}
        if detailed:
            entry["totalRevenue"] = _store_revenue(db, store.id)
        stores.append(entry)
    out: Dict[str, Any] = {"id": franchise.id, "name": franchise.name, "stores": stores}
    if detailed:
        out["admins"] = _admins_for(db, franchise.id)
    return out


def list_franchises(db: Session, skip: int, limit: int, name: Optional[str] = None, detailed: bool = False) -> Tuple[List[Dict[str, Any]], bool]:
    query = db.query(Franchise)
    if name and name != "*":
        query = query.filter(Franchise.name.like(name.replace("*", "%")))
    rows = query.order_by(Franchise.id).offset(skip).limit(limit + 1).all()
    return [franchise_out(db, f, detailed) for f in rows[:limit]], len(rows) > limit


def user_franchises(db: Session, user_id: int) -> List[Dict[str, Any]]:
    ids = [
        object_id
        for (object_id,) in db.query(UserRole.object_id)
        .filter(UserRole.user_id == user_id, UserRole.role == Role.franchisee.value)
        .all()
        if object_id is not None
    ]
    if not ids:
        return []
    franchises = db.query(Franchise).filter(Franchise.id.in_(ids)).order_by(Franchise.id).all()
    return [franchise_out(db, f, detailed=True) for f in franchises]


def create_franchise(db: Session, name: str, admin_emails: List[str]) -> Dict[str, Any]:
    store = SqlCredentialStore(db)
    admins = []
    for email in admin_emails:
        admin = store.find_user_by_email(email)
        if admin is None:
            raise NotFound(f"unknown user for franchise admin {email} provided")
        admins.append(admin)
    if db.query(Franchise).filter(Franchise.name == name).first():
        raise Conflict("franchise already exists")

    franchise = Franchise(name=name)
    db.add(franchise)
    db.flush()
    for admin in admins:
        store.add_role(admin.id, RoleAssignment(Role.franchisee.value, franchise.id))
    db.commit()
    db.refresh(franchise)
    logger.info("created franchise id=%s admins=%s", franchise.id, len(admins))
    return franchise_out(db, franchise, detailed=True)


def delete_franchise(db: Session, franchise_id: int) -> None:
    franchise = db.get(Franchise, franchise_id)
    if franchise is None:
        return
    db.query(UserRole).filter(
        UserRole.role == Role.franchisee.value,
        UserRole.object_id == franchise_id,
    ).delete(synchronize_session=False)
    db.delete(franchise)
    db.commit()


def create_store(db: Session, franchise_id: int, name: str) -> Dict[str, Any]:
    if db.get(Franchise, franchise_id) is None:
        raise NotFound("franchise not found")
    store = Store(franchise_id=franchise_id, name=name)
    db.add(store)
    db.commit()
    db.refresh(store)
    return {"id": store.id, "franchiseId": store.franchise_id, "name": store.name}


def delete_store(db: Session, franchise_id: int, store_id: int) -> None:
    db.query(Store).filter(Store.franchise_id == franchise_id, Store.id == store_id).delete(synchronize_session=False)
    db.commit()
