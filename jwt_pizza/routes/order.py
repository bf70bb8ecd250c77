from typing import List

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, condecimal
from sqlalchemy.orm import Session

from jwt_pizza.core.authz import require_authenticated, require_role
from jwt_pizza.core.database import get_db
from jwt_pizza.core.roles import AuthUser, Role
from jwt_pizza.services import order_service


router = APIRouter()

docs = [
    {"method": "GET", "path": "/api/order/menu", "requiresAuth": False, "description": "Get the pizza menu"},
    {"method": "PUT", "path": "/api/order/menu", "requiresAuth": True, "description": "Add an item to the menu"},
    {"method": "GET", "path": "/api/order", "requiresAuth": True, "description": "Get the orders for the authenticated user"},
    {"method": "POST", "path": "/api/order", "requiresAuth": True, "description": "Create a order for the authenticated user"},
]


class MenuItemCreate(BaseModel):
    title: str
    description: str = ""
    image: str = ""
    price: condecimal(max_digits=10, decimal_places=4) = 0


class OrderItemIn(BaseModel):
    menuId: int
    description: str = ""
    price: condecimal(max_digits=10, decimal_places=4) = 0


class OrderCreate(BaseModel):
    franchiseId: int
    storeId: int
    items: List[OrderItemIn]


@router.get("/menu")
def get_menu(db: Session = Depends(get_db)):
    return order_service.get_menu(db)


@router.put("/menu")
def add_menu_item(
    data: MenuItemCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_role(Role.admin)),
):
    order_service.add_menu_item(db, data.title, data.description, data.image, data.price)
    return order_service.get_menu(db)


@router.get("")
def get_orders(
    request: Request,
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_authenticated),
):
    orders, more = order_service.get_orders(db, user.id, page, request.app.state.settings.list_per_page)
    return {"dinerId": user.id, "orders": orders, "page": page, "more": more}


@router.post("")
def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(require_authenticated),
):
    items = [{"menu_id": i.menuId, "description": i.description, "price": i.price} for i in data.items]
    order = order_service.add_diner_order(db, user.id, data.franchiseId, data.storeId, items)
    return {"order": order}
