from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from jwt_pizza.core.errors import NotFound
from jwt_pizza.models import DinerOrder, MenuItem, OrderItem, Store


def menu_out(item: MenuItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "image": item.image,
        "price": float(item.price),
    }


def get_menu(db: Session) -> List[Dict[str, Any]]:
    return [menu_out(m) for m in db.query(MenuItem).order_by(MenuItem.id).all()]


def add_menu_item(db: Session, title: str, description: str, image: str, price: Decimal) -> Dict[str, Any]:
    item = MenuItem(title=title, description=description, image=image, price=price)
    db.add(item)
    db.commit()
    db.refresh(item)
    return menu_out(item)


def order_out(order: DinerOrder) -> Dict[str, Any]:
    return {
        "id": order.id,
        "franchiseId": order.franchise_id,
        "storeId": order.store_id,
        "date": order.date.isoformat(),
        "items": [
            {"id": i.id, "menuId": i.menu_id, "description": i.description, "price": float(i.price)}
            for i in order.items
        ],
    }


def get_orders(db: Session, diner_id: int, page: int, limit: int) -> Tuple[List[Dict[str, Any]], bool]:
    rows = (
        db.query(DinerOrder)
        .filter(DinerOrder.diner_id == diner_id)
        .order_by(DinerOrder.id)
        .offset((page - 1) * limit)
        .limit(limit + 1)
        .all()
    )
    return [order_out(o) for o in rows[:limit]], len(rows) > limit


def add_diner_order(db: Session, diner_id: int, franchise_id: int, store_id: int, items: List[Dict[str, Any]]) -> Dict[str, Any]:
    if db.query(Store).filter(Store.id == store_id, Store.franchise_id == franchise_id).first() is None:
        raise NotFound("store not found")
    try:
        order = DinerOrder(diner_id=diner_id, franchise_id=franchise_id, store_id=store_id)
        for item in items:
            if db.get(MenuItem, item["menu_id"]) is None:
                raise NotFound("menu item not found")
            order.items.append(OrderItem(menu_id=item["menu_id"], description=item["description"], price=item["price"]))
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)
    return order_out(order)
