from decimal import Decimal

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from jwt_pizza.core.config import Settings
from jwt_pizza.core.roles import Role, RoleAssignment
from jwt_pizza.core.security import hash_password
from jwt_pizza.models import MenuItem
from jwt_pizza.services.credential_store import SqlCredentialStore


DEFAULT_MENU = [
    ("Veggie", "A garden of delight", "pizza1.png", "0.0038"),
    ("Pepperoni", "Spicy treat", "pizza2.png", "0.0042"),
    ("Margarita", "Essential classic", "pizza3.png", "0.0035"),
]


def seed_defaults(db: Session, settings: Settings, password_context: CryptContext) -> None:
    """Create the default admin and menu when the database is empty."""
    store = SqlCredentialStore(db)
    if store.find_user_by_email(settings.admin_email) is None:
        store.create_user(
            settings.admin_name,
            settings.admin_email,
            hash_password(password_context, settings.admin_password),
            [RoleAssignment(Role.admin.value)],
        )
    if db.query(MenuItem).first() is None:
        for title, description, image, price in DEFAULT_MENU:
            db.add(MenuItem(title=title, description=description, image=image, price=Decimal(price)))
        db.commit()
