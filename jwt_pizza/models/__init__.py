from .user import Base, User, UserRole, AuthToken
from .menu import MenuItem
from .franchise import Franchise, Store
from .order import DinerOrder, OrderItem

__all__ = ["Base", "User", "UserRole", "AuthToken", "MenuItem", "Franchise", "Store", "DinerOrder", "OrderItem"]
