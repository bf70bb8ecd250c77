from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from jwt_pizza.models.user import Base


class DinerOrder(Base):
    __tablename__ = "diner_orders"

    id = Column(Integer, primary_key=True, index=True)
    diner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    franchise_id = Column(Integer, nullable=False, index=True)
    store_id = Column(Integer, nullable=False, index=True)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", lazy="selectin")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("diner_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(Integer, nullable=False)
    description = Column(String(1024), nullable=False, default="")
    price = Column(Numeric(10, 4), nullable=False, default=0)

    order = relationship("DinerOrder", back_populates="items")
