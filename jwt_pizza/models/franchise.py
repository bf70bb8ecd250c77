from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from jwt_pizza.models.user import Base


class Franchise(Base):
    __tablename__ = "franchises"
    __table_args__ = (UniqueConstraint("name", name="uq_franchises_name"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    stores = relationship("Store", back_populates="franchise", cascade="all, delete-orphan", lazy="selectin")


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    franchise_id = Column(Integer, ForeignKey("franchises.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    franchise = relationship("Franchise", back_populates="stores")
