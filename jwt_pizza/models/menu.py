from sqlalchemy import Column, Integer, String, Numeric

from jwt_pizza.models.user import Base


class MenuItem(Base):
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=False, default="")
    image = Column(String(255), nullable=False, default="")
    price = Column(Numeric(10, 4), nullable=False, default=0)
