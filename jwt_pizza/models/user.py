from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan", lazy="selectin")


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", "object_id", name="uq_user_roles_assignment"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=False)
    # Franchise id for franchisee assignments, NULL otherwise
    object_id = Column(Integer, nullable=True, index=True)

    user = relationship("User", back_populates="roles")


class AuthToken(Base):
    __tablename__ = "auth_tokens"

    # Signature segment of an active session token
    token = Column(String(512), primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
