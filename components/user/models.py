"""User and credentials models for the database."""

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from components.core.access import Role
from components.core.database import Base


class Credentials(Base):
    """Login credentials owned by exactly one user."""
    __tablename__ = "credentials"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password

    user = relationship("User", back_populates="credentials", uselist=False)


class User(Base):
    """User model representing a borrower in the system."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False, default=0)
    email = Column(String(255), unique=True, nullable=False)
    salary = Column(Integer, nullable=False, default=0)
    is_blocked = Column(Boolean, nullable=False, default=False)
    role = Column(Enum(Role, values_callable=lambda roles: [role.value for role in roles]),
                  nullable=False, default=Role.USER)
    credentials_id = Column(Integer, ForeignKey("credentials.id"), nullable=True, unique=True)
    accountant_id = Column(Integer, ForeignKey("accountants.id"), nullable=True)

    # Relationships
    credentials = relationship(
        "Credentials", back_populates="user", cascade="all, delete-orphan", single_parent=True
    )
    loans = relationship(
        "Loan", back_populates="user", cascade="all, delete-orphan", order_by="Loan.id"
    )
    accountant = relationship("Accountant", back_populates="users")
