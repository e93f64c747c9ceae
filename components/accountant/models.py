"""Accountant models for the database."""

from sqlalchemy import Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from components.core.access import Role
from components.core.database import Base


class AccountantCredentials(Base):
    """Login credentials owned by exactly one accountant."""
    __tablename__ = "accountant_credentials"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password

    accountant = relationship("Accountant", back_populates="credentials", uselist=False)


class Accountant(Base):
    """Accountant reviewing users and their loans."""
    __tablename__ = "accountants"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(Enum(Role, values_callable=lambda roles: [role.value for role in roles]),
                  nullable=False, default=Role.ACCOUNTANT)
    accountant_credentials_id = Column(
        Integer, ForeignKey("accountant_credentials.id"), nullable=True, unique=True
    )

    # Relationships
    credentials = relationship(
        "AccountantCredentials", back_populates="accountant",
        cascade="all, delete-orphan", single_parent=True
    )
    users = relationship("User", back_populates="accountant")
