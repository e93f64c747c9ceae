"""Loan model for the database."""

from sqlalchemy import Column, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base
from components.loan.enums import Currency, LoanStatus, LoanType, Period


class Loan(Base):
    """Loan request submitted by a user."""
    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, index=True)
    loan_type = Column(Enum(LoanType), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)  # Sign is not constrained here
    currency = Column(Enum(Currency), nullable=False)
    period = Column(Enum(Period), nullable=False)
    status = Column(Enum(LoanStatus), nullable=False, default=LoanStatus.IN_PROGRESS)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="loans")
