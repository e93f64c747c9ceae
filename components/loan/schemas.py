"""Pydantic schemas for loan data validation."""

from decimal import Decimal

from pydantic import BaseModel, field_serializer, field_validator

from components.core.validators import enum_member
from components.loan.enums import Currency, LoanStatus, LoanType, Period
from components.loan.models import Loan

LOAN_TYPE_MESSAGE = "LoanType must be a valid enum value. Use 0 for Fast, 1 for Auto, or 2 for Installement."
CURRENCY_MESSAGE = "Currency must be a valid enum value. Use 0 for USD, 1 for EUR, or 2 for GEL."
PERIOD_MESSAGE = "Period must be a valid enum value. Use 0 for OneMonth, 1 for ThreeMonth, or 2 for SixMonth."
AMOUNT_MESSAGE = "Amount must be a positive value greater than 0."


class LoanRequest(BaseModel):
    """Schema for a loan request submitted or edited by its owner."""
    loan_type: LoanType
    amount: Decimal
    currency: Currency
    period: Period

    @field_validator("loan_type", mode="before")
    @classmethod
    def validate_loan_type(cls, value):
        return enum_member(LoanType, value, LOAN_TYPE_MESSAGE)

    @field_validator("currency", mode="before")
    @classmethod
    def validate_currency(cls, value):
        return enum_member(Currency, value, CURRENCY_MESSAGE)

    @field_validator("period", mode="before")
    @classmethod
    def validate_period(cls, value):
        return enum_member(Period, value, PERIOD_MESSAGE)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise ValueError(AMOUNT_MESSAGE)
        return value


class LoanResponse(BaseModel):
    """Schema for loan response."""
    loan_id: int
    loan_type: LoanType
    amount: Decimal
    currency: Currency
    period: Period
    loan_status: LoanStatus

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)

    @classmethod
    def from_model(cls, loan: Loan) -> "LoanResponse":
        return cls(
            loan_id=loan.id,
            loan_type=loan.loan_type,
            amount=loan.amount,
            currency=loan.currency,
            period=loan.period,
            loan_status=loan.status,
        )
