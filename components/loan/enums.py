"""Loan enumerations. Values are the ordinals used on the wire."""

import enum


class LoanType(enum.IntEnum):
    FAST = 0
    AUTO = 1
    INSTALLMENT = 2


class Currency(enum.IntEnum):
    USD = 0
    EUR = 1
    GEL = 2


class Period(enum.IntEnum):
    ONE_MONTH = 0
    THREE_MONTH = 1
    SIX_MONTH = 2


class LoanStatus(enum.IntEnum):
    IN_PROGRESS = 0
    APPROVED = 1
    DENIED = 2

    @property
    def label(self) -> str:
        """Lower-cased status name as shown in messages, e.g. ``inprogress``."""
        return self.name.replace("_", "").lower()
