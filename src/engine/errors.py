"""Exceptions raised by the financing engine."""


class FinancingError(Exception):
    """Base class for all engine errors."""


class ValidationError(FinancingError, ValueError):
    """Input rejected before any computation runs."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AmortizationDomainError(FinancingError, ArithmeticError):
    """Computation left the domain of the closed-form formulas (log of a non-positive value etc.)."""
