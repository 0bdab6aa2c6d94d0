"""Fail-fast input checks shared by the schedule, balance and early-payment engines.

Every check raises ValidationError before any arithmetic runs, so callers never
see a partially computed result.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.config import settings
from src.engine.errors import ValidationError
from src.models.financing import AmortizationMethod, EarlyPaymentPreference, LoanTerms


def _finite_decimal(value: Decimal, field: str) -> Decimal:
    if not isinstance(value, (Decimal, int)) or isinstance(value, bool):
        raise ValidationError(f"{field} must be a Decimal, got {type(value).__name__}", field)
    value = Decimal(value)
    if not value.is_finite():
        raise ValidationError(f"{field} must be finite", field)
    return value


def validate_principal(principal: Decimal, field: str = "principal") -> Decimal:
    principal = _finite_decimal(principal, field)
    if principal <= 0:
        raise ValidationError(f"{field} must be positive", field)
    if principal > settings.max_principal:
        raise ValidationError(f"{field} exceeds {settings.max_principal}", field)
    return principal


def validate_rate(annual_rate: Decimal, allow_zero: bool = False) -> Decimal:
    annual_rate = _finite_decimal(annual_rate, "annual_interest_rate")
    if annual_rate < 0 or (annual_rate == 0 and not allow_zero):
        raise ValidationError("annual_interest_rate must be positive", "annual_interest_rate")
    if annual_rate > settings.max_annual_interest_rate:
        raise ValidationError(
            f"annual_interest_rate exceeds {settings.max_annual_interest_rate}",
            "annual_interest_rate",
        )
    return annual_rate


def validate_term(term_months: int, field: str = "term_months") -> int:
    if not isinstance(term_months, int) or isinstance(term_months, bool):
        raise ValidationError(f"{field} must be an integer", field)
    if term_months <= 0:
        raise ValidationError(f"{field} must be positive", field)
    if term_months > settings.max_term_months:
        raise ValidationError(f"{field} exceeds {settings.max_term_months} months", field)
    return term_months


def validate_method(method: AmortizationMethod) -> AmortizationMethod:
    if not isinstance(method, AmortizationMethod):
        raise ValidationError(f"Invalid amortization method: {method!r} (expected SAC or Price)", "method")
    return method


def validate_preference(preference: EarlyPaymentPreference) -> EarlyPaymentPreference:
    if not isinstance(preference, EarlyPaymentPreference):
        raise ValidationError(
            f"Invalid preference: {preference!r} (expected reducao_prazo or reducao_parcela)",
            "preference",
        )
    return preference


def validate_loan_terms(terms: LoanTerms) -> LoanTerms:
    """Reject terms a schedule cannot be generated from.

    Returns the terms with integer amounts converted to Decimal.
    """
    principal = validate_principal(terms.principal)
    annual_rate = validate_rate(terms.annual_interest_rate)
    validate_term(terms.term_months)
    validate_method(terms.method)
    if not isinstance(terms.start_date, date):
        raise ValidationError("start_date must be a date", "start_date")
    return replace(terms, principal=principal, annual_interest_rate=annual_rate)


def validate_early_payment(principal: Decimal, early_payment_amount: Decimal) -> Decimal:
    early_payment_amount = _finite_decimal(early_payment_amount, "early_payment_amount")
    if early_payment_amount <= 0:
        raise ValidationError("early_payment_amount must be positive", "early_payment_amount")
    if early_payment_amount >= principal:
        raise ValidationError(
            "Early payment cannot be greater than or equal to the outstanding balance",
            "early_payment_amount",
        )
    return early_payment_amount
