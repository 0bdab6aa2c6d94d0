"""Early (extra) payment simulation.

An extra payment goes straight to principal. The borrower then either keeps
the term and pays smaller installments (reducao_parcela) or keeps the
installment and finishes sooner (reducao_prazo).

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, ROUND_CEILING, localcontext

from src.engine.errors import AmortizationDomainError
from src.engine.payments import ENGINE_CONTEXT, installment_payment, monthly_rate, sac_payment, to_cents
from src.engine.validation import (
    validate_early_payment,
    validate_method,
    validate_preference,
    validate_principal,
    validate_rate,
    validate_term,
)
from src.models.financing import AmortizationMethod, EarlyPaymentPreference, EarlyPaymentResult

logger = logging.getLogger(__name__)

# Tolerance for ln() noise when rounding a term up to whole months
TERM_PRECISION = Decimal("1E-10")


def _ceil_months(value: Decimal) -> int:
    # Any outstanding principal needs at least one more installment
    return max(1, int((value - TERM_PRECISION).to_integral_value(rounding=ROUND_CEILING)))


def price_term(payment: Decimal, principal: Decimal, r: Decimal) -> int:
    """Whole months needed to repay ``principal`` with a constant ``payment`` at monthly rate ``r``.

    n = ln(PMT / (PMT - P*r)) / ln(1 + r), rounded up. With r == 0 this is P / PMT.

    Raises:
        AmortizationDomainError: the payment does not cover the monthly interest.
    """
    if payment <= 0:
        raise AmortizationDomainError(f"Installment must be positive, got {payment}")
    if r == 0:
        return _ceil_months(principal / payment)

    residual = payment - principal * r
    if residual <= 0:
        raise AmortizationDomainError(
            f"Installment {to_cents(payment)} does not cover monthly interest {to_cents(principal * r)}"
        )
    return _ceil_months((payment / residual).ln() / (1 + r).ln())


def simulate_early_payment(
    principal: Decimal,
    annual_interest_rate: Decimal,
    remaining_months: int,
    method: AmortizationMethod,
    early_payment_amount: Decimal,
    preference: EarlyPaymentPreference,
) -> EarlyPaymentResult:
    """Simulate applying ``early_payment_amount`` to the outstanding ``principal``.

    reducao_parcela: new installment for the reduced principal over the same term.
    reducao_prazo:
        Price keeps the original installment and solves for the shorter term.
        SAC has no installment to hold: the first installment is recomputed
        for the reduced principal and the term is kept.

    Interest in each scenario is estimated as ``installment * term - principal``
    and interest_saved is the difference. Under reducao_prazo the new
    installment enters that estimate already rounded to cents.

    Raises:
        ValidationError: invalid inputs, or early_payment_amount >= principal.
        AmortizationDomainError: the term-reduction formula has no solution.
    """
    principal = validate_principal(principal)
    annual_interest_rate = validate_rate(annual_interest_rate, allow_zero=True)
    validate_term(remaining_months, "remaining_months")
    validate_method(method)
    validate_preference(preference)
    early_payment_amount = validate_early_payment(principal, early_payment_amount)

    logger.debug(
        "Simulating early payment of %s on %s (%s, %d months, %s)",
        early_payment_amount, principal, method.value, remaining_months, preference.value,
    )

    with localcontext(ENGINE_CONTEXT):
        new_principal = principal - early_payment_amount
        original_payment = installment_payment(principal, annual_interest_rate, remaining_months, method)

        if preference is EarlyPaymentPreference.REDUCE_INSTALLMENT:
            new_term = remaining_months
            new_payment = installment_payment(new_principal, annual_interest_rate, new_term, method)
        elif method is AmortizationMethod.SAC:
            new_term = remaining_months
            new_payment = to_cents(sac_payment(new_principal, annual_interest_rate, remaining_months))
        else:
            new_term = price_term(original_payment, new_principal, monthly_rate(annual_interest_rate))
            new_payment = to_cents(original_payment)

        original_interest = original_payment * remaining_months - principal
        new_interest = new_payment * new_term - new_principal

    return EarlyPaymentResult(
        original_principal=to_cents(principal),
        early_payment_amount=to_cents(early_payment_amount),
        new_principal=to_cents(new_principal),
        new_payment=to_cents(new_payment),
        new_term=new_term,
        interest_saved=to_cents(original_interest - new_interest),
        preference=preference,
    )
