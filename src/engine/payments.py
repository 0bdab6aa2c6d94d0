"""Per-installment math for SAC and Price financings.

Pure functions: Decimal in, Decimal out. Results are unrounded; use to_cents()
for anything that leaves the engine.
"""

from decimal import Context, Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP

from src.engine.validation import validate_method, validate_principal, validate_rate, validate_term
from src.models.financing import AmortizationMethod

TWO_PLACES = Decimal("0.01")

# Pinned so results do not depend on the caller's decimal context
ENGINE_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """Flat monthly rate (annual / 12), not a compounding conversion."""
    return annual_rate / 12


def sac_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """First (largest) SAC installment: constant amortization plus first month's interest."""
    principal = validate_principal(principal)
    annual_rate = validate_rate(annual_rate, allow_zero=True)
    validate_term(term_months)

    amortization = principal / term_months
    return amortization + principal * monthly_rate(annual_rate)


def price_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """Constant Price installment."""
    principal = validate_principal(principal)
    annual_rate = validate_rate(annual_rate, allow_zero=True)
    validate_term(term_months)

    r = monthly_rate(annual_rate)
    if r == 0:
        return principal / term_months
    # PMT = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** term_months
    return principal * (r * factor) / (factor - 1)


def installment_payment(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    method: AmortizationMethod,
) -> Decimal:
    """Installment a financing is quoted at: the first SAC installment, or the Price PMT."""
    if validate_method(method) is AmortizationMethod.SAC:
        return sac_payment(principal, annual_rate, term_months)
    return price_payment(principal, annual_rate, term_months)
