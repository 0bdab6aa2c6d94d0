"""Reconcile a financing's schedule against the payments actually recorded.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, localcontext

from src.engine.amortization import generate_amortization_table
from src.engine.errors import ValidationError
from src.engine.payments import ENGINE_CONTEXT, to_cents
from src.engine.validation import validate_loan_terms
from src.models.financing import BalanceReport, LoanTerms, RecordedPayment

logger = logging.getLogger(__name__)


def calculate_updated_balance(terms: LoanTerms, payments: list[RecordedPayment]) -> BalanceReport:
    """Derive the live balance and paid/remaining statistics for a financing.

    The schedule regenerated from ``terms`` is the reference for what should
    have been paid. Payments whose installment number is not in the schedule
    (including extra payments with no installment number) are ignored.

    Two balances are reported and they only agree when every payment matches
    its scheduled amount:
        current_balance: scheduled amortization of installments with no payment
        recorded_balance: principal minus recorded principal payments

    percentage_paid is capped at 100; repeated or oversized payments can
    otherwise push total_paid past the scheduled total.

    The result does not depend on the order of ``payments``.
    """
    terms = validate_loan_terms(terms)
    schedule = generate_amortization_table(terms)
    scheduled_numbers = {row.installment_number for row in schedule.rows}

    total_paid = Decimal("0")
    total_interest_paid = Decimal("0")
    recorded_principal = Decimal("0")
    paid_installments = 0
    matched: set[int] = set()

    with localcontext(ENGINE_CONTEXT):
        for payment in payments:
            if payment.installment_number not in scheduled_numbers:
                logger.warning(
                    "Ignoring payment for unknown installment %s (term %d)",
                    payment.installment_number, terms.term_months,
                )
                continue
            total_paid += payment.payment_amount
            total_interest_paid += payment.interest_amount
            recorded_principal += payment.principal_amount
            paid_installments += 1
            matched.add(payment.installment_number)

        unpaid_amortization = sum(
            (row.principal_amount for row in schedule.rows if row.installment_number not in matched),
            Decimal("0"),
        )
        scheduled_total = terms.principal + schedule.summary.total_interest
        percentage_paid = total_paid / scheduled_total * 100

    return BalanceReport(
        current_balance=to_cents(max(Decimal("0"), unpaid_amortization)),
        recorded_balance=to_cents(max(Decimal("0"), terms.principal - recorded_principal)),
        total_paid=to_cents(total_paid),
        total_interest_paid=to_cents(total_interest_paid),
        paid_installments=paid_installments,
        remaining_installments=max(0, terms.term_months - paid_installments),
        percentage_paid=to_cents(min(Decimal("100"), percentage_paid)),
    )


def scheduled_payment(terms: LoanTerms, installment_number: int) -> RecordedPayment:
    """Build the payment record for paying one installment exactly as scheduled.

    Raises:
        ValidationError: installment_number is outside 1..term_months.
    """
    schedule = generate_amortization_table(terms)
    if not 1 <= installment_number <= len(schedule.rows):
        raise ValidationError(
            f"Installment {installment_number} does not exist (term is {terms.term_months} months)",
            "installment_number",
        )
    row = schedule.rows[installment_number - 1]
    return RecordedPayment(
        installment_number=row.installment_number,
        payment_amount=row.payment_amount,
        principal_amount=row.principal_amount,
        interest_amount=row.interest_amount,
    )
