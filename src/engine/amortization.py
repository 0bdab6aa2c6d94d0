"""Amortization schedule generation for SAC and Price financings.

Pure functions: LoanTerms in, frozen dataclasses out. No I/O.
"""

import logging
from decimal import Decimal, localcontext

from dateutil.relativedelta import relativedelta

from src.engine.payments import ENGINE_CONTEXT, monthly_rate, price_payment, to_cents
from src.engine.validation import validate_loan_terms
from src.models.financing import (
    AmortizationMethod,
    AmortizationSchedule,
    InstallmentRow,
    LoanTerms,
    ScheduleSummary,
    YearlySummary,
)

logger = logging.getLogger(__name__)


def generate_amortization_table(terms: LoanTerms) -> AmortizationSchedule:
    """Generate the full month-by-month schedule for a financing.

    The running balance is carried at full precision; each row's fields are
    rounded to cents on their own, and the summary totals are sums of those
    rounded rows. The last installment amortizes whatever balance is left, so
    the schedule always ends at exactly zero.

    Raises:
        ValidationError: principal, rate or term not positive, or unknown method.
    """
    terms = validate_loan_terms(terms)

    with localcontext(ENGINE_CONTEXT):
        principal = terms.principal
        n = terms.term_months
        r = monthly_rate(terms.annual_interest_rate)

        if terms.method is AmortizationMethod.SAC:
            constant_amortization = principal / n
        else:
            pmt = price_payment(principal, terms.annual_interest_rate, n)

        rows: list[InstallmentRow] = []
        balance = principal
        total_principal = Decimal("0")
        total_interest = Decimal("0")

        for number in range(1, n + 1):
            # Interest accrues on the balance before this month's amortization
            interest = balance * r
            if terms.method is AmortizationMethod.SAC:
                amortization = constant_amortization
                payment = amortization + interest
            else:
                payment = pmt
                amortization = payment - interest

            # Final installment absorbs any drift
            if number == n:
                amortization = balance
                payment = amortization + interest

            balance -= amortization

            row = InstallmentRow(
                installment_number=number,
                due_date=terms.start_date + relativedelta(months=number - 1),
                payment_amount=to_cents(payment),
                principal_amount=to_cents(amortization),
                interest_amount=to_cents(interest),
                remaining_balance=to_cents(max(Decimal("0"), balance)),
            )
            total_principal += row.principal_amount
            total_interest += row.interest_amount
            rows.append(row)

    logger.debug(
        "Generated %s schedule: %d installments, total interest %s",
        terms.method.value, n, total_interest,
    )

    return AmortizationSchedule(
        rows=rows,
        summary=ScheduleSummary(
            total_payments=total_principal + total_interest,
            total_principal=total_principal,
            total_interest=total_interest,
            principal=to_cents(principal),
        ),
    )


def yearly_summary(schedule: AmortizationSchedule) -> list[YearlySummary]:
    """Aggregate a schedule into loan years of 12 installments.

    The last entry may cover fewer than 12 installments.
    """
    yearly: list[YearlySummary] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_payments = Decimal("0")

    for row in schedule.rows:
        year_principal += row.principal_amount
        year_interest += row.interest_amount
        year_payments += row.payment_amount

        if row.installment_number % 12 == 0 or row.installment_number == len(schedule.rows):
            yearly.append(YearlySummary(
                year=(row.installment_number - 1) // 12 + 1,
                principal=year_principal,
                interest=year_interest,
                payments=year_payments,
                ending_balance=row.remaining_balance,
            ))
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_payments = Decimal("0")

    return yearly
