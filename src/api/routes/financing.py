"""Financing what-if routes: amortization table, balance reconciliation, early payment."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    AmortizationTableResponse,
    BalanceRequest,
    BalanceResponse,
    EarlyPaymentRequest,
    EarlyPaymentResponse,
    InstallmentRowResponse,
    LoanTermsRequest,
    ScheduleSummaryResponse,
    YearlySummaryResponse,
)
from src.engine.amortization import generate_amortization_table, yearly_summary
from src.engine.balance import calculate_updated_balance
from src.engine.early_payment import simulate_early_payment
from src.engine.errors import AmortizationDomainError, ValidationError
from src.engine.payments import installment_payment, to_cents

router = APIRouter(prefix="/api/v1/financing", tags=["financing"])


def _http_error(e: Exception) -> HTTPException:
    """Map engine errors to HTTP errors."""
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


@router.post("/amortization-table", response_model=AmortizationTableResponse)
async def amortization_table(req: LoanTermsRequest):
    """Full month-by-month schedule with totals and per-year aggregation."""
    terms = req.to_terms()
    try:
        schedule = generate_amortization_table(terms)
        payment = installment_payment(terms.principal, terms.annual_interest_rate, terms.term_months, terms.method)
    except (ValidationError, AmortizationDomainError) as e:
        raise _http_error(e) from e

    return AmortizationTableResponse(
        method=terms.method,
        installment_payment=to_cents(payment),
        rows=[InstallmentRowResponse(**asdict(row)) for row in schedule.rows],
        summary=ScheduleSummaryResponse(**asdict(schedule.summary)),
        yearly=[YearlySummaryResponse(**asdict(y)) for y in yearly_summary(schedule)],
    )


@router.post("/balance", response_model=BalanceResponse)
async def balance(req: BalanceRequest):
    """Reconcile recorded payments against the financing's schedule."""
    try:
        report = calculate_updated_balance(req.terms.to_terms(), [p.to_payment() for p in req.payments])
    except (ValidationError, AmortizationDomainError) as e:
        raise _http_error(e) from e
    return BalanceResponse(**asdict(report))


@router.post("/early-payment", response_model=EarlyPaymentResponse)
async def early_payment(req: EarlyPaymentRequest):
    """Simulate an extra payment under the borrower's preference."""
    try:
        result = simulate_early_payment(
            principal=req.principal,
            annual_interest_rate=req.annual_interest_rate,
            remaining_months=req.remaining_months,
            method=req.method,
            early_payment_amount=req.early_payment_amount,
            preference=req.preference,
        )
    except (ValidationError, AmortizationDomainError) as e:
        raise _http_error(e) from e
    return EarlyPaymentResponse(**asdict(result))
