"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.models.financing import AmortizationMethod, EarlyPaymentPreference, LoanTerms, RecordedPayment


# ---- Request schemas ----

class LoanTermsRequest(BaseModel):
    principal: Decimal = Field(..., description="Amount financed")
    annual_interest_rate: Decimal = Field(..., description="Annual rate as a fraction, e.g. 0.12")
    term_months: int
    method: AmortizationMethod = AmortizationMethod.SAC
    start_date: date

    def to_terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.principal,
            annual_interest_rate=self.annual_interest_rate,
            term_months=self.term_months,
            method=self.method,
            start_date=self.start_date,
        )


class RecordedPaymentRequest(BaseModel):
    installment_number: int | None = Field(None, description="None for extra payments")
    payment_amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal = Decimal("0")

    def to_payment(self) -> RecordedPayment:
        return RecordedPayment(
            installment_number=self.installment_number,
            payment_amount=self.payment_amount,
            principal_amount=self.principal_amount,
            interest_amount=self.interest_amount,
        )


class BalanceRequest(BaseModel):
    terms: LoanTermsRequest
    payments: list[RecordedPaymentRequest] = []


class EarlyPaymentRequest(BaseModel):
    principal: Decimal = Field(..., description="Outstanding balance before the extra payment")
    annual_interest_rate: Decimal
    remaining_months: int
    method: AmortizationMethod = AmortizationMethod.SAC
    early_payment_amount: Decimal
    preference: EarlyPaymentPreference


# ---- Response schemas ----

class InstallmentRowResponse(BaseModel):
    installment_number: int
    due_date: date
    payment_amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal
    remaining_balance: Decimal


class ScheduleSummaryResponse(BaseModel):
    total_payments: Decimal
    total_principal: Decimal
    total_interest: Decimal
    principal: Decimal


class YearlySummaryResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    payments: Decimal
    ending_balance: Decimal


class AmortizationTableResponse(BaseModel):
    method: AmortizationMethod
    installment_payment: Decimal
    rows: list[InstallmentRowResponse]
    summary: ScheduleSummaryResponse
    yearly: list[YearlySummaryResponse] = []


class BalanceResponse(BaseModel):
    current_balance: Decimal
    recorded_balance: Decimal
    total_paid: Decimal
    total_interest_paid: Decimal
    paid_installments: int
    remaining_installments: int
    percentage_paid: Decimal


class EarlyPaymentResponse(BaseModel):
    original_principal: Decimal
    early_payment_amount: Decimal
    new_principal: Decimal
    new_payment: Decimal
    new_term: int
    interest_saved: Decimal
    preference: EarlyPaymentPreference
