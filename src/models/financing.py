from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class AmortizationMethod(Enum):
    SAC = "SAC"  # Constant amortization, declining installment
    PRICE = "Price"  # French / annuity, constant installment


class EarlyPaymentPreference(Enum):
    REDUCE_TERM = "reducao_prazo"
    REDUCE_INSTALLMENT = "reducao_parcela"


@dataclass(frozen=True)
class LoanTerms:
    principal: Decimal
    annual_interest_rate: Decimal  # e.g. Decimal("0.12") for 12% a.a.
    term_months: int
    method: AmortizationMethod
    start_date: date


@dataclass(frozen=True)
class InstallmentRow:
    installment_number: int
    due_date: date
    payment_amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class ScheduleSummary:
    total_payments: Decimal
    total_principal: Decimal
    total_interest: Decimal
    principal: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    rows: list[InstallmentRow]
    summary: ScheduleSummary

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class YearlySummary:
    year: int
    principal: Decimal
    interest: Decimal
    payments: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class RecordedPayment:
    """Money actually paid against a financing.

    installment_number is None for extra payments not tied to an installment.
    """
    installment_number: int | None
    payment_amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal


@dataclass(frozen=True)
class BalanceReport:
    current_balance: Decimal  # Scheduled amortization of unpaid installments
    recorded_balance: Decimal  # Principal minus recorded principal payments
    total_paid: Decimal
    total_interest_paid: Decimal
    paid_installments: int
    remaining_installments: int
    percentage_paid: Decimal  # 0..100, capped at 100


@dataclass(frozen=True)
class EarlyPaymentResult:
    original_principal: Decimal
    early_payment_amount: Decimal
    new_principal: Decimal
    new_payment: Decimal
    new_term: int
    interest_saved: Decimal
    preference: EarlyPaymentPreference = field(default=EarlyPaymentPreference.REDUCE_INSTALLMENT)
