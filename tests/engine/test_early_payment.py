from decimal import Decimal

import pytest

from src.engine.early_payment import price_term, simulate_early_payment
from src.engine.errors import AmortizationDomainError, ValidationError
from src.engine.payments import price_payment, to_cents
from src.models.financing import AmortizationMethod, EarlyPaymentPreference

RATE = Decimal("0.12")
REDUCE_TERM = EarlyPaymentPreference.REDUCE_TERM
REDUCE_INSTALLMENT = EarlyPaymentPreference.REDUCE_INSTALLMENT


def _simulate(method, preference, principal="11000", amount="5000", months=11, rate=RATE):
    return simulate_early_payment(
        principal=Decimal(principal),
        annual_interest_rate=rate,
        remaining_months=months,
        method=method,
        early_payment_amount=Decimal(amount),
        preference=preference,
    )


class TestReduceInstallment:
    def test_sac(self):
        result = _simulate(AmortizationMethod.SAC, REDUCE_INSTALLMENT)
        assert result.original_principal == Decimal("11000.00")
        assert result.early_payment_amount == Decimal("5000.00")
        assert result.new_principal == Decimal("6000.00")
        # 6000/11 + 1% of 6000
        assert result.new_payment == Decimal("605.45")
        assert result.new_term == 11
        # (1110 * 11 - 11000) - (605.4545 * 11 - 6000)
        assert result.interest_saved == Decimal("550.00")
        assert result.preference is REDUCE_INSTALLMENT

    def test_price(self):
        result = _simulate(AmortizationMethod.PRICE, REDUCE_INSTALLMENT)
        assert result.new_term == 11
        assert result.new_payment == to_cents(price_payment(Decimal("6000"), RATE, 11))
        assert result.interest_saved > 0


class TestReduceTerm:
    def test_price_keeps_installment(self):
        result = _simulate(AmortizationMethod.PRICE, REDUCE_TERM)
        assert result.new_payment == to_cents(price_payment(Decimal("11000"), RATE, 11))
        # ln(1060.99 / 1000.99) / ln(1.01) = 5.85, rounded up
        assert result.new_term == 6
        # (1060.99483 * 11 - 11000) - (1060.99 * 6 - 6000)
        assert result.interest_saved == Decimal("305.00")

    def test_sac_keeps_term_and_recomputes_installment(self):
        result = _simulate(AmortizationMethod.SAC, REDUCE_TERM)
        assert result.new_term == 11
        # 6000/11 + 1% of 6000, quoted in cents
        assert result.new_payment == Decimal("605.45")
        # 1210 - (605.45 * 11 - 6000)
        assert result.interest_saved == Decimal("550.05")
        assert result.preference is REDUCE_TERM

    def test_sac_matches_reduce_installment_apart_from_rounding(self):
        term = _simulate(AmortizationMethod.SAC, REDUCE_TERM, amount="4500")
        installment = _simulate(AmortizationMethod.SAC, REDUCE_INSTALLMENT, amount="4500")
        assert term.new_term == installment.new_term == 11
        assert term.new_payment == installment.new_payment

    def test_zero_rate_price_falls_back_to_division(self):
        result = _simulate(
            AmortizationMethod.PRICE, REDUCE_TERM,
            principal="1200", amount="300", months=12, rate=Decimal("0"),
        )
        assert result.new_payment == Decimal("100.00")
        assert result.new_term == 9
        assert result.interest_saved == Decimal("0.00")

    def test_zero_rate_sac(self):
        result = _simulate(
            AmortizationMethod.SAC, REDUCE_TERM,
            principal="1200", amount="300", months=12, rate=Decimal("0"),
        )
        assert result.new_term == 12
        assert result.new_payment == Decimal("75.00")
        assert result.interest_saved == Decimal("0.00")

    def test_term_never_grows(self):
        for amount in ("1", "100", "5000", "10999.99"):
            for method in AmortizationMethod:
                result = _simulate(method, REDUCE_TERM, amount=amount)
                assert 1 <= result.new_term <= 11


class TestPriceTerm:
    def test_exact_term_not_bumped(self):
        principal = Decimal("250000")
        r = RATE / 12
        pmt = price_payment(principal, RATE, 240)
        assert price_term(pmt, principal, r) == 240

    def test_payment_below_interest(self):
        with pytest.raises(AmortizationDomainError):
            price_term(Decimal("50"), Decimal("10000"), Decimal("0.01"))

    def test_payment_equal_to_interest(self):
        with pytest.raises(AmortizationDomainError):
            price_term(Decimal("100"), Decimal("10000"), Decimal("0.01"))

    def test_non_positive_payment(self):
        with pytest.raises(AmortizationDomainError):
            price_term(Decimal("0"), Decimal("10000"), Decimal("0"))


class TestEarlyPaymentValidation:
    @pytest.mark.parametrize("amount", ["11000", "11000.01", "20000"])
    def test_amount_not_below_balance(self, amount):
        with pytest.raises(ValidationError) as exc:
            _simulate(AmortizationMethod.SAC, REDUCE_INSTALLMENT, amount=amount)
        assert exc.value.field == "early_payment_amount"

    @pytest.mark.parametrize("amount", ["0", "-10"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            _simulate(AmortizationMethod.PRICE, REDUCE_TERM, amount=amount)

    def test_new_principal_exact(self):
        result = _simulate(AmortizationMethod.PRICE, REDUCE_TERM, principal="10000.37", amount="1234.56")
        assert result.new_principal == Decimal("10000.37") - Decimal("1234.56")

    def test_rejects_unknown_preference(self):
        with pytest.raises(ValidationError):
            _simulate(AmortizationMethod.SAC, "reducao_total")

    def test_rejects_negative_rate(self):
        with pytest.raises(ValidationError):
            _simulate(AmortizationMethod.SAC, REDUCE_TERM, rate=Decimal("-0.01"))

    def test_rejects_zero_remaining_months(self):
        with pytest.raises(ValidationError):
            _simulate(AmortizationMethod.SAC, REDUCE_TERM, months=0)

    def test_deterministic(self):
        assert _simulate(AmortizationMethod.PRICE, REDUCE_TERM) == _simulate(AmortizationMethod.PRICE, REDUCE_TERM)


class TestIntegerAmounts:
    def test_reduce_installment(self):
        result = simulate_early_payment(
            principal=11000,
            annual_interest_rate=RATE,
            remaining_months=11,
            method=AmortizationMethod.SAC,
            early_payment_amount=5000,
            preference=REDUCE_INSTALLMENT,
        )
        assert result.new_principal == Decimal("6000.00")
        assert result.new_payment == Decimal("605.45")
        assert result == _simulate(AmortizationMethod.SAC, REDUCE_INSTALLMENT)

    def test_reduce_term_price(self):
        result = simulate_early_payment(
            principal=11000,
            annual_interest_rate=RATE,
            remaining_months=11,
            method=AmortizationMethod.PRICE,
            early_payment_amount=5000,
            preference=REDUCE_TERM,
        )
        assert result == _simulate(AmortizationMethod.PRICE, REDUCE_TERM)
