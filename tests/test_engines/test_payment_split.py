"""Tests for splitting payments between debt and favor balance."""

from decimal import Decimal

import pytest

from fiado.engines.payment_split import PaymentSplitter
from fiado.engines.tolerance import PAYMENT_APPLIED_MESSAGE, PAYMENT_RECEIVED_MESSAGE
from fiado.models.enums import DisplayStepType
from fiado.models.history import FAVOR_BALANCE_MESSAGE, ZERO_BALANCE_MESSAGE


class TestSplit:
    def setup_method(self):
        self.splitter = PaymentSplitter()

    def test_overpayment(self):
        result = self.splitter.split(300, 500)
        assert result.debt_payment == Decimal("300")
        assert result.favor_payment == Decimal("200")
        assert result.is_overpayment
        assert result.zero_balance_reached

    def test_partial_payment(self):
        result = self.splitter.split(300, 100)
        assert result.debt_payment == Decimal("100")
        assert result.favor_payment == 0
        assert not result.is_overpayment
        assert not result.zero_balance_reached

    def test_exact_payment(self):
        result = self.splitter.split(300, 300)
        assert result.debt_payment == Decimal("300")
        assert result.favor_payment == 0
        assert not result.is_overpayment
        assert result.zero_balance_reached

    def test_payment_within_tolerance_reaches_zero(self):
        result = self.splitter.split("300", "299.995")
        assert not result.is_overpayment
        assert result.zero_balance_reached

    @pytest.mark.parametrize("debt", [0, "0.01", -50])
    def test_no_debt_makes_everything_favor(self, debt):
        result = self.splitter.split(debt, 80)
        assert result.debt_payment == 0
        assert result.favor_payment == Decimal("80")
        assert result.is_overpayment
        assert not result.zero_balance_reached

    @pytest.mark.parametrize(
        "debt,payment",
        [(300, 500), (300, 100), (300, 300), (0, 80), ("12.34", "56.78"), ("99.99", "100")],
    )
    def test_portions_add_up_to_payment(self, debt, payment):
        result = self.splitter.split(debt, payment)
        assert result.debt_payment + result.favor_payment == Decimal(str(payment))
        assert result.debt_payment >= 0
        assert result.favor_payment >= 0

    def test_floats_are_converted_exactly(self):
        result = self.splitter.split(0.3, 0.5)
        assert result.debt_payment == Decimal("0.3")
        assert result.favor_payment == Decimal("0.2")


class TestVisualize:
    def setup_method(self):
        self.splitter = PaymentSplitter()

    def test_overpayment_steps(self):
        visualization = self.splitter.visualize(300, 500)
        steps = visualization.display_events
        assert [s.type for s in steps] == [
            DisplayStepType.PAYMENT,
            DisplayStepType.ZERO_SEPARATOR,
            DisplayStepType.FAVOR,
        ]
        assert steps[0].amount == Decimal("300")
        assert steps[0].message == PAYMENT_APPLIED_MESSAGE
        assert steps[1].amount is None
        assert steps[1].message == ZERO_BALANCE_MESSAGE
        assert steps[2].amount == Decimal("200")
        assert steps[2].message == FAVOR_BALANCE_MESSAGE

    def test_exact_payment_steps(self):
        steps = self.splitter.visualize(300, 300).display_events
        assert [s.type for s in steps] == [DisplayStepType.PAYMENT, DisplayStepType.ZERO_SEPARATOR]
        assert steps[0].amount == Decimal("300")
        assert steps[0].message == PAYMENT_RECEIVED_MESSAGE

    def test_partial_payment_is_single_step(self):
        steps = self.splitter.visualize(300, 100).display_events
        assert len(steps) == 1
        assert steps[0].type == DisplayStepType.PAYMENT
        assert steps[0].amount == Decimal("100")

    def test_payment_with_no_debt_is_single_step(self):
        # Overpayment, but no debt was applied: nothing to separate
        visualization = self.splitter.visualize(0, 80)
        assert visualization.split.is_overpayment
        assert len(visualization.display_events) == 1
        assert visualization.display_events[0].amount == Decimal("80")

    def test_serializes_with_camel_case_keys(self):
        data = self.splitter.visualize(300, 500).model_dump(mode="json", by_alias=True)
        assert data["split"]["debtPayment"] == "300"
        assert data["split"]["zeroBalanceReached"] is True
        assert data["displayEvents"][1] == {"type": "zero-separator", "amount": None, "message": "cuenta en 0"}
