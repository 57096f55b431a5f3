"""Payment splitting between outstanding debt and favor balance."""

from decimal import Decimal

from fiado.engines.tolerance import (
    BALANCE_TOLERANCE,
    PAYMENT_APPLIED_MESSAGE,
    PAYMENT_RECEIVED_MESSAGE,
    ZERO,
    as_decimal,
    is_zero,
)
from fiado.models.enums import DisplayStepType
from fiado.models.history import FAVOR_BALANCE_MESSAGE, ZERO_BALANCE_MESSAGE
from fiado.models.ledger import PaymentDisplayStep, PaymentSplit, PaymentVisualization


class PaymentSplitter:
    """Decides how much of a payment extinguishes debt and how much becomes credit."""

    def split(
        self, current_debt: Decimal | int | float | str, payment_amount: Decimal | int | float | str
    ) -> PaymentSplit:
        """Split a payment against the debt outstanding just before it.

        The two portions always add up to the payment exactly. Neither input
        is range-checked: a non-positive debt means the whole payment is credit.
        """
        debt = as_decimal(current_debt)
        amount = as_decimal(payment_amount)

        if debt <= BALANCE_TOLERANCE:
            # Nothing owed, so there is no zero to reach
            return PaymentSplit(
                debt_payment=ZERO,
                favor_payment=amount,
                is_overpayment=True,
                zero_balance_reached=False,
            )
        if amount <= debt:
            return PaymentSplit(
                debt_payment=amount,
                favor_payment=ZERO,
                is_overpayment=False,
                zero_balance_reached=is_zero(amount - debt),
            )
        return PaymentSplit(
            debt_payment=debt,
            favor_payment=amount - debt,
            is_overpayment=True,
            zero_balance_reached=True,
        )

    def visualize(
        self, current_debt: Decimal | int | float | str, payment_amount: Decimal | int | float | str
    ) -> PaymentVisualization:
        """Split a payment and list its display steps in chronological order.

        Overpayments that paid off real debt show the applied portion, a zero
        separator and the favor portion. Exact payoffs show the payment and a
        separator. Every other payment is a single step for the full amount.
        """
        amount = as_decimal(payment_amount)
        split = self.split(current_debt, amount)
        steps: list[PaymentDisplayStep] = []

        if split.is_overpayment and split.debt_payment > 0:
            steps.append(
                PaymentDisplayStep(
                    type=DisplayStepType.PAYMENT,
                    amount=split.debt_payment,
                    message=PAYMENT_APPLIED_MESSAGE,
                )
            )
            steps.append(PaymentDisplayStep(type=DisplayStepType.ZERO_SEPARATOR, message=ZERO_BALANCE_MESSAGE))
            steps.append(
                PaymentDisplayStep(
                    type=DisplayStepType.FAVOR,
                    amount=split.favor_payment,
                    message=FAVOR_BALANCE_MESSAGE,
                )
            )
        elif split.zero_balance_reached:
            steps.append(
                PaymentDisplayStep(type=DisplayStepType.PAYMENT, amount=amount, message=PAYMENT_RECEIVED_MESSAGE)
            )
            steps.append(PaymentDisplayStep(type=DisplayStepType.ZERO_SEPARATOR, message=ZERO_BALANCE_MESSAGE))
        else:
            steps.append(
                PaymentDisplayStep(type=DisplayStepType.PAYMENT, amount=amount, message=PAYMENT_RECEIVED_MESSAGE)
            )

        return PaymentVisualization(split=split, display_events=steps)
