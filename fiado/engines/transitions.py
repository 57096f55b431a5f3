"""Zero-balance transition detection over an annotated ledger."""

from decimal import Decimal

from fiado.engines.tolerance import ZERO, is_negative, is_positive, is_zero
from fiado.models.enums import TransitionType
from fiado.models.ledger import LedgerEntry, ZeroBalanceTransition


class TransitionDetector:
    """Classifies each ledger step that reaches, leaves or crosses zero."""

    def detect(self, entries: list[LedgerEntry]) -> list[ZeroBalanceTransition]:
        """Detect transitions in an oldest-first ledger.

        The balance before the first entry is zero. A step that crosses zero
        must move from meaningfully positive to meaningfully negative (or the
        reverse); steps that land within tolerance are ``to-zero``.
        """
        transitions: list[ZeroBalanceTransition] = []
        previous = ZERO

        for index, entry in enumerate(entries):
            current = entry.running_total
            transition_type = self._classify(previous, current)
            if transition_type is not None:
                transitions.append(
                    ZeroBalanceTransition(
                        event_index=index,
                        previous_debt=previous,
                        new_debt=current,
                        transition_type=transition_type,
                    )
                )
            previous = current

        return transitions

    @staticmethod
    def _classify(previous: Decimal, current: Decimal) -> TransitionType | None:
        was_zero = is_zero(previous)
        now_zero = is_zero(current)
        if not was_zero and now_zero:
            return TransitionType.TO_ZERO
        if was_zero and not now_zero:
            return TransitionType.FROM_ZERO
        crossed = (is_positive(previous) and is_negative(current)) or (
            is_negative(previous) and is_positive(current)
        )
        if crossed:
            return TransitionType.THROUGH_ZERO
        return None
