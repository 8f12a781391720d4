from enum import Enum
from typing import Dict, FrozenSet


class PaymentStatusCode(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class BalanceStatus(str, Enum):
    PAID_IN_FULL = "Paid in Full"
    PARTIAL = "Partial"
    UNPAID = "Unpaid"


# Allowed targets per current status. Statuses missing here are terminal.
STATUS_TRANSITIONS: Dict[PaymentStatusCode, FrozenSet[PaymentStatusCode]] = {
    PaymentStatusCode.PENDING: frozenset({PaymentStatusCode.COMPLETED, PaymentStatusCode.FAILED}),
}


def allowed_sources(target: PaymentStatusCode) -> FrozenSet[PaymentStatusCode]:
    """Statuses from which a transaction may move to ``target``."""
    return frozenset(src for src, targets in STATUS_TRANSITIONS.items() if target in targets)
