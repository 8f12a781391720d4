from app.core.models.fee_assessment import FeeAssessment
from app.core.models.payment_transaction import PaymentTransaction

__all__ = [
    "FeeAssessment",
    "PaymentTransaction",
]
