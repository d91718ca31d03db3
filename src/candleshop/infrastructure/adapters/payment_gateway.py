"""Payment gateway adapter for stores without a processor integration.

Orders are paid offline (invoice, cash on delivery) and an operator
confirms them; the only automatic check is that a transaction
reference was recorded.
"""

from __future__ import annotations

from candleshop.application.ports import PaymentGateway, PaymentVerification
from candleshop.domain.model.order import PaymentStatus
from candleshop.domain.model.value_objects import Money


class ManualPaymentGateway(PaymentGateway):

    def verify(self, transaction_id: str, amount: Money) -> PaymentVerification:
        if not transaction_id or not transaction_id.strip():
            return PaymentVerification(PaymentStatus.FAILED, "Missing transaction reference")
        return PaymentVerification(
            PaymentStatus.COMPLETED, f"Confirmed manually for {amount}"
        )
