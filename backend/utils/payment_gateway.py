# backend/utils/payment_gateway.py
"""Payment capability used by the order payment step.

The storefront ships without a real gateway: ``StubPaymentGateway`` accepts
every charge. A real integration implements ``PaymentGateway.charge`` and is
installed with ``set_gateway()`` at startup; tests use the same hook.
"""
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """Raised by a gateway when a charge is declined or cannot be processed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


@dataclass
class PaymentReceipt:
    transaction_id: Optional[str]
    amount: float
    method: str


class PaymentGateway:
    def charge(self, order, method: str, transaction_id: Optional[str] = None) -> PaymentReceipt:
        raise NotImplementedError


class StubPaymentGateway(PaymentGateway):
    """Always succeeds and echoes the client-supplied transaction id."""

    def charge(self, order, method: str, transaction_id: Optional[str] = None) -> PaymentReceipt:
        logger.info("Stub gateway accepted %s payment for %s (%.2f)", method, order.id, order.total)
        return PaymentReceipt(transaction_id=transaction_id, amount=order.total, method=method)


_current_gateway: Optional[PaymentGateway] = None


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = StubPaymentGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
