# backend/modules/payments/utils/__init__.py

from .gateway_timeout import GatewayCallRunner, GATEWAY_FAILURES

__all__ = [
    'GatewayCallRunner',
    'GATEWAY_FAILURES',
]
