"""
Adapters package for the Checkout Service.

HTTP client wrappers for the payment provider. Adapters own base URLs,
request shapes and the mapping of transport failures onto shared errors.
"""

from .mercadopago_client import MercadoPagoClient

__all__ = ["MercadoPagoClient"]
