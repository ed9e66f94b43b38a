"""
Payment preference handling.

Validates the product fields of a client request, maps them onto the
provider's preference shape (fixed currency, fixed redirect URLs,
auto-return) and delegates creation to a ``PreferenceGateway``.
"""

from .handler import PreferenceGateway, PreferenceHandler
from .models import PreferenceDescriptor, PreferenceResult, ProductLine

__all__ = [
    "PreferenceDescriptor",
    "PreferenceGateway",
    "PreferenceHandler",
    "PreferenceResult",
    "ProductLine",
]
