"""
Preference request handling for the Checkout service.
"""

from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from shared.config import ServiceConfig
from shared.logging import get_logger
from shared.errors import ProviderError, ValidationError
from ..auth.token_verifier import VerifiedIdentity
from .models import BackUrls, PreferenceDescriptor, PreferenceItem, PreferenceResult, ProductLine


REQUIRED_FIELDS = ("title", "quantity", "unit_price")


class PreferenceGateway(Protocol):
    """Creates a preference with the payment provider.

    Implementations raise ``ProviderError`` on any failure.
    """

    async def create_preference(self, descriptor: PreferenceDescriptor) -> PreferenceResult:
        ...


class PreferenceHandler:
    """Validates product fields and forwards them to the payment provider."""

    def __init__(self, gateway: PreferenceGateway, config: ServiceConfig):
        self.gateway = gateway
        self.provider = getattr(gateway, "name", "provider")
        self.currency_id = config.currency_id
        self.back_urls = BackUrls(
            success=config.back_url_success,
            failure=config.back_url_failure,
            pending=config.back_url_pending,
        )
        self.auto_return = config.auto_return
        self.logger = get_logger("checkout.preferences")

    def validate(self, payload: Any) -> ProductLine:
        """Check presence and shape of the product fields."""
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
        if missing:
            raise ValidationError(
                "Faltan datos del producto: title, quantity y unit_price son requeridos",
                details={"missing": missing}
            )

        try:
            return ProductLine(**{name: payload[name] for name in REQUIRED_FIELDS})
        except PydanticValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise ValidationError(
                f"Datos del producto inválidos: {', '.join(fields)}",
                details={"invalid": fields}
            )

    def build_descriptor(self, line: ProductLine) -> PreferenceDescriptor:
        """Map a product line onto the provider's preference shape."""
        return PreferenceDescriptor(
            items=[
                PreferenceItem(
                    title=line.title,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    currency_id=self.currency_id,
                )
            ],
            back_urls=self.back_urls,
            auto_return=self.auto_return,
        )

    async def create_preference(self, identity: VerifiedIdentity, payload: Any) -> PreferenceResult:
        """Validate, translate and delegate a single preference creation."""
        line = self.validate(payload)
        descriptor = self.build_descriptor(line)

        try:
            result = await self.gateway.create_preference(descriptor)
        except ProviderError as e:
            self.logger.error(
                "Preference creation failed",
                provider=e.provider,
                details=e.details,
                sub=identity.subject
            )
            raise ProviderError(e.provider)
        except Exception as e:
            self.logger.error(
                "Preference creation failed",
                error=str(e),
                sub=identity.subject,
                exc_info=True
            )
            raise ProviderError(self.provider)

        self.logger.info("Preference created", preference_id=result.id, sub=identity.subject)
        return result
