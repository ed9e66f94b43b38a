"""
Checkout service for the Checkout Access Layer.
"""

import json
from typing import Optional

from fastapi import Depends, Request
from fastapi.responses import PlainTextResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.errors import ValidationError
from .auth.token_verifier import JoseTokenDecoder, TokenDecoder, TokenVerifier, VerifiedIdentity
from .adapters.mercadopago_client import MercadoPagoClient
from .preferences.handler import PreferenceGateway, PreferenceHandler
from .preferences.models import ErrorBody, PreferenceResponse


LIVENESS_MESSAGE = "El backend de Mercado Pago está funcionando!"


class CheckoutService(BaseService):
    """Checkout service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None,
                 gateway: Optional[PreferenceGateway] = None,
                 decoder: Optional[TokenDecoder] = None):
        super().__init__("checkout", config)

        self.token_verifier = TokenVerifier(decoder or JoseTokenDecoder.from_config(self.config))
        self.gateway = gateway or MercadoPagoClient(
            self.config.mercadopago_access_token,
            base_url=self.config.mercadopago_base_url,
            timeout=self.config.provider_timeout_seconds,
            metrics=self.metrics,
        )
        self.preference_handler = PreferenceHandler(self.gateway, self.config)

        self._setup_checkout_routes()

    def _setup_checkout_routes(self):
        """Set up checkout-specific routes."""

        @self.app.get("/", response_class=PlainTextResponse)
        async def root():
            """Liveness endpoint."""
            return LIVENESS_MESSAGE

        @self.app.post(
            "/create_preference",
            response_model=PreferenceResponse,
            responses={
                400: {"model": ErrorBody},
                401: {"description": "Invalid or expired token"},
                403: {"description": "Missing or malformed authorization header"},
                500: {"model": ErrorBody},
            },
        )
        async def create_preference(
            request: Request,
            identity: VerifiedIdentity = Depends(self.token_verifier.authenticate),
        ):
            """Create a Mercado Pago preference for a single product."""
            # Read after authentication so rejected callers never reach parsing
            raw = await request.body()
            try:
                payload = json.loads(raw) if raw else {}
            except (ValueError, RecursionError):
                raise ValidationError("Request body must be valid JSON")

            result = await self.preference_handler.create_preference(identity, payload)
            self.metrics.record_business_event("preference_created")
            return result.to_response()

    async def _check_dependencies(self):
        """Report which external settings are present."""
        return {
            "mercadopago": "configured" if self.config.mercadopago_access_token else "missing",
            "jwt_secret": "configured" if self.config.jwt_secret else "missing",
        }


def create_app(config: Optional[ServiceConfig] = None,
               gateway: Optional[PreferenceGateway] = None,
               decoder: Optional[TokenDecoder] = None):
    """Create FastAPI application."""
    service = CheckoutService(config=config, gateway=gateway, decoder=decoder)
    return service.app


if __name__ == "__main__":
    service = CheckoutService()
    service.run()
