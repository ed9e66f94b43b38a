"""
Mercado Pago client for the Checkout service.
"""

import time
from typing import Any, Dict, Optional

import httpx

from shared.logging import get_logger
from shared.errors import ProviderError
from shared.metrics import MetricsCollector
from ..preferences.models import PreferenceDescriptor, PreferenceResult


class MercadoPagoClient:
    """Creates checkout preferences through the Mercado Pago REST API.

    One request per call. Failures surface as ``ProviderError``; nothing is
    retried.
    """

    name = "mercadopago"

    def __init__(self, access_token: str, base_url: str = "https://api.mercadopago.com",
                 timeout: Optional[float] = None,
                 metrics: Optional[MetricsCollector] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.metrics = metrics
        self._transport = transport
        self.logger = get_logger("checkout.mercadopago_client")

    def _headers(self) -> Dict[str, str]:
        if not self.access_token:
            raise ProviderError(self.name, details={"error": "access token not configured"})
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    async def create_preference(self, descriptor: PreferenceDescriptor) -> PreferenceResult:
        """Create a preference and return its id and checkout URL."""
        headers = self._headers()
        start_time = time.time()
        outcome = "error"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/checkout/preferences",
                    json=descriptor.to_payload(),
                    headers=headers
                )

            if response.status_code >= 400:
                raise ProviderError(
                    self.name,
                    details={
                        "status_code": response.status_code,
                        "body": (response.text or "<empty>")[:2000],
                    }
                )

            result = self._parse(response)
            outcome = "ok"
            return result

        except httpx.HTTPError as e:
            self.logger.error("Mercado Pago HTTP error", error=str(e))
            raise ProviderError(self.name, details={"http_error": str(e)})
        finally:
            if self.metrics is not None:
                self.metrics.record_provider_call(self.name, outcome, time.time() - start_time)

    def _parse(self, response: httpx.Response) -> PreferenceResult:
        try:
            body: Any = response.json()
        except ValueError:
            raise ProviderError(
                self.name,
                details={"error": "response is not JSON", "body": response.text[:2000]}
            )

        if not isinstance(body, dict) or not body.get("id") or not body.get("init_point"):
            raise ProviderError(
                self.name,
                details={"error": "response missing id or init_point"}
            )

        return PreferenceResult(id=str(body["id"]), init_point=str(body["init_point"]))
