"""
Shared fixtures for Checkout service tests.
"""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from shared.errors import ProviderError
from shared.test_helpers import MockTokenGenerator, create_test_user, make_test_config
from service_checkout.app.main import CheckoutService
from service_checkout.app.preferences.models import PreferenceDescriptor, PreferenceResult


class FakePreferenceGateway:
    """In-memory stand-in for the payment provider.

    Records every descriptor it receives. Raises ``error`` when given,
    otherwise returns a fixed preference.
    """

    name = "fake"

    def __init__(self, preference_id: str = "123456789-abcd-ef01",
                 init_point: str = "https://www.mercadopago.com.mx/checkout/v1/redirect?pref_id=123456789-abcd-ef01",
                 error: Optional[Exception] = None):
        self.preference_id = preference_id
        self.init_point = init_point
        self.error = error
        self.calls: List[PreferenceDescriptor] = []

    async def create_preference(self, descriptor: PreferenceDescriptor) -> PreferenceResult:
        self.calls.append(descriptor)
        if self.error is not None:
            raise self.error
        return PreferenceResult(id=self.preference_id, init_point=self.init_point)


@pytest.fixture
def config():
    """Test configuration."""
    return make_test_config()


@pytest.fixture
def gateway():
    """Recording provider fake."""
    return FakePreferenceGateway()


@pytest.fixture
def failing_gateway():
    """Provider fake that always fails."""
    return FakePreferenceGateway(
        error=ProviderError("fake", details={"error": "simulated network failure"})
    )


@pytest.fixture
def token_generator():
    """Token generator sharing the test signing secret."""
    return MockTokenGenerator()


@pytest.fixture
def test_user():
    """Identity provider user."""
    return create_test_user()


@pytest.fixture
def valid_token(token_generator, test_user):
    """Signed, unexpired token."""
    return token_generator.generate_access_token(test_user)


@pytest.fixture
def auth_headers(valid_token):
    """Authorization header carrying a valid token."""
    return {"Authorization": f"Bearer {valid_token}"}


@pytest.fixture
def service(config, gateway):
    """Checkout service wired to the provider fake."""
    return CheckoutService(config=config, gateway=gateway)


@pytest.fixture
def client(service):
    """Create test client."""
    return TestClient(service.app)


@pytest.fixture
def make_gateway():
    """Factory for provider fakes with custom behaviour."""
    return FakePreferenceGateway
