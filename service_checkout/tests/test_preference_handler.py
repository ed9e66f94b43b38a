"""
Unit tests for PreferenceHandler.
"""

import pytest
from unittest.mock import MagicMock

from shared.errors import ProviderError, ValidationError
from shared.test_helpers import make_test_config
from service_checkout.app.auth.token_verifier import VerifiedIdentity
from service_checkout.app.preferences.handler import PreferenceHandler
from service_checkout.app.preferences.models import ProductLine


@pytest.fixture
def identity():
    return VerifiedIdentity(claims={"sub": "user-123"})


@pytest.fixture
def handler(gateway, config):
    return PreferenceHandler(gateway, config)


class TestValidate:
    """Product field validation."""

    def test_valid_payload(self, handler):
        line = handler.validate({"title": "Wash", "quantity": 1, "unit_price": 150})

        assert line == ProductLine(title="Wash", quantity=1, unit_price=150.0)

    def test_numeric_strings_are_coerced(self, handler):
        line = handler.validate({"title": "Wash", "quantity": "2", "unit_price": "99.50"})

        assert line.quantity == 2
        assert isinstance(line.quantity, int)
        assert line.unit_price == 99.5
        assert isinstance(line.unit_price, float)

    def test_whole_float_quantity_is_coerced(self, handler):
        assert handler.validate({"title": "Wash", "quantity": 3.0, "unit_price": 10}).quantity == 3

    @pytest.mark.parametrize("missing", ["title", "quantity", "unit_price"])
    def test_missing_field(self, handler, missing):
        payload = {"title": "Wash", "quantity": 1, "unit_price": 150}
        del payload[missing]

        with pytest.raises(ValidationError) as exc_info:
            handler.validate(payload)

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["missing"] == [missing]

    @pytest.mark.parametrize("field,value", [
        ("title", ""),
        ("quantity", 0),
        ("unit_price", 0),
        ("unit_price", None),
    ])
    def test_falsy_field_counts_as_missing(self, handler, field, value):
        payload = {"title": "Wash", "quantity": 1, "unit_price": 150, field: value}

        with pytest.raises(ValidationError) as exc_info:
            handler.validate(payload)

        assert exc_info.value.details["missing"] == [field]

    @pytest.mark.parametrize("field,value", [
        ("quantity", "many"),
        ("quantity", 1.5),
        ("quantity", -2),
        ("quantity", True),
        ("unit_price", "free"),
        ("unit_price", -10),
        ("title", 42),
        ("title", "   "),
    ])
    def test_invalid_field(self, handler, field, value):
        payload = {"title": "Wash", "quantity": 1, "unit_price": 150, field: value}

        with pytest.raises(ValidationError) as exc_info:
            handler.validate(payload)

        assert exc_info.value.details["invalid"] == [field]

    @pytest.mark.parametrize("payload", [None, [], "Wash", 3])
    def test_non_object_payload(self, handler, payload):
        with pytest.raises(ValidationError):
            handler.validate(payload)


class TestBuildDescriptor:
    """Mapping onto the provider's preference shape."""

    def test_descriptor_shape(self, handler):
        descriptor = handler.build_descriptor(ProductLine(title="Wash", quantity=1, unit_price=150))

        assert descriptor.to_payload() == {
            "items": [
                {"title": "Wash", "quantity": 1, "unit_price": 150.0, "currency_id": "MXN"},
            ],
            "back_urls": {
                "success": "tuapp://success",
                "failure": "tuapp://failure",
                "pending": "tuapp://pending",
            },
            "auto_return": "approved",
        }

    def test_currency_comes_from_config(self, gateway):
        handler = PreferenceHandler(gateway, make_test_config(currency_id="ARS"))

        descriptor = handler.build_descriptor(ProductLine(title="Wash", quantity=1, unit_price=150))

        assert descriptor.items[0].currency_id == "ARS"


class TestCreatePreference:
    """End-to-end handler behaviour against provider fakes."""

    @pytest.mark.asyncio
    async def test_create_preference_success(self, handler, gateway, identity):
        result = await handler.create_preference(
            identity, {"title": "Wash", "quantity": 1, "unit_price": 150}
        )

        assert result.id == gateway.preference_id
        assert result.init_point == gateway.init_point
        assert len(gateway.calls) == 1
        item = gateway.calls[0].items[0]
        assert (item.title, item.quantity, item.unit_price, item.currency_id) == ("Wash", 1, 150.0, "MXN")

    @pytest.mark.asyncio
    async def test_success_is_logged(self, handler, gateway, identity):
        handler.logger = MagicMock()

        await handler.create_preference(identity, {"title": "Wash", "quantity": 1, "unit_price": 150})

        handler.logger.info.assert_called_once_with(
            "Preference created", preference_id=gateway.preference_id, sub="user-123"
        )

    @pytest.mark.asyncio
    async def test_client_currency_is_ignored(self, handler, gateway, identity):
        await handler.create_preference(
            identity, {"title": "Wash", "quantity": 1, "unit_price": 150, "currency_id": "USD"}
        )

        assert gateway.calls[0].items[0].currency_id == "MXN"

    @pytest.mark.asyncio
    async def test_validation_failure_skips_provider(self, handler, gateway, identity):
        with pytest.raises(ValidationError):
            await handler.create_preference(identity, {"title": "Wash"})

        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_provider_failure_is_logged_once(self, failing_gateway, config, identity):
        handler = PreferenceHandler(failing_gateway, config)
        handler.logger = MagicMock()

        with pytest.raises(ProviderError) as exc_info:
            await handler.create_preference(identity, {"title": "Wash", "quantity": 1, "unit_price": 150})

        assert len(failing_gateway.calls) == 1
        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {}
        handler.logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_unexpected_provider_exception_becomes_provider_error(self, make_gateway, config, identity):
        gateway = make_gateway(error=RuntimeError("connection reset"))
        handler = PreferenceHandler(gateway, config)
        handler.logger = MagicMock()

        with pytest.raises(ProviderError) as exc_info:
            await handler.create_preference(identity, {"title": "Wash", "quantity": 1, "unit_price": 150})

        assert "connection reset" not in exc_info.value.message
        assert exc_info.value.provider == "fake"
        assert len(gateway.calls) == 1
