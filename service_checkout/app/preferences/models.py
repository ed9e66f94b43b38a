"""
Preference data models for the Checkout service.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator


class ProductLine(BaseModel):
    """Validated product fields from a client request."""
    title: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., gt=0, allow_inf_nan=False)

    @field_validator("title", mode="before")
    @classmethod
    def _title_is_text(cls, value: Any) -> Any:
        # Numbers and booleans are not coerced into titles
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_is_count(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("quantity must be a number")
        if isinstance(value, str):
            value = value.strip()
            try:
                value = float(value)
            except ValueError:
                raise ValueError("quantity must be a number")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("quantity must be a whole number")
            return int(value)
        return value

    @field_validator("unit_price", mode="before")
    @classmethod
    def _unit_price_is_amount(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("unit_price must be a number")
        if isinstance(value, str):
            return value.strip()
        return value


class PreferenceItem(BaseModel):
    """Single line item sent to the provider."""
    title: str
    quantity: int
    unit_price: float
    currency_id: str


class BackUrls(BaseModel):
    """Redirect targets after checkout."""
    success: str
    failure: str
    pending: str


class PreferenceDescriptor(BaseModel):
    """Provider-side preference payload."""
    items: List[PreferenceItem]
    back_urls: BackUrls
    auto_return: str = "approved"

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class PreferenceResult(BaseModel):
    """Identifier and checkout URL returned by the provider."""
    id: str
    init_point: str

    def to_response(self) -> Dict[str, str]:
        return {"preferenceId": self.id, "init_point": self.init_point}


class PreferenceResponse(BaseModel):
    """Response body of ``POST /create_preference``."""
    preferenceId: str
    init_point: str


class ErrorBody(BaseModel):
    """JSON error body."""
    error: str
