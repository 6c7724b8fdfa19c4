"""Customer Schemas — request bodies for customer mutations."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class PaymentMethodUpdate(BaseModel):
    """Change of a customer's payment-method permissions. Always audited."""
    model_config = ConfigDict(extra="forbid")

    allows_boleto: StrictBool
    reason: str = Field(min_length=3, max_length=500)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("reason must have at least 3 non-blank characters")
        return v
