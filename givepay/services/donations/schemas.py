"""Request, transaction and record schemas for the donations endpoint."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DonationRequest(BaseModel):
    """Body accepted by `POST /`."""

    donation_amount: float = Field(alias="donationAmount", gt=0, allow_inf_nan=False, strict=True)
    nonce: str = Field(min_length=1)


class CustomerDetails(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class PayPalDetails(BaseModel):
    payer_first_name: str | None = None
    payer_last_name: str | None = None
    payer_email: str | None = None


class CreditCardDetails(BaseModel):
    cardholder_name: str | None = None


class Transaction(BaseModel):
    """Gateway-neutral view of the transaction fields the record builder reads."""

    id: str | None = None
    status: str | None = None
    amount: str
    currency_iso_code: str
    created_at: datetime | str
    customer: CustomerDetails = Field(default_factory=CustomerDetails)
    paypal_account: PayPalDetails | None = None
    credit_card: CreditCardDetails | None = None


class DonationDetails(BaseModel):
    """Normalized donation document written once per settled sale."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    amount: float
    currency: str
    created_at: datetime | str = Field(alias="createdAt")

    def to_document(self) -> dict[str, Any]:
        """Document shape stored in the collection (camelCase keys)."""

        return self.model_dump(by_alias=True)
