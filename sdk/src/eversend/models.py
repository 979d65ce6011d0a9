"""
Typed models for the Eversend API using Pydantic.

The models fall into three groups:

* client state: :class:`Credentials` and :class:`Token`, both immutable so
  that a token is always replaced wholesale and never half-updated;
* response envelopes: the ``{data, message}`` wrapper every endpoint
  returns, with one model per expected payload shape so that schema drift
  surfaces as a validation error instead of a crash deep in caller code;
* request bodies: one model per bodied endpoint.  Attributes are
  snake_case, the wire uses the camelCase aliases.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
)

from .errors import InvalidArgument

#: Amount type used by payout quotations when the caller leaves it empty.
DEFAULT_AMOUNT_TYPE = "SOURCE"

_NEVER = datetime.min.replace(tzinfo=timezone.utc)


class Credentials(BaseModel):
    """Long-lived client credentials issued by Eversend."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1, repr=False)

    @classmethod
    def create(cls, client_id: str, client_secret: str) -> "Credentials":
        """Build credentials, raising :class:`InvalidArgument` when either is empty."""
        try:
            return cls(client_id=client_id, client_secret=client_secret)
        except ValidationError as exc:
            raise InvalidArgument("client_id and client_secret must be non-empty strings") from exc


class Token(BaseModel):
    """A bearer token together with the server-declared expiry of that value."""

    model_config = ConfigDict(frozen=True)

    value: str = Field("", repr=False)
    expires_at: datetime = _NEVER

    @classmethod
    def empty(cls) -> "Token":
        return cls()

    def is_valid(self, now: datetime) -> bool:
        # Strict comparison: a token expiring exactly now is already stale.
        return bool(self.value) and now < self.expires_at


# ---------------------------------------------------------------------------
# Response envelopes


class ErrorEnvelope(BaseModel):
    message: str


class TokenPayload(BaseModel):
    token: str
    expires: str


class ObjectEnvelope(BaseModel):
    data: Dict[str, Any]
    message: Optional[str] = None


class OptionalObjectEnvelope(BaseModel):
    data: Optional[Dict[str, Any]] = None
    message: Optional[str] = None


class ArrayEnvelope(BaseModel):
    data: List[Any]
    message: Optional[str] = None


# ---------------------------------------------------------------------------
# Request bodies


class RequestBody(BaseModel):
    """Base class for JSON request bodies."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def _check_amount(value: Union[int, float]) -> Union[int, float]:
    if not math.isfinite(value):
        raise ValueError("amount must be a finite number")
    if value < 0:
        raise ValueError("amount cannot be negative")
    return value


# Strict so that bools and numeric strings are rejected instead of coerced.
Amount = Annotated[Union[StrictInt, StrictFloat], AfterValidator(_check_amount)]


class ExchangeQuotationRequest(RequestBody):
    """Body of ``POST exchanges/quotation``."""

    from_currency: str = Field(..., alias="from")
    amount: Amount
    to_currency: str = Field(..., alias="to")


class ExchangeRequest(RequestBody):
    """Body of ``POST exchanges``; accepts a previously issued quotation."""

    token: str


class PayoutQuotationRequest(RequestBody):
    """Body of ``POST payouts/quotation``.

    ``transaction_type`` is ``"bank"`` or ``"momo"``.  ``amount_type`` is
    ``"SOURCE"`` (the amount is what leaves the wallet) or
    ``"DESTINATION"`` (the amount is what the recipient receives).
    """

    source_wallet: str = Field(..., alias="sourceWallet")
    amount: Amount
    transaction_type: str = Field(..., alias="type")
    destination_country: str = Field(..., alias="destinationCountry")
    destination_currency: str = Field(..., alias="destinationCurrency")
    amount_type: str = Field(DEFAULT_AMOUNT_TYPE, alias="amountType")

    @field_validator("amount_type", mode="before")
    @classmethod
    def _default_amount_type(cls, value: Any) -> Any:
        return value or DEFAULT_AMOUNT_TYPE


class MomoPayoutRequest(RequestBody):
    """Body of ``POST payouts`` for a mobile money recipient."""

    token: str
    phone_number: str = Field(..., alias="phoneNumber")
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    country: str


class BankPayoutRequest(MomoPayoutRequest):
    """Body of ``POST payouts`` for a bank account recipient."""

    bank_name: str = Field(..., alias="bankName")
    bank_account_name: str = Field(..., alias="bankAccountName")
    bank_code: str = Field(..., alias="bankCode")
    bank_account_number: str = Field(..., alias="bankAccountNumber")


class MomoBeneficiaryRequest(RequestBody):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    country: str
    phone_number: str = Field(..., alias="phoneNumber")
    is_bank: bool = Field(False, alias="isBank")
    is_momo: bool = Field(True, alias="isMomo")


class BankBeneficiaryRequest(RequestBody):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    country: str
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    bank_name: str = Field(..., alias="bankName")
    bank_account_name: str = Field(..., alias="bankAccountName")
    bank_code: str = Field(..., alias="bankCode")
    bank_account_number: str = Field(..., alias="bankAccountNumber")
    is_bank: bool = Field(True, alias="isBank")
    is_momo: bool = Field(True, alias="isMomo")


class CryptoAddressRequest(RequestBody):
    """Body of ``POST crypto/addresses``.

    ``destination_address_description`` should identify the end client,
    typically an email address or another unique identifier.
    """

    asset_id: str = Field(..., alias="assetId")
    owner_name: str = Field(..., alias="ownerName")
    destination_address_description: str = Field(..., alias="destinationAddressDescription")
    purpose: str


__all__ = [
    "DEFAULT_AMOUNT_TYPE",
    "Credentials",
    "Token",
    "ErrorEnvelope",
    "TokenPayload",
    "ObjectEnvelope",
    "OptionalObjectEnvelope",
    "ArrayEnvelope",
    "RequestBody",
    "ExchangeQuotationRequest",
    "ExchangeRequest",
    "PayoutQuotationRequest",
    "MomoPayoutRequest",
    "BankPayoutRequest",
    "MomoBeneficiaryRequest",
    "BankBeneficiaryRequest",
    "CryptoAddressRequest",
]
