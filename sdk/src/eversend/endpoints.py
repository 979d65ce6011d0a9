"""
Declarative table of Eversend API endpoints.

Each :class:`Endpoint` row captures everything that distinguishes one
operation from another: HTTP method, path template, request body model
and the shape of the successful payload.  The :class:`~eversend.executor.Executor`
turns a row plus caller arguments into a request, so adding an endpoint is
a one-line change here and a thin method in :mod:`eversend.resources`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Type

from .envelope import Payload
from .models import (
    BankBeneficiaryRequest,
    BankPayoutRequest,
    CryptoAddressRequest,
    ExchangeQuotationRequest,
    ExchangeRequest,
    MomoBeneficiaryRequest,
    MomoPayoutRequest,
    PayoutQuotationRequest,
    RequestBody,
)


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    payload: Payload
    body: Optional[Type[RequestBody]] = None
    unwrap: Optional[str] = None


_ROWS = (
    Endpoint("account.profile", "GET", "account", Payload.OBJECT),
    # wallets
    Endpoint("wallets.list", "GET", "wallets", Payload.ARRAY),
    Endpoint("wallets.find", "GET", "wallets/{currency}", Payload.OBJECT),
    # exchange
    Endpoint(
        "exchange.create_quotation", "POST", "exchanges/quotation", Payload.OBJECT,
        body=ExchangeQuotationRequest,
    ),
    Endpoint("exchange.create_exchange", "POST", "exchanges", Payload.OBJECT, body=ExchangeRequest),
    # payouts
    Endpoint(
        "payouts.delivery_countries", "GET", "payouts/countries", Payload.NESTED_ARRAY,
        unwrap="countries",
    ),
    Endpoint("payouts.delivery_banks", "GET", "payouts/banks/{country_code}", Payload.ARRAY),
    Endpoint(
        "payouts.create_quotation", "POST", "payouts/quotation", Payload.OBJECT,
        body=PayoutQuotationRequest,
    ),
    Endpoint("payouts.create_momo_payout", "POST", "payouts", Payload.OBJECT, body=MomoPayoutRequest),
    Endpoint("payouts.create_bank_payout", "POST", "payouts", Payload.OBJECT, body=BankPayoutRequest),
    Endpoint("payouts.transaction", "GET", "transactions/{transaction_id}", Payload.OBJECT),
    # beneficiaries
    Endpoint(
        "beneficiaries.create_momo", "POST", "beneficiaries", Payload.OPTIONAL_OBJECT,
        body=MomoBeneficiaryRequest,
    ),
    Endpoint(
        "beneficiaries.create_bank", "POST", "beneficiaries", Payload.OPTIONAL_OBJECT,
        body=BankBeneficiaryRequest,
    ),
    Endpoint(
        "beneficiaries.list", "GET", "beneficiaries", Payload.NESTED_ARRAY,
        unwrap="beneficiaries",
    ),
    Endpoint("beneficiaries.find", "GET", "beneficiaries/{beneficiary_id}", Payload.OBJECT),
    # crypto
    Endpoint("crypto.asset_chains", "GET", "crypto/assets/{coin}", Payload.ENVELOPE),
    Endpoint("crypto.addresses", "GET", "crypto/addresses", Payload.ENVELOPE),
    Endpoint(
        "crypto.create_address", "POST", "crypto/addresses", Payload.OBJECT,
        body=CryptoAddressRequest,
    ),
    Endpoint("crypto.transactions", "GET", "crypto/transactions", Payload.OBJECT),
    Endpoint(
        "crypto.address_transactions", "GET", "crypto/addresses/{address}/transactions",
        Payload.OBJECT,
    ),
)

ENDPOINTS: Dict[str, Endpoint] = {row.name: row for row in _ROWS}


__all__ = ["Endpoint", "ENDPOINTS"]
