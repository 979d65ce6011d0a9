"""Tests for the resource operations exposed by EversendClient.

Every test wires the client to the in-memory FakeTransport, so the
assertions cover both the decoded results and the exact requests that
went out on the wire.
"""

from __future__ import annotations

import pytest

from eversend import APIError, AuthError, DecodeError, EversendClient, InvalidArgument
from eversend.models import Credentials
from tests.helpers.fake_transport import BASE_URL, FakeTransport


def make_client(transport: FakeTransport, clock) -> EversendClient:
    transport.add_auth(token="tok-1")
    return EversendClient("client-id", "client-secret", transport=transport, clock=clock)


@pytest.mark.asyncio
async def test_delivery_countries_unwraps_nested_countries(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "payouts/countries", {"data": {"countries": [{"code": "KE"}]}})

    countries = await client.payouts.delivery_countries()

    assert countries == [{"code": "KE"}]


@pytest.mark.asyncio
async def test_exchange_quotation_round_trip(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "exchanges/quotation", {"data": {"token": "tok123", "rate": 1.5}})

    quotation = await client.exchange.create_quotation("UGX", 1000, "USD")

    assert quotation == {"token": "tok123", "rate": 1.5}
    request = transport.last("exchanges/quotation")
    assert request.json() == {"from": "UGX", "amount": 1000, "to": "USD"}
    assert list(request.json()) == ["from", "amount", "to"]
    assert request.headers["Authorization"] == "Bearer tok-1"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_create_exchange_sends_quotation_token(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "exchanges", {"data": {"status": "SUCCESS"}})

    result = await client.exchange.create_exchange("tok123")

    assert result == {"status": "SUCCESS"}
    assert transport.last("exchanges").json() == {"token": "tok123"}


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["exchange", "payout"])
async def test_negative_amount_is_rejected_without_network(transport, clock, operation) -> None:
    client = EversendClient("client-id", "client-secret", transport=transport, clock=clock)

    with pytest.raises(InvalidArgument):
        if operation == "exchange":
            await client.exchange.create_quotation("UGX", -1, "USD")
        else:
            await client.payouts.create_quotation("UGX", -1, "momo", "KE", "KES", "SOURCE")

    assert transport.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [True, "1000", None])
async def test_wrongly_typed_amount_is_rejected_without_network(transport, clock, amount) -> None:
    client = EversendClient("client-id", "client-secret", transport=transport, clock=clock)

    with pytest.raises(InvalidArgument):
        await client.exchange.create_quotation("UGX", amount, "USD")
    with pytest.raises(InvalidArgument):
        await client.payouts.create_quotation("UGX", amount, "momo", "KE", "KES")

    assert transport.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("amount_type", ["", None])
async def test_payout_quotation_defaults_amount_type_to_source(transport, clock, amount_type) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "payouts/quotation", {"data": {"token": "pq-1"}})

    await client.payouts.create_quotation("UGX", 5000, "momo", "KE", "KES", amount_type)

    assert transport.last("payouts/quotation").json() == {
        "sourceWallet": "UGX",
        "amount": 5000,
        "type": "momo",
        "destinationCountry": "KE",
        "destinationCurrency": "KES",
        "amountType": "SOURCE",
    }


@pytest.mark.asyncio
async def test_payout_quotation_keeps_explicit_amount_type(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "payouts/quotation", {"data": {"token": "pq-1"}})

    await client.payouts.create_quotation("UGX", 10.5, "bank", "NG", "NGN", amount_type="DESTINATION")

    body = transport.last("payouts/quotation").json()
    assert body["amountType"] == "DESTINATION"
    assert body["amount"] == 10.5


@pytest.mark.asyncio
async def test_bank_payout_body(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "payouts", {"data": {"transactionId": "BP1"}})

    result = await client.payouts.create_bank_payout(
        "pq-1", "+256700000000", "Jane", "Doe", "UG", "Stanbic", "Jane Doe", "SBIC", "0123456789"
    )

    assert result == {"transactionId": "BP1"}
    assert transport.last("payouts").json() == {
        "token": "pq-1",
        "phoneNumber": "+256700000000",
        "firstName": "Jane",
        "lastName": "Doe",
        "country": "UG",
        "bankName": "Stanbic",
        "bankAccountName": "Jane Doe",
        "bankCode": "SBIC",
        "bankAccountNumber": "0123456789",
    }


@pytest.mark.asyncio
async def test_momo_payout_body(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "payouts", {"data": {"transactionId": "MP1"}})

    await client.payouts.create_momo_payout("pq-1", "+254700000000", "John", "Doe", "KE")

    assert transport.last("payouts").json() == {
        "token": "pq-1",
        "phoneNumber": "+254700000000",
        "firstName": "John",
        "lastName": "Doe",
        "country": "KE",
    }


@pytest.mark.asyncio
async def test_get_requests_carry_bearer_token_and_no_body(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "wallets", {"data": [{"currency": "UGX", "balance": 10}]})

    wallets = await client.wallets.list()

    assert wallets == [{"currency": "UGX", "balance": 10}]
    request = transport.last("wallets")
    assert request.headers == {"Authorization": "Bearer tok-1"}
    assert request.body is None


@pytest.mark.asyncio
async def test_token_is_reused_across_operations(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "account", {"data": {"businessName": "Acme"}})
    transport.add("GET", "wallets/UGX", {"data": {"currency": "UGX"}})

    assert await client.account.profile() == {"businessName": "Acme"}
    assert await client.wallets.find("UGX") == {"currency": "UGX"}
    assert await client.get_valid_token() == "tok-1"

    assert transport.count("auth/token") == 1
    assert len(transport.requests) == 3


@pytest.mark.asyncio
async def test_path_identifiers_are_percent_encoded(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "beneficiaries/a%2Fb%20c", {"data": {"id": "a/b c"}})

    assert await client.beneficiaries.find("a/b c") == {"id": "a/b c"}


@pytest.mark.asyncio
async def test_api_error_carries_server_message(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("POST", "exchanges", {"message": "Quotation expired"}, status=400)

    with pytest.raises(APIError) as excinfo:
        await client.exchange.create_exchange("stale")

    assert excinfo.value.message == "Quotation expired"
    assert excinfo.value.status == 400
    assert not excinfo.value.retryable


@pytest.mark.asyncio
async def test_failure_status_with_success_shaped_body_is_decode_error(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "wallets", {"data": []}, status=500)

    with pytest.raises(DecodeError) as excinfo:
        await client.wallets.list()
    assert excinfo.value.status == 500
    assert excinfo.value.retryable


@pytest.mark.asyncio
async def test_success_status_with_wrong_shape_is_decode_error(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "wallets", {"data": {"currency": "UGX"}})

    with pytest.raises(DecodeError):
        await client.wallets.list()


@pytest.mark.asyncio
async def test_non_json_success_body_is_decode_error(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "account", b"not json")

    with pytest.raises(DecodeError):
        await client.account.profile()


@pytest.mark.asyncio
async def test_missing_nested_key_is_decode_error(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "payouts/countries", {"data": {"regions": []}})

    with pytest.raises(DecodeError):
        await client.payouts.delivery_countries()


@pytest.mark.asyncio
async def test_auth_failure_stops_resource_call(transport, clock) -> None:
    transport.add("GET", "auth/token", {"message": "invalid credentials"}, status=401)
    client = EversendClient("client-id", "client-secret", transport=transport, clock=clock)

    with pytest.raises(AuthError):
        await client.wallets.list()

    assert transport.count("wallets") == 0


@pytest.mark.asyncio
async def test_beneficiary_list_and_creation(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "beneficiaries", {"data": {"beneficiaries": [{"id": 1}], "total": 1}})
    transport.add("POST", "beneficiaries", {"message": "Beneficiary created"})

    assert await client.beneficiaries.list() == [{"id": 1}]
    assert await client.beneficiaries.create_momo("Jane", "Doe", "UG", "+256700000000") == {}
    assert transport.last("beneficiaries").json() == {
        "firstName": "Jane",
        "lastName": "Doe",
        "country": "UG",
        "phoneNumber": "+256700000000",
        "isBank": False,
        "isMomo": True,
    }

    await client.beneficiaries.create_bank("Jane", "Doe", "UG", "Stanbic", "Jane Doe", "SBIC", "0123")
    assert transport.last("beneficiaries").json() == {
        "firstName": "Jane",
        "lastName": "Doe",
        "country": "UG",
        "bankName": "Stanbic",
        "bankAccountName": "Jane Doe",
        "bankCode": "SBIC",
        "bankAccountNumber": "0123",
        "isBank": True,
        "isMomo": True,
    }


@pytest.mark.asyncio
async def test_crypto_operations(transport, clock) -> None:
    client = make_client(transport, clock)
    envelope = {"data": [{"assetId": "USDT_TRON"}], "message": "ok", "success": True}
    transport.add("GET", "crypto/assets/USDT", envelope)
    transport.add("GET", "crypto/addresses", {"data": {"addresses": []}})
    transport.add("POST", "crypto/addresses", {"data": {"address": "T9yD"}})
    transport.add("GET", "crypto/transactions", {"data": {"transactions": []}})
    transport.add("GET", "crypto/addresses/T9yD/transactions", {"data": {"transactions": [1]}})

    assert await client.crypto.asset_chains("USDT") == envelope
    assert await client.crypto.addresses() == {"data": {"addresses": []}}
    assert await client.crypto.create_address("USDT_TRON", "Acme", "ops@acme.test", "deposits") == {
        "address": "T9yD"
    }
    assert transport.last("crypto/addresses").json() == {
        "assetId": "USDT_TRON",
        "ownerName": "Acme",
        "destinationAddressDescription": "ops@acme.test",
        "purpose": "deposits",
    }
    assert await client.crypto.transactions() == {"transactions": []}
    assert await client.crypto.address_transactions("T9yD") == {"transactions": [1]}


@pytest.mark.asyncio
async def test_transaction_and_delivery_banks(transport, clock) -> None:
    client = make_client(transport, clock)
    transport.add("GET", "transactions/BP1801706452633548", {"data": {"status": "SUCCESSFUL"}})
    transport.add("GET", "payouts/banks/NG", {"data": [{"code": "044"}]})

    assert await client.payouts.transaction("BP1801706452633548") == {"status": "SUCCESSFUL"}
    assert await client.payouts.delivery_banks("NG") == [{"code": "044"}]
    assert transport.last("payouts/banks/NG").url == BASE_URL + "payouts/banks/NG"


def test_empty_credentials_are_rejected() -> None:
    with pytest.raises(InvalidArgument):
        EversendClient("", "secret", transport=FakeTransport())


@pytest.mark.parametrize("client_id, client_secret", [("", "secret"), ("id", ""), (None, "secret")])
def test_credentials_create_raises_invalid_argument(client_id, client_secret) -> None:
    with pytest.raises(InvalidArgument):
        Credentials.create(client_id, client_secret)


@pytest.mark.asyncio
async def test_client_context_manager_closes_owned_transport_only(transport, clock) -> None:
    async with EversendClient("id", "secret", transport=transport, clock=clock):
        pass
    # Injected transports belong to the caller.
    assert transport.closed is False


@pytest.mark.asyncio
async def test_clients_can_share_a_token_manager(transport, clock) -> None:
    first = make_client(transport, clock)
    second = EversendClient(
        "client-id", "client-secret", transport=transport, token_manager=first.token_manager
    )
    transport.add("GET", "account", {"data": {}})

    await first.account.profile()
    await second.account.profile()

    assert transport.count("auth/token") == 1
