"""
Resource groups exposed on :class:`~eversend.client.EversendClient`.

Each group is a thin, typed facade over :class:`~eversend.executor.Executor`:
methods only bind their arguments to a row of the endpoint table.  All
methods are coroutines and raise :class:`~eversend.errors.EversendError`
subclasses on failure.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .executor import Executor
from .models import DEFAULT_AMOUNT_TYPE

Number = Union[int, float]


class Resource:
    def __init__(self, executor: Executor) -> None:
        self._executor = executor


class Account(Resource):
    async def profile(self) -> Dict[str, Any]:
        """Fetch the business account profile."""
        return await self._executor.call("account.profile")


class Wallets(Resource):
    async def list(self) -> List[Any]:
        """List all wallets and their balances."""
        return await self._executor.call("wallets.list")

    async def find(self, currency: str) -> Dict[str, Any]:
        """Fetch a single wallet by currency code, e.g. ``"UGX"``."""
        return await self._executor.call("wallets.find", currency=currency)


class Exchange(Resource):
    async def create_quotation(self, from_currency: str, amount: Number, to_currency: str) -> Dict[str, Any]:
        """Price a currency exchange between two wallets.

        The returned quotation carries a ``token`` that must be passed to
        :meth:`create_exchange` before it expires.  Negative amounts are
        rejected with :class:`~eversend.errors.InvalidArgument` without
        contacting the API.
        """
        return await self._executor.call(
            "exchange.create_quotation",
            {"from_currency": from_currency, "amount": amount, "to_currency": to_currency},
        )

    async def create_exchange(self, quotation_token: str) -> Dict[str, Any]:
        """Execute a previously quoted exchange."""
        return await self._executor.call("exchange.create_exchange", {"token": quotation_token})


class Payouts(Resource):
    async def delivery_countries(self) -> List[Any]:
        """List the countries payouts can be delivered to."""
        return await self._executor.call("payouts.delivery_countries")

    async def delivery_banks(self, country_code: str) -> List[Any]:
        """List the banks available in a country (Alpha-2 code, e.g. ``"UG"``)."""
        return await self._executor.call("payouts.delivery_banks", country_code=country_code)

    async def create_quotation(
        self,
        source_wallet: str,
        amount: Number,
        transaction_type: str,
        destination_country: str,
        destination_currency: str,
        amount_type: Optional[str] = DEFAULT_AMOUNT_TYPE,
    ) -> Dict[str, Any]:
        """Price a payout, including fees, before sending it.

        Args:
            source_wallet: Currency of the wallet to debit.
            amount: Non-negative amount; see ``amount_type``.
            transaction_type: ``"momo"`` or ``"bank"``.
            destination_country: Alpha-2 country code of the recipient.
            destination_currency: Currency the recipient receives.
            amount_type: ``"SOURCE"`` when ``amount`` is what is sent,
                ``"DESTINATION"`` when it is what is received.  Empty
                values fall back to ``"SOURCE"``.
        """
        return await self._executor.call(
            "payouts.create_quotation",
            {
                "source_wallet": source_wallet,
                "amount": amount,
                "transaction_type": transaction_type,
                "destination_country": destination_country,
                "destination_currency": destination_currency,
                "amount_type": amount_type,
            },
        )

    async def create_momo_payout(
        self,
        payout_token: str,
        phone_number: str,
        first_name: str,
        last_name: str,
        country_code: str,
    ) -> Dict[str, Any]:
        """Send a quoted payout to a mobile money account."""
        return await self._executor.call(
            "payouts.create_momo_payout",
            {
                "token": payout_token,
                "phone_number": phone_number,
                "first_name": first_name,
                "last_name": last_name,
                "country": country_code,
            },
        )

    async def create_bank_payout(
        self,
        payout_token: str,
        phone_number: str,
        first_name: str,
        last_name: str,
        country_code: str,
        bank_name: str,
        bank_account_name: str,
        bank_code: str,
        bank_account_number: str,
    ) -> Dict[str, Any]:
        """Send a quoted payout to a bank account.

        ``bank_code`` comes from :meth:`delivery_banks`.
        """
        return await self._executor.call(
            "payouts.create_bank_payout",
            {
                "token": payout_token,
                "phone_number": phone_number,
                "first_name": first_name,
                "last_name": last_name,
                "country": country_code,
                "bank_name": bank_name,
                "bank_account_name": bank_account_name,
                "bank_code": bank_code,
                "bank_account_number": bank_account_number,
            },
        )

    async def transaction(self, transaction_id: str) -> Dict[str, Any]:
        return await self._executor.call("payouts.transaction", transaction_id=transaction_id)


class Beneficiaries(Resource):
    async def create_momo(
        self, first_name: str, last_name: str, country_code: str, phone_number: str
    ) -> Dict[str, Any]:
        """Save a mobile money beneficiary for later payouts."""
        return await self._executor.call(
            "beneficiaries.create_momo",
            {
                "first_name": first_name,
                "last_name": last_name,
                "country": country_code,
                "phone_number": phone_number,
            },
        )

    async def create_bank(
        self,
        first_name: str,
        last_name: str,
        country_code: str,
        bank_name: str,
        bank_account_name: str,
        bank_code: str,
        bank_account_number: str,
        phone_number: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Save a bank account beneficiary for later payouts."""
        return await self._executor.call(
            "beneficiaries.create_bank",
            {
                "first_name": first_name,
                "last_name": last_name,
                "country": country_code,
                "phone_number": phone_number,
                "bank_name": bank_name,
                "bank_account_name": bank_account_name,
                "bank_code": bank_code,
                "bank_account_number": bank_account_number,
            },
        )

    async def list(self) -> List[Any]:
        return await self._executor.call("beneficiaries.list")

    async def find(self, beneficiary_id: str) -> Dict[str, Any]:
        return await self._executor.call("beneficiaries.find", beneficiary_id=beneficiary_id)


class Crypto(Resource):
    async def asset_chains(self, coin: str) -> Dict[str, Any]:
        """Fetch the chains available for a coin, e.g. ``"USDT"``.

        Returns the whole response envelope.
        """
        return await self._executor.call("crypto.asset_chains", coin=coin)

    async def addresses(self) -> Dict[str, Any]:
        """List generated crypto addresses; returns the whole response envelope."""
        return await self._executor.call("crypto.addresses")

    async def create_address(
        self,
        asset_id: str,
        owner_name: str,
        destination_address_description: str,
        purpose: str,
    ) -> Dict[str, Any]:
        """Generate a deposit address for an asset returned by :meth:`asset_chains`."""
        return await self._executor.call(
            "crypto.create_address",
            {
                "asset_id": asset_id,
                "owner_name": owner_name,
                "destination_address_description": destination_address_description,
                "purpose": purpose,
            },
        )

    async def transactions(self) -> Dict[str, Any]:
        return await self._executor.call("crypto.transactions")

    async def address_transactions(self, address: str) -> Dict[str, Any]:
        return await self._executor.call("crypto.address_transactions", address=address)


__all__ = ["Account", "Wallets", "Exchange", "Payouts", "Beneficiaries", "Crypto"]
