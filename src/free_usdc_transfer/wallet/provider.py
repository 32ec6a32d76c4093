"""Custodial wallet provider backed by the Coinbase Developer Platform SDK."""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Callable, TypeVar

from free_usdc_transfer.errors import ProviderError, ProviderTimeoutError, TransferOutcomeUnknownError
from free_usdc_transfer.models import ProvisionedWallet, TransferReceipt

logger = logging.getLogger("free_usdc_transfer.wallet.provider")

T = TypeVar("T")


async def call_with_timeout(
    operation: str,
    timeout: float,
    func: Callable[..., T],
    *args: Any,
    on_timeout: Callable[[], ProviderTimeoutError] | None = None,
    **kwargs: Any,
) -> T:
    """Run a blocking provider call in a worker thread under *timeout* seconds.

    The worker thread cannot be cancelled and keeps running after a timeout;
    *on_timeout* builds the error to raise in that case. Other exceptions are
    wrapped in :class:`ProviderError`.
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout)
    except asyncio.TimeoutError as exc:
        logger.error(f"{operation} timed out after {timeout:g}s")
        error = on_timeout() if on_timeout is not None else ProviderTimeoutError(operation, timeout)
        raise error from exc
    except ProviderError:
        raise
    except Exception as exc:
        logger.error(f"{operation} failed: {exc}")
        raise ProviderError(f"{operation} failed: {exc}") from exc


class WalletProvider:
    """Interface to a custodial wallet service.

    Seed material is whatever the provider needs to reconstruct a wallet;
    callers store it opaquely.
    """

    async def create_wallet(self, network_id: str) -> ProvisionedWallet:
        raise NotImplementedError

    async def get_default_address(self, wallet_id: str, seed_material: dict[str, Any]) -> str:
        raise NotImplementedError

    async def transfer(
        self,
        wallet_id: str,
        seed_material: dict[str, Any],
        amount: Decimal,
        asset_id: str,
        destination: str,
        gasless: bool = True,
    ) -> TransferReceipt:
        raise NotImplementedError


class CdpWalletProvider(WalletProvider):
    """Coinbase MPC wallets via ``cdp-sdk``.

    The SDK is synchronous, so every call runs in a worker thread bounded
    by *timeout* seconds.
    """

    def __init__(self, api_key_name: str, private_key: str, timeout: float = 60.0) -> None:
        from cdp import Cdp

        Cdp.configure(api_key_name, private_key)
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Blocking SDK calls
    # ------------------------------------------------------------------

    @staticmethod
    def _create(network_id: str) -> ProvisionedWallet:
        from cdp import Wallet

        wallet = Wallet.create(network_id=network_id)
        data = wallet.export_data().to_dict()
        return ProvisionedWallet(
            wallet_id=wallet.id,
            address=wallet.default_address.address_id,
            seed_material=data,
        )

    @staticmethod
    def _import(wallet_id: str, seed_material: dict[str, Any]):
        from cdp import Wallet, WalletData

        data = {"wallet_id": wallet_id, **seed_material}
        return Wallet.import_data(WalletData.from_dict(data))

    @classmethod
    def _default_address(cls, wallet_id: str, seed_material: dict[str, Any]) -> str:
        return cls._import(wallet_id, seed_material).default_address.address_id

    @classmethod
    def _load_wallet(cls, wallet_id: str, seed_material: dict[str, Any]) -> tuple[Any, str]:
        wallet = cls._import(wallet_id, seed_material)
        return wallet, wallet.default_address.address_id

    @staticmethod
    def _submit(
        wallet: Any,
        amount: Decimal,
        asset_id: str,
        destination: str,
        gasless: bool,
    ) -> tuple[str | None, str | None]:
        # Submission only; confirmation is left to the explorer.
        transfer = wallet.transfer(amount, asset_id, destination, gasless=gasless)
        return getattr(transfer, "transfer_id", None), getattr(transfer, "transaction_hash", None)

    # ------------------------------------------------------------------
    # Async interface
    # ------------------------------------------------------------------

    async def create_wallet(self, network_id: str) -> ProvisionedWallet:
        return await call_with_timeout("Wallet creation", self.timeout, self._create, network_id)

    async def get_default_address(self, wallet_id: str, seed_material: dict[str, Any]) -> str:
        return await call_with_timeout(
            "Wallet fetch", self.timeout, self._default_address, wallet_id, seed_material
        )

    async def transfer(
        self,
        wallet_id: str,
        seed_material: dict[str, Any],
        amount: Decimal,
        asset_id: str,
        destination: str,
        gasless: bool = True,
    ) -> TransferReceipt:
        wallet, sender = await call_with_timeout(
            "Wallet fetch", self.timeout, self._load_wallet, wallet_id, seed_material
        )
        transfer_id, tx_hash = await call_with_timeout(
            "Transfer submission",
            self.timeout,
            self._submit,
            wallet,
            amount,
            asset_id,
            destination,
            gasless,
            on_timeout=lambda: TransferOutcomeUnknownError(sender, self.timeout),
        )
        return TransferReceipt(
            sender_address=sender,
            destination=destination,
            amount=amount,
            asset_id=asset_id,
            transfer_id=transfer_id,
            transaction_hash=tx_hash,
        )
