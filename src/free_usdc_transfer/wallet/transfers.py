"""Gasless USDC transfers from the stored wallet."""

from __future__ import annotations

import logging
from decimal import Decimal

from free_usdc_transfer.errors import TransferOutcomeUnknownError, WalletStateError
from free_usdc_transfer.models import TransferReceipt
from free_usdc_transfer.wallet.networks import Network
from free_usdc_transfer.wallet.provider import WalletProvider
from free_usdc_transfer.wallet.store import WalletStore

logger = logging.getLogger("free_usdc_transfer.wallet.transfers")


class TransferOrchestrator:
    """Submits USDC transfers with provider-sponsored fees.

    Returns as soon as the provider accepts the transfer; finality is not
    awaited and nothing is recorded locally.
    """

    def __init__(self, store: WalletStore, provider: WalletProvider, network: Network) -> None:
        self.store = store
        self.provider = provider
        self.network = network

    async def transfer(self, wallet_id: str, recipient_address: str, amount: Decimal) -> TransferReceipt:
        seed = self.store.load().get(wallet_id)
        if seed is None:
            raise WalletStateError(
                f"No stored credentials for wallet {wallet_id}",
                details={"wallet_id": wallet_id},
            )

        logger.info(
            f"Submitting {amount} {self.network.usdc_asset_id.upper()} transfer "
            f"from wallet {wallet_id} to {recipient_address}"
        )
        try:
            receipt = await self.provider.transfer(
                wallet_id,
                seed,
                amount,
                self.network.usdc_asset_id,
                recipient_address,
                gasless=True,
            )
        except TransferOutcomeUnknownError as exc:
            link = self.network.address_link(exc.sender_address)
            logger.error(f"Transfer from {exc.sender_address} has unknown outcome; check {link}")
            raise TransferOutcomeUnknownError(exc.sender_address, exc.timeout, explorer_link=link) from exc
        logger.info(
            f"Transfer submitted from {receipt.sender_address} "
            f"(id={receipt.transfer_id}, tx={receipt.transaction_hash})"
        )
        return receipt
