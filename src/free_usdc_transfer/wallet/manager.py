"""High-level wallet manager used by the tool dispatcher and CLI."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from free_usdc_transfer.models import WalletProvisioning, WalletRecord
from free_usdc_transfer.wallet.networks import Network
from free_usdc_transfer.wallet.provider import WalletProvider
from free_usdc_transfer.wallet.store import WalletStore

logger = logging.getLogger("free_usdc_transfer.wallet.manager")


class WalletManager:
    """Owns the single wallet identity: queries it and creates it once.

    Absent or empty state means "no wallet". Unreadable state raises
    :class:`~free_usdc_transfer.errors.WalletStateError` from the store and
    is never overwritten.
    """

    def __init__(self, store: WalletStore, provider: WalletProvider, network: Network) -> None:
        self.store = store
        self.provider = provider
        self.network = network
        self._create_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def query_wallet_id(self) -> Optional[str]:
        """The stored wallet id, or ``None`` if no wallet exists."""
        mapping = self.store.load()
        return next(iter(mapping), None)

    async def query_wallet(self) -> Optional[WalletRecord]:
        """Reconstruct the stored wallet and read its default address."""
        mapping = self.store.load()
        if not mapping:
            return None
        wallet_id, seed = next(iter(mapping.items()))
        address = await self.provider.get_default_address(wallet_id, seed)
        return WalletRecord(wallet_id=wallet_id, address=address, seed_material=seed)

    # ------------------------------------------------------------------
    # Wallet lifecycle
    # ------------------------------------------------------------------

    async def ensure_wallet(self) -> WalletProvisioning:
        """Return the existing wallet, or create and persist a new one.

        Serialized so concurrent callers cannot both observe "absent".
        Provider and persistence failures propagate.
        """
        async with self._create_lock:
            existing = await self.query_wallet()
            if existing is not None:
                logger.info(f"Wallet {existing.wallet_id} already exists at {existing.address}")
                return WalletProvisioning(created=False, address=existing.address)

            wallet = await self.provider.create_wallet(self.network.network_id)
            try:
                self.store.save({wallet.wallet_id: wallet.seed_material})
            except OSError:
                logger.critical(
                    f"Wallet {wallet.wallet_id} ({wallet.address}) was created but its seed "
                    "could not be saved"
                )
                raise
            logger.info(
                f"Created wallet {wallet.wallet_id} at {wallet.address} on {self.network.network_id}"
            )
            return WalletProvisioning(created=True, address=wallet.address)
