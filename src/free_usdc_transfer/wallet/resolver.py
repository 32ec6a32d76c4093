"""Recipient resolution: raw addresses and ENS names."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from free_usdc_transfer.errors import ProviderError, ProviderTimeoutError

logger = logging.getLogger("free_usdc_transfer.wallet.resolver")

ENS_SUFFIX = ".eth"
ADDRESS_LENGTH = 42  # "0x" + 40 hex digits


class NameClient:
    """Looks up the address record of a human-readable name."""

    async def address(self, name: str) -> Optional[str]:
        raise NotImplementedError


class EnsNameClient(NameClient):
    """ENS lookups over an Ethereum mainnet JSON-RPC endpoint."""

    def __init__(self, rpc_url: str, timeout: float = 60.0) -> None:
        from web3 import AsyncHTTPProvider, AsyncWeb3

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))

    async def address(self, name: str) -> Optional[str]:
        try:
            result = await asyncio.wait_for(self._w3.ens.address(name), self.timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(f"ENS lookup of {name}", self.timeout) from exc
        except Exception as exc:
            raise ProviderError(f"ENS lookup of {name} failed: {exc}") from exc
        return str(result) if result else None


class AddressResolver:
    """Turns a recipient string into an address, or ``None``.

    Names ending in ``.eth`` (any case) go through the name client. Anything
    else is accepted verbatim when it has the length of an address. No
    on-chain existence check is made.
    """

    def __init__(self, name_client: NameClient) -> None:
        self.name_client = name_client

    @staticmethod
    def is_name(recipient: str) -> bool:
        return recipient.lower().endswith(ENS_SUFFIX)

    async def resolve(self, recipient: str) -> Optional[str]:
        if self.is_name(recipient):
            address = await self.name_client.address(recipient)
            if address is None:
                logger.info(f"No address record for {recipient}")
            else:
                logger.info(f"Resolved {recipient} -> {address}")
            return address

        if len(recipient) == ADDRESS_LENGTH:
            return recipient
        return None
