"""Pytest configuration and fixtures."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from free_usdc_transfer.models import ProvisionedWallet, TransferReceipt
from free_usdc_transfer.tools.dispatcher import ToolDispatcher
from free_usdc_transfer.tools.wallet_tools import WalletServices
from free_usdc_transfer.wallet.manager import WalletManager
from free_usdc_transfer.wallet.networks import get_network
from free_usdc_transfer.wallet.provider import WalletProvider
from free_usdc_transfer.wallet.resolver import AddressResolver, NameClient
from free_usdc_transfer.wallet.store import MemoryWalletStore
from free_usdc_transfer.wallet.transfers import TransferOrchestrator

WALLET_ID = "wallet-0001"
WALLET_ADDRESS = "0x1111111111111111111111111111111111111111"
LITERAL_RECIPIENT = "0x38918BF3174A1fD7d8264764B79AD5F389C318c3"
ALICE_ADDRESS = "0xAbC0000000000000000000000000000000000001"


class FakeProvider(WalletProvider):
    """In-memory provider that records every call."""

    def __init__(self) -> None:
        self.create_calls: list[str] = []
        self.fetch_calls: list[str] = []
        self.transfer_calls: list[dict] = []
        self.transfer_error: Exception | None = None

    async def create_wallet(self, network_id: str) -> ProvisionedWallet:
        self.create_calls.append(network_id)
        return ProvisionedWallet(
            wallet_id=WALLET_ID,
            address=WALLET_ADDRESS,
            seed_material={"wallet_id": WALLET_ID, "seed": "deadbeef", "network_id": network_id},
        )

    async def get_default_address(self, wallet_id, seed_material) -> str:
        self.fetch_calls.append(wallet_id)
        return WALLET_ADDRESS

    async def transfer(self, wallet_id, seed_material, amount, asset_id, destination, gasless=True):
        if self.transfer_error is not None:
            raise self.transfer_error
        self.transfer_calls.append(
            {
                "wallet_id": wallet_id,
                "seed_material": seed_material,
                "amount": amount,
                "asset_id": asset_id,
                "destination": destination,
                "gasless": gasless,
            }
        )
        return TransferReceipt(
            sender_address=WALLET_ADDRESS,
            destination=destination,
            amount=Decimal(amount),
            asset_id=asset_id,
            transfer_id="transfer-1",
        )


class FakeNameClient(NameClient):
    def __init__(self, records: dict[str, str] | None = None) -> None:
        self.records = records or {}
        self.lookups: list[str] = []

    async def address(self, name: str):
        self.lookups.append(name)
        return self.records.get(name.lower())


@pytest.fixture
def network():
    return get_network("base-mainnet")


@pytest.fixture
def store():
    return MemoryWalletStore()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def name_client():
    return FakeNameClient({"alice.eth": ALICE_ADDRESS})


@pytest.fixture
def manager(store, provider, network):
    return WalletManager(store, provider, network)


@pytest.fixture
def services(manager, store, provider, name_client, network):
    return WalletServices(
        manager=manager,
        resolver=AddressResolver(name_client),
        transfers=TransferOrchestrator(store, provider, network),
        network=network,
    )


@pytest.fixture
def dispatcher(services):
    return ToolDispatcher(services)


@pytest.fixture
def funded_store(store):
    """A store that already holds the wallet's seed."""
    store.save({WALLET_ID: {"wallet_id": WALLET_ID, "seed": "deadbeef", "network_id": "base-mainnet"}})
    return store


@pytest.fixture
def spy_resolver(services):
    """Wrap the resolver so tests can assert whether it was consulted."""
    spy = AsyncMock(wraps=services.resolver.resolve)
    services.resolver.resolve = spy
    return spy
