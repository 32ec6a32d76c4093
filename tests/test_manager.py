"""Tests for the wallet lifecycle and transfer orchestration."""

import asyncio
from decimal import Decimal

import pytest

from free_usdc_transfer.errors import ProviderError, TransferOutcomeUnknownError, WalletStateError
from free_usdc_transfer.wallet.manager import WalletManager
from free_usdc_transfer.wallet.store import JsonFileWalletStore, MemoryWalletStore
from free_usdc_transfer.wallet.transfers import TransferOrchestrator

from conftest import LITERAL_RECIPIENT, WALLET_ADDRESS, WALLET_ID


class FailingStore(MemoryWalletStore):
    def save(self, mapping):
        raise OSError("disk full")


def test_no_wallet_initially(manager):
    assert manager.query_wallet_id() is None


@pytest.mark.asyncio
async def test_query_wallet_empty(manager, provider):
    assert await manager.query_wallet() is None
    assert provider.fetch_calls == []


@pytest.mark.asyncio
async def test_ensure_wallet_creates_and_persists(manager, store, provider):
    result = await manager.ensure_wallet()

    assert result.created is True
    assert result.address == WALLET_ADDRESS
    assert provider.create_calls == ["base-mainnet"]
    assert list(store.load()) == [WALLET_ID]
    assert manager.query_wallet_id() == WALLET_ID


@pytest.mark.asyncio
async def test_ensure_wallet_is_idempotent(manager, store, provider):
    first = await manager.ensure_wallet()
    second = await manager.ensure_wallet()

    assert second.created is False
    assert second.address == first.address
    assert len(provider.create_calls) == 1
    assert len(store.load()) == 1


@pytest.mark.asyncio
async def test_concurrent_creation_is_single_flight(manager, store, provider):
    results = await asyncio.gather(*(manager.ensure_wallet() for _ in range(5)))

    assert [r.created for r in results].count(True) == 1
    assert {r.address for r in results} == {WALLET_ADDRESS}
    assert len(provider.create_calls) == 1
    assert len(store.load()) == 1


@pytest.mark.asyncio
async def test_query_wallet_hides_seed(funded_store, manager):
    record = await manager.query_wallet()

    assert record.wallet_id == WALLET_ID
    assert record.address == WALLET_ADDRESS
    assert "seed" not in record.model_dump()
    assert "deadbeef" not in repr(record)


@pytest.mark.asyncio
async def test_persistence_failure_propagates(provider, network):
    manager = WalletManager(FailingStore(), provider, network)

    with pytest.raises(OSError):
        await manager.ensure_wallet()


@pytest.mark.asyncio
async def test_corrupt_state_is_not_overwritten(tmp_path, provider, network):
    path = tmp_path / "mpc_info.json"
    path.write_text("{broken", encoding="utf-8")
    manager = WalletManager(JsonFileWalletStore(path), provider, network)

    with pytest.raises(WalletStateError):
        await manager.ensure_wallet()

    assert provider.create_calls == []
    assert path.read_text(encoding="utf-8") == "{broken"


@pytest.mark.asyncio
async def test_transfer_is_gasless_usdc(funded_store, provider, network):
    orchestrator = TransferOrchestrator(funded_store, provider, network)

    receipt = await orchestrator.transfer(WALLET_ID, LITERAL_RECIPIENT, Decimal("2.5"))

    assert receipt.sender_address == WALLET_ADDRESS
    assert provider.transfer_calls == [
        {
            "wallet_id": WALLET_ID,
            "seed_material": funded_store.load()[WALLET_ID],
            "amount": Decimal("2.5"),
            "asset_id": "usdc",
            "destination": LITERAL_RECIPIENT,
            "gasless": True,
        }
    ]


@pytest.mark.asyncio
async def test_transfer_failure_propagates(funded_store, provider, network):
    provider.transfer_error = ProviderError("insufficient balance")
    orchestrator = TransferOrchestrator(funded_store, provider, network)

    with pytest.raises(ProviderError, match="insufficient balance"):
        await orchestrator.transfer(WALLET_ID, LITERAL_RECIPIENT, Decimal("1"))


@pytest.mark.asyncio
async def test_transfer_unknown_wallet_id(store, provider, network):
    orchestrator = TransferOrchestrator(store, provider, network)

    with pytest.raises(WalletStateError):
        await orchestrator.transfer("missing", LITERAL_RECIPIENT, Decimal("1"))
    assert provider.transfer_calls == []


@pytest.mark.asyncio
async def test_transfer_timeout_points_at_explorer(funded_store, provider, network):
    provider.transfer_error = TransferOutcomeUnknownError(WALLET_ADDRESS, 60)
    orchestrator = TransferOrchestrator(funded_store, provider, network)

    with pytest.raises(TransferOutcomeUnknownError) as exc_info:
        await orchestrator.transfer(WALLET_ID, LITERAL_RECIPIENT, Decimal("1"))

    assert exc_info.value.explorer_link == network.address_link(WALLET_ADDRESS)
    assert f"Check {network.address_link(WALLET_ADDRESS)} before retrying" in str(exc_info.value)
