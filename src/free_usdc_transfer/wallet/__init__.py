"""Custodial wallet system for free-usdc-transfer.

Keeps one Coinbase MPC wallet per deployment, resolves recipients from
addresses or ENS names, and submits gasless USDC transfers.
"""

from free_usdc_transfer.wallet.manager import WalletManager
from free_usdc_transfer.wallet.networks import Network, get_network
from free_usdc_transfer.wallet.provider import CdpWalletProvider, WalletProvider
from free_usdc_transfer.wallet.resolver import AddressResolver, EnsNameClient, NameClient
from free_usdc_transfer.wallet.store import JsonFileWalletStore, MemoryWalletStore, WalletStore
from free_usdc_transfer.wallet.transfers import TransferOrchestrator

__all__ = [
    "AddressResolver",
    "CdpWalletProvider",
    "EnsNameClient",
    "JsonFileWalletStore",
    "MemoryWalletStore",
    "NameClient",
    "Network",
    "TransferOrchestrator",
    "WalletManager",
    "WalletProvider",
    "WalletStore",
    "get_network",
]
