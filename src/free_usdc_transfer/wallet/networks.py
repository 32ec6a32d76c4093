"""Network definitions for the custodial wallet."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Network:
    """A network the wallet provider can create wallets on."""

    network_id: str
    chain_id: int
    explorer_url: str
    usdc_asset_id: str = "usdc"

    def address_link(self, address: str) -> str:
        """Explorer page listing the token transfers of *address*."""
        return f"{self.explorer_url}/address/{address}#tokentxns"


NETWORKS: dict[str, Network] = {
    "base-mainnet": Network(
        network_id="base-mainnet",
        chain_id=8453,
        explorer_url="https://basescan.org",
    ),
    "base-sepolia": Network(
        network_id="base-sepolia",
        chain_id=84532,
        explorer_url="https://sepolia.basescan.org",
    ),
}


def get_network(name: str) -> Network:
    """Get a network by id. Raises ``KeyError`` if not found."""
    if name not in NETWORKS:
        raise KeyError(
            f"Unknown network '{name}'. Available: {list_network_names()}"
        )
    return NETWORKS[name]


def list_network_names() -> list[str]:
    """Return the ids of all supported networks."""
    return list(NETWORKS.keys())
