"""Agent-facing wallet tools.

``create_mpc_wallet`` provisions the server's single MPC wallet;
``buy_something_to_somebody`` sends USDC from it with sponsored fees.
Recoverable problems (no wallet yet, bad recipient) come back as text so
the agent can relay them; provider failures are raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from free_usdc_transfer.models import CreateWalletArgs, ToolResponse, TransferArgs
from free_usdc_transfer.tools.registry import tool

if TYPE_CHECKING:
    from free_usdc_transfer.wallet.manager import WalletManager
    from free_usdc_transfer.wallet.networks import Network
    from free_usdc_transfer.wallet.resolver import AddressResolver
    from free_usdc_transfer.wallet.transfers import TransferOrchestrator

logger = logging.getLogger("free_usdc_transfer.tools.wallet")


@dataclass
class WalletServices:
    """Collaborators the wallet tools act through."""

    manager: WalletManager
    resolver: AddressResolver
    transfers: TransferOrchestrator
    network: Network


def _format_amount(amount: Decimal) -> str:
    return format(amount.normalize(), "f")


@tool(
    "create_mpc_wallet",
    (
        "Create the MPC wallet used to send USDC. Only one wallet is ever created; "
        "calling this again returns the existing wallet address."
    ),
    CreateWalletArgs,
)
async def create_mpc_wallet(services: WalletServices, args: CreateWalletArgs) -> ToolResponse:
    result = await services.manager.ensure_wallet()
    network_id = services.network.network_id
    if result.created:
        return ToolResponse.from_text(
            f"Created MPC wallet {result.address} on {network_id}. "
            "Please fund it with USDC before sending payments."
        )
    return ToolResponse.from_text(
        f"MPC wallet already exists: {result.address}. "
        f"Fund it with USDC on {network_id} to make payments."
    )


@tool(
    "buy_something_to_somebody",
    (
        "Send USDC to somebody with zero fees, from the MPC wallet. The recipient "
        "may be a 0x address or an ENS name such as vitalik.eth."
    ),
    TransferArgs,
)
async def buy_something_to_somebody(services: WalletServices, args: TransferArgs) -> ToolResponse:
    request = args.to_request()

    wallet_id = services.manager.query_wallet_id()
    if wallet_id is None:
        return ToolResponse.from_text(
            "No MPC wallet found. Create one with the create_mpc_wallet tool "
            "and fund it with USDC first."
        )

    address = await services.resolver.resolve(request.recipient)
    if address is None:
        logger.warning(f"Unresolvable recipient: {request.recipient}")
        return ToolResponse.from_text(
            f"Invalid recipient '{request.recipient}'. Use a 0x address "
            "(42 characters) or an ENS name ending in .eth."
        )

    receipt = await services.transfers.transfer(wallet_id, address, request.amount)

    target = request.recipient
    if address != request.recipient:
        target = f"{request.recipient} ({address})"
    link = services.network.address_link(receipt.sender_address)
    return ToolResponse.from_text(
        f"Sent {_format_amount(request.amount)} USDC to {target} with zero fees. "
        f"The transfer was submitted and may take a moment to settle; "
        f"track it at {link}"
    )
