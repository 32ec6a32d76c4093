"""Pydantic models for wallet state, transfers, and tool responses."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Wallet state
# ---------------------------------------------------------------------------


class WalletRecord(BaseModel):
    """The single provisioned custodial wallet.

    ``seed_material`` is provider export data. It is excluded from
    serialization and ``repr`` so it cannot leak into responses or logs.
    """

    model_config = ConfigDict(frozen=True)

    wallet_id: str
    address: str
    seed_material: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)


class ProvisionedWallet(BaseModel):
    """What a provider hands back after creating a wallet."""

    model_config = ConfigDict(frozen=True)

    wallet_id: str
    address: str
    seed_material: dict[str, Any] = Field(exclude=True, repr=False)


class WalletProvisioning(BaseModel):
    """Outcome of :meth:`WalletManager.ensure_wallet`."""

    created: bool
    address: str


# ---------------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------------


class TransferRequest(BaseModel):
    """A validated, ephemeral transfer request."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(gt=0)
    recipient: str = Field(min_length=1)


class TransferReceipt(BaseModel):
    """Reference to a submitted (not necessarily confirmed) transfer."""

    sender_address: str
    destination: str
    amount: Decimal
    asset_id: str
    transfer_id: Optional[str] = None
    transaction_hash: Optional[str] = None


# ---------------------------------------------------------------------------
# Tool arguments and responses
# ---------------------------------------------------------------------------


class TransferArgs(BaseModel):
    """Arguments of ``buy_something_to_somebody``."""

    # Strict: JSON numbers only, no bools or numeric strings.
    usdc_amount: float = Field(
        gt=0,
        strict=True,
        allow_inf_nan=False,
        description="Amount of USDC to send",
    )
    recipient: str = Field(
        min_length=1,
        description="Recipient address (0x...) or ENS name (name.eth)",
    )

    def to_request(self) -> TransferRequest:
        return TransferRequest(amount=Decimal(str(self.usdc_amount)), recipient=self.recipient)


class CreateWalletArgs(BaseModel):
    """``create_mpc_wallet`` takes no arguments."""


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Uniform envelope returned for every handled tool outcome."""

    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> ToolResponse:
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)
