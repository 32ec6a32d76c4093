"""Error types for free-usdc-transfer."""

from __future__ import annotations

from typing import Any, Optional


class FreeUsdcError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ConfigError(FreeUsdcError):
    """Required configuration is missing or invalid. Fatal at startup."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("config_error", message, details)


class WalletStateError(FreeUsdcError):
    """The persisted wallet state exists but cannot be read."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("wallet_state_error", message, details)


class UnknownToolError(FreeUsdcError):
    def __init__(self, name: str):
        super().__init__("unknown_tool", f"Unknown tool: {name}", {"name": name})


class ProviderError(FreeUsdcError):
    """The wallet provider or name service rejected or failed a call."""

    def __init__(self, message: str, code: str = "provider_error"):
        super().__init__(code, message)


class ProviderTimeoutError(ProviderError):
    def __init__(self, operation: str, timeout: float):
        super().__init__(
            f"{operation} did not complete within {timeout:g}s",
            code="provider_timeout",
        )
        self.operation = operation
        self.timeout = timeout


class TransferOutcomeUnknownError(ProviderTimeoutError):
    """A transfer submission timed out and may still have gone through."""

    def __init__(self, sender_address: str, timeout: float, explorer_link: Optional[str] = None):
        super().__init__("Transfer submission", timeout)
        self.code = "transfer_outcome_unknown"
        self.sender_address = sender_address
        self.explorer_link = explorer_link
        where = explorer_link or f"the token transfers of {sender_address}"
        self.message = (
            f"Transfer submission from {sender_address} did not answer within {timeout:g}s. "
            f"The transfer may still have been submitted. Check {where} before retrying."
        )
        self.args = (self.message,)
