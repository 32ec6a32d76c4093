"""Routes tool calls to their handlers.

Invalid arguments, a missing wallet, an unresolvable recipient and
unreadable wallet state are answered with text. Unknown tool names and
provider failures are raised for the transport to report as errors.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from free_usdc_transfer.errors import UnknownToolError, WalletStateError
from free_usdc_transfer.models import ToolResponse
from free_usdc_transfer.tools.registry import Tool, ToolRegistry
from free_usdc_transfer.tools.wallet_tools import WalletServices  # registers the wallet tools

logger = logging.getLogger("free_usdc_transfer.tools.dispatcher")


def format_validation_error(tool_name: str, exc: ValidationError) -> str:
    """One ``field: rule`` clause per failed check."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{field}: {error['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


class ToolDispatcher:
    """Validates raw tool arguments and invokes the matching handler."""

    def __init__(self, services: WalletServices, registry: ToolRegistry | None = None) -> None:
        self.services = services
        self.registry = registry or ToolRegistry.get()

    def list_tools(self) -> list[Tool]:
        return self.registry.get_tools()

    async def dispatch(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResponse:
        tool = self.registry.get_tool(name)
        if tool is None:
            logger.error(f"Call to unknown tool {name!r}")
            raise UnknownToolError(name)

        try:
            args = tool.args_model.model_validate(arguments or {})
        except ValidationError as exc:
            message = format_validation_error(name, exc)
            logger.info(message)
            return ToolResponse.from_text(message)

        logger.info(f"Dispatching {name}")
        try:
            return await tool.func(self.services, args)
        except WalletStateError as exc:
            logger.error(f"{name}: {exc.message}")
            return ToolResponse.from_text(
                f"The wallet state could not be read ({exc.message}). "
                "It was left untouched; fix or move the file and try again."
            )
