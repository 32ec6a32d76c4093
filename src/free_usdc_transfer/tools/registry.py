"""Tool registry - declare tools and the schemas agents see for them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from free_usdc_transfer.models import ToolResponse

Handler = Callable[..., Awaitable[ToolResponse]]


def _strip_titles(schema: Any) -> Any:
    """Drop pydantic's auto-generated ``title`` keys."""
    if isinstance(schema, dict):
        return {
            key: _strip_titles(value)
            for key, value in schema.items()
            if key != "title"
        }
    if isinstance(schema, list):
        return [_strip_titles(item) for item in schema]
    return schema


@dataclass
class Tool:
    name: str
    description: str
    args_model: type[BaseModel]
    func: Handler

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON Schema of the tool's arguments."""
        schema = _strip_titles(self.args_model.model_json_schema())
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return schema


class ToolRegistry:
    """Registry of the tools this server exposes."""

    _instance: ToolRegistry | None = None
    _tools: dict[str, Tool]

    def __init__(self):
        self._tools = {}

    @classmethod
    def get(cls) -> ToolRegistry:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_tools(self) -> list[Tool]:
        return list(self._tools.values())


def tool(name: str, description: str, args_model: type[BaseModel]):
    """Decorator to register an async handler as a tool.

    Usage:
        @tool("create_mpc_wallet", "Create the wallet", CreateWalletArgs)
        async def create_mpc_wallet(services, args) -> ToolResponse:
            ...
    """

    def decorator(func: Handler) -> Handler:
        ToolRegistry.get().register(
            Tool(name=name, description=description, args_model=args_model, func=func)
        )
        return func

    return decorator
