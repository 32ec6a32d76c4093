"""MCP server exposing the wallet tools over stdio."""

from __future__ import annotations

import logging
from pathlib import Path

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from free_usdc_transfer import __version__
from free_usdc_transfer.config import ServerConfig
from free_usdc_transfer.tools.dispatcher import ToolDispatcher
from free_usdc_transfer.tools.wallet_tools import WalletServices
from free_usdc_transfer.wallet.manager import WalletManager
from free_usdc_transfer.wallet.networks import get_network
from free_usdc_transfer.wallet.provider import CdpWalletProvider
from free_usdc_transfer.wallet.resolver import AddressResolver, EnsNameClient
from free_usdc_transfer.wallet.store import JsonFileWalletStore
from free_usdc_transfer.wallet.transfers import TransferOrchestrator

logger = logging.getLogger("free_usdc_transfer.server")


def build_services(config: ServerConfig) -> WalletServices:
    """Wire the production collaborators from *config*.

    Raises :class:`~free_usdc_transfer.errors.ConfigError` when credentials
    are missing.
    """
    config.require_credentials()

    network = get_network(config.wallet.network)
    timeout = config.provider_timeout_seconds
    provider = CdpWalletProvider(config.cdp.api_key_name, config.cdp.private_key, timeout=timeout)
    store = JsonFileWalletStore(Path(config.wallet.state_file))
    resolver = AddressResolver(EnsNameClient(config.resolver.rpc_url, timeout=timeout))

    return WalletServices(
        manager=WalletManager(store, provider, network),
        resolver=resolver,
        transfers=TransferOrchestrator(store, provider, network),
        network=network,
    )


def build_server(dispatcher: ToolDispatcher, name: str = "free-usdc-transfer") -> Server:
    server = Server(name, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.parameters)
            for t in dispatcher.list_tools()
        ]

    # Arguments are validated by the dispatcher so callers get field-level messages.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        response = await dispatcher.dispatch(name, arguments)
        return [types.TextContent(type="text", text=item.text) for item in response.content]

    return server


async def serve(config: ServerConfig) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    dispatcher = ToolDispatcher(build_services(config))
    server = build_server(dispatcher, name=config.name)

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Free USDC transfer MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
