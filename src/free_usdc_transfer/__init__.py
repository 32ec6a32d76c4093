"""Free USDC Transfer - an MCP server for gasless USDC payments.

Provisions a single Coinbase MPC wallet and sends USDC from it with
sponsored fees. Recipients may be raw addresses or ENS names.
"""

__version__ = "0.1.0"
