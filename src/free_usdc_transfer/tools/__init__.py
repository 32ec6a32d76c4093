"""Tool system for free-usdc-transfer - registry, handlers, and dispatch."""
