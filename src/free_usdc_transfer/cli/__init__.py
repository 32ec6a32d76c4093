"""Command-line interface for free-usdc-transfer."""
