from free_usdc_transfer.cli.app import app

app()
