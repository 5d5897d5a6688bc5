"""Application entrypoint that delegates to the app factory."""

from farm_market.core.app_factory import create_app

app = create_app()
