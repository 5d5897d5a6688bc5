"""HTTP routers; mounted under the API prefix by `farm_market.api.router`."""
