"""
Checkout Service package for the Checkout Access Layer.

Creates Mercado Pago payment preferences on behalf of authenticated
clients:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.auth: Bearer token verification against the shared signing secret.
- app.preferences: Product validation and preference shaping.
- app.adapters: Mercado Pago HTTP client.

Module import must not perform network calls; the only IO is the
provider call made from the route handler.
"""
