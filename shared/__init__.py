"""
Shared utilities for the Checkout Access Layer.

This package aggregates common building blocks consumed by the services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and their HTTP rendering
- base_service: FastAPI application scaffolding
- test_helpers: Token and fake-provider factories for tests

Do not import from service packages into shared/.
"""
