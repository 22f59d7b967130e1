"""Built-in API routes."""

from __future__ import annotations

from lotar.api_server import ApiServer

TEST_ROUTE = "/api/test"


def _test_handler(path: str) -> str:
    print(f"Executing test handler for path: {path}")
    return '{"result": "OK"}'


def initialize(api_server: ApiServer) -> None:
    """Register the built-in routes on the given server."""
    api_server.register_handler(TEST_ROUTE, _test_handler)