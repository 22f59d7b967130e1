"""Path-prefix request dispatcher."""

from __future__ import annotations

from typing import Callable

Handler = Callable[[str], str]

NOT_FOUND_RESPONSE = "HTTP/1.1 404 NOT FOUND\r\n\r\n404 - Page not found."


def _normalize(path: str) -> str:
    return path.rstrip("/").lower()


class ApiServer:
    """Dispatches request paths to the handler with the longest matching prefix."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register_handler(self, path: str, callback: Handler) -> None:
        """Register a callback for a path; trailing slashes and case are ignored."""
        self._handlers[_normalize(path)] = callback

    def handle_request(self, request_path: str) -> str:
        """Run the best matching handler on the original path, or return a 404 response."""
        normalized = _normalize(request_path)
        matches = [prefix for prefix in self._handlers if normalized.startswith(prefix)]
        if not matches:
            return NOT_FOUND_RESPONSE
        best = max(matches, key=len)
        return self._handlers[best](request_path)