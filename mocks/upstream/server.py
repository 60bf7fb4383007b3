"""
Mock upstream entries source for local runs and integration tests.
"""

from typing import Any, Dict, List, Optional
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse

from shared.logging import get_logger


DEFAULT_ENTRIES: List[Dict[str, Any]] = [
    {
        "dateStart": "2024-01-08T09:00:00Z",
        "dateEnd": "2024-01-08T09:15:00Z",
        "description": "Standup"
    },
    {
        "dateStart": "2024-01-08T13:00:00Z",
        "dateEnd": "2024-01-08T14:30:00Z",
        "description": "Sprint planning"
    },
]


class MockUpstreamServer:
    """Mock upstream JSON entries endpoint."""

    def __init__(self, port: int = 8090, entries: Optional[List[Dict[str, Any]]] = None):
        self.port = port
        self.logger = get_logger("mock.upstream")
        self.app = FastAPI(title="Mock Upstream", version="1.0.0")

        # In-memory state
        self.entries: List[Dict[str, Any]] = list(entries if entries is not None else DEFAULT_ENTRIES)
        self.fail_with_status: Optional[int] = None
        self.raw_body: Optional[str] = None
        self.request_count = 0

        self._setup_routes()

    def set_entries(self, entries: List[Dict[str, Any]]) -> None:
        """Replace the served entries."""
        self.entries = list(entries)

    def fail(self, status_code: Optional[int] = 503, raw_body: Optional[str] = None) -> None:
        """Answer with ``status_code`` or, when it is 200, with ``raw_body`` verbatim."""
        self.fail_with_status = status_code
        self.raw_body = raw_body

    def recover(self) -> None:
        """Go back to serving entries."""
        self.fail_with_status = None
        self.raw_body = None

    def _setup_routes(self):
        """Set up mock routes."""

        @self.app.get("/entries")
        async def get_entries():
            """Serve the configured entries."""
            self.request_count += 1
            if self.fail_with_status is not None:
                self.logger.info("Mock upstream failing", status_code=self.fail_with_status)
                return Response(
                    content=self.raw_body or "upstream unavailable",
                    status_code=self.fail_with_status,
                    media_type="application/json" if self.raw_body else "text/plain"
                )
            return JSONResponse(content=self.entries)


def create_app():
    """Create mock upstream application."""
    server = MockUpstreamServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
