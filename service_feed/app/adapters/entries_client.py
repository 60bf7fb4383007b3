"""
Upstream entries client for the Feed Service.
"""

from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from shared.logging import get_logger
from shared.errors import DecodeFailedError, FetchFailedError
from ..domain.models import CalendarEntry

_ENTRIES_ADAPTER = TypeAdapter(List[CalendarEntry])


class EntriesClient:
    """Client for retrieving calendar entries from the upstream JSON endpoint."""

    def __init__(
        self,
        upstream_url: str,
        timeout: float = 10.0,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.upstream_url = upstream_url
        self.logger = get_logger("feed.entries_client")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def fetch_entries(self) -> List[CalendarEntry]:
        """Fetch entries in upstream order."""
        try:
            response = await self._client.get(self.upstream_url)
        except httpx.HTTPError as exc:
            self.logger.error("Upstream request failed", url=self.upstream_url, error=str(exc))
            raise FetchFailedError(
                "could not fetch data",
                details={"url": self.upstream_url, "error": str(exc)}
            ) from exc

        if response.status_code != 200:
            self.logger.error(
                "Upstream returned unexpected status",
                url=self.upstream_url,
                status_code=response.status_code
            )
            raise FetchFailedError(
                f"could not fetch data: {response.status_code}",
                details={"url": self.upstream_url, "status_code": response.status_code}
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise DecodeFailedError(
                "could not unmarshal data",
                details={"url": self.upstream_url, "error": str(exc)}
            ) from exc

        if not isinstance(payload, list):
            raise DecodeFailedError(
                "upstream payload must be a JSON array",
                details={"url": self.upstream_url, "type": type(payload).__name__}
            )

        try:
            entries = _ENTRIES_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            raise DecodeFailedError(
                "upstream entries are malformed",
                details={"url": self.upstream_url, "errors": exc.error_count()}
            ) from exc

        self.logger.debug("Upstream entries retrieved", url=self.upstream_url, count=len(entries))
        return entries
