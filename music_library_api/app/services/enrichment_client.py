"""
Client for the song enrichment service.

When a song is added the library asks an external service for its
release date, lyrics and a link::

    GET <base_url>?group=Muse&song=Uprising
    200 {"releaseDate": "03.09.2009", "text": "...", "link": "https://..."}

Any transport error, timeout, non-200 status or undecodable body is
reported as ``UpstreamError``.  Calls are never retried.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..core.exceptions import UpstreamError
from ..schemas.song import SongDetail

logger = logging.getLogger(__name__)


class EnrichmentClient:
    """Fetch ``SongDetail`` records for a group and song title."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        """Initialise the client.

        Args:
            base_url: URL of the lookup endpoint; ``group`` and ``song``
                are appended as query parameters.
            timeout: Seconds to wait for the whole request.
            client: Optional ``httpx.Client``.  If not supplied a new
                one is created; tests pass one with a mock transport.
        """
        self.base_url = base_url
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_song_details(self, group: str, song: str) -> SongDetail:
        """Return enrichment data for ``group``/``song`` or raise ``UpstreamError``."""
        params = {"group": group, "song": song}
        try:
            response = self.client.get(self.base_url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            logger.error("Enrichment request timed out for %s by %s: %s", song, group, exc)
            raise UpstreamError("timeout") from exc
        except httpx.HTTPError as exc:
            logger.error("Enrichment request failed for %s by %s: %s", song, group, exc)
            raise UpstreamError(str(exc)) from exc

        if response.status_code != httpx.codes.OK:
            logger.error(
                "Enrichment service returned %s for %s by %s",
                response.status_code,
                song,
                group,
            )
            raise UpstreamError(f"unexpected status {response.status_code}")

        try:
            return SongDetail.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Could not decode enrichment response for %s by %s: %s", song, group, exc)
            raise UpstreamError("invalid response body") from exc

    def close(self) -> None:
        self.client.close()
