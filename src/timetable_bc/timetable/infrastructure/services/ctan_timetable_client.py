"""HTTP client for the Andalusian transport consortia (CTAN) timetable API.

Usage:
    from src.timetable_bc.timetable.infrastructure.services import CtanTimetableClient

    with CtanTimetableClient("https://api.ctan.es") as client:
        payload = client.load_timetable(6, "52", "10")
"""

import logging
from typing import Any, Optional

import httpx

from src.timetable_bc.timetable.domain.exceptions import TimetableSourceError

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "ES"
DEFAULT_TIMEOUT_SECONDS = 30.0
TIMETABLE_PATH = "/v1/Consorcios/{consortium_id}/horarios_origen_destino"


class CtanTimetableClient:
    """Fetches raw origin/destination timetables (horarios_origen_destino)."""

    def __init__(
        self,
        base_url: str,
        language: str = DEFAULT_LANGUAGE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "CtanTimetableClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def timetable_url(self, consortium_id: int) -> str:
        return self.base_url + TIMETABLE_PATH.format(consortium_id=consortium_id)

    def load_timetable(
        self,
        consortium_id: int,
        origin_nucleus_id: str,
        destination_nucleus_id: str,
    ) -> Any:
        """Fetch the raw timetable JSON between two nuclei.

        Returns:
            Decoded JSON body, untouched (see RouteTimetableResponse.from_api)

        Raises:
            TimetableSourceError: network/HTTP failure or a body that is not JSON
        """
        url = self.timetable_url(consortium_id)
        params = {
            "origen": origin_nucleus_id,
            "destino": destination_nucleus_id,
            "lang": self.language,
        }

        try:
            response = self._client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching timetable {origin_nucleus_id}->{destination_nucleus_id}: {e}")
            raise TimetableSourceError(f"Could not fetch timetable from {url}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Timetable response from {url} is not JSON: {e}")
            raise TimetableSourceError(f"Timetable response from {url} is not JSON") from e

        if isinstance(payload, dict):
            schedule = payload.get("horario")
            count = len(schedule) if isinstance(schedule, list) else 0
            logger.info(
                f"Fetched {count} timetable entries for consortium {consortium_id} "
                f"({origin_nucleus_id}->{destination_nucleus_id})"
            )
        return payload
