"""Route timetable entities.

Raw shapes mirror the consortium "horarios_origen_destino" feed (Spanish keys:
horario, frecuencias, idlinea, codigo, horas, dias, observaciones). Other keys
(bloques, demandahoras) are not read.
Resolved entries are what the timetable mapper hands back to callers.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

from src.timetable_bc.frequency.domain.entities import Frequency
from src.timetable_bc.timetable.domain.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

PLACEHOLDER_TIME = "--"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class RawScheduleEntry:
    """One scheduled trip as published by the feed.

    times[0] is the departure at the origin, times[1] the arrival at the
    destination; "--" marks a stop the trip does not serve.
    """

    line_id: str
    line_code: str
    times: Tuple[str, ...]
    frequency_code: str
    notes: str = ""

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "RawScheduleEntry":
        """Create RawScheduleEntry from a feed "horario" item."""
        hours = item.get("horas")
        if isinstance(hours, (list, tuple)):
            times = tuple(_text(h) for h in hours)
        else:
            times = ()

        return cls(
            line_id=_text(item.get("idlinea")),
            line_code=_text(item.get("codigo")),
            times=times,
            frequency_code=_text(item.get("dias")),
            notes=_text(item.get("observaciones")),
        )

    def time_at(self, index: int) -> Optional[str]:
        """Time-of-day text at a position, None if absent, blank or "--"."""
        if index >= len(self.times):
            return None
        value = self.times[index].strip()
        if not value or value == PLACEHOLDER_TIME:
            return None
        return value

    @property
    def departure_text(self) -> Optional[str]:
        return self.time_at(0)

    @property
    def arrival_text(self) -> Optional[str]:
        return self.time_at(1)


@dataclass(frozen=True)
class RawFrequencyMetadata:
    """Frequency description from the feed's "frecuencias" list."""

    id: str
    code: str
    display_name: str

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "RawFrequencyMetadata":
        return cls(
            id=_text(item.get("idfrecuencia")),
            code=_text(item.get("acronimo")),
            display_name=_text(item.get("nombre")),
        )

    def to_frequency(self) -> Frequency:
        return Frequency(id=self.id, code=self.code, name=self.display_name)


def _list_field(payload: Mapping[str, Any], key: str) -> list:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise MalformedResponseError(
            f"Timetable field '{key}' must be a list, got {type(value).__name__}"
        )
    return list(value)


def _mappings(items: list, key: str) -> list:
    kept = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            logger.warning(f"Skipping {key}[{position}]: expected an object, got {type(item).__name__}")
            continue
        kept.append(item)
    return kept


@dataclass(frozen=True)
class RouteTimetableResponse:
    """Origin/destination timetable as returned by the feed."""

    entries: Tuple[RawScheduleEntry, ...] = ()
    frequencies: Tuple[RawFrequencyMetadata, ...] = ()

    @classmethod
    def from_api(cls, payload: Any) -> "RouteTimetableResponse":
        """Parse the feed JSON.

        Missing or null lists count as empty. Raises MalformedResponseError
        when the payload is not an object or one of its lists is not a list.
        """
        if not isinstance(payload, Mapping):
            raise MalformedResponseError(
                f"Timetable response must be an object, got {type(payload).__name__}"
            )

        return cls(
            entries=tuple(
                RawScheduleEntry.from_api(item)
                for item in _mappings(_list_field(payload, "horario"), "horario")
            ),
            frequencies=tuple(
                RawFrequencyMetadata.from_api(item)
                for item in _mappings(_list_field(payload, "frecuencias"), "frecuencias")
            ),
        )


@dataclass(frozen=True)
class MapperOptions:
    """Timezone the feed's wall-clock times are in, and the holiday flag for the query date."""

    timezone: str
    is_holiday: bool = False


@dataclass(frozen=True)
class ResolvedTimetableEntry:
    """A trip that runs on the query date, with absolute departure/arrival instants."""

    line_id: str
    line_code: str
    departure_time: datetime
    arrival_time: datetime
    frequency: Frequency
    notes: Optional[str] = None
    is_holiday_only: bool = field(default=False)

    @property
    def duration_minutes(self) -> int:
        elapsed = self.arrival_time.timestamp() - self.departure_time.timestamp()
        return int(elapsed // 60)
