"""Service frequency classifier.

Consortium timetables tag every trip with an informal Spanish frequency code
("L-V", "S-D-F", "LVSA", "D y F", "M,X,J", ...) and, usually, a descriptive
name ("Lunes a viernes", "Sábados, domingos y festivos"). This module turns
that pair into a FrequencyRule and decides whether the trip runs on a given
weekday.

Resolution runs three passes, first hit wins:

1. match_code_table: exact lookup of the normalized code
2. decompose_code_letters: the code read letter by letter
   (L M X J V S D are days, A is a range, Y/I join, F means holidays)
3. match_name_keywords: weekday/holiday words in the code and name text

The code is the machine field, so passes 1 and 2 win over the name even when
the name says something else. Codes nothing understands are treated as
running every day.
"""

import logging
import unicodedata
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from src.timetable_bc.frequency.domain.entities import (
    FrequencyRule,
    FrequencyVerdict,
    RuleSource,
    Weekday,
)

logger = logging.getLogger(__name__)


def day_range(start: Weekday, end: Weekday) -> FrozenSet[Weekday]:
    """Inclusive weekday range, wrapping past Sunday (V a L = Fri..Mon)."""
    days = [start]
    current = start
    while current != end:
        current = Weekday.MONDAY if current == Weekday.SUNDAY else Weekday(current + 1)
        days.append(current)
    return frozenset(days)


ALL_DAYS = frozenset(Weekday)
WORKDAYS = day_range(Weekday.MONDAY, Weekday.FRIDAY)
WEEKEND = frozenset({Weekday.SATURDAY, Weekday.SUNDAY})
NO_DAYS: FrozenSet[Weekday] = frozenset()


# Normalized code -> (days, runs on holidays)
FREQUENCY_CODE_TABLE: Dict[str, Tuple[FrozenSet[Weekday], bool]] = {
    # Lunes a viernes
    "LV": (WORKDAYS, False),
    "LAV": (WORKDAYS, False),
    # Lunes a jueves
    "LJ": (day_range(Weekday.MONDAY, Weekday.THURSDAY), False),
    "LAJ": (day_range(Weekday.MONDAY, Weekday.THURSDAY), False),
    # Lunes a sábado
    "LS": (day_range(Weekday.MONDAY, Weekday.SATURDAY), False),
    "LAS": (day_range(Weekday.MONDAY, Weekday.SATURDAY), False),
    "LVSA": (day_range(Weekday.MONDAY, Weekday.SATURDAY), False),
    # Lunes a domingo
    "LD": (ALL_DAYS, False),
    "LAD": (ALL_DAYS, False),
    "LVSDF": (ALL_DAYS, True),
    # Lunes a viernes, domingos y festivos
    "LVDF": (WORKDAYS | {Weekday.SUNDAY}, True),
    # Martes a ...
    "MV": (day_range(Weekday.TUESDAY, Weekday.FRIDAY), False),
    "MJ": (day_range(Weekday.TUESDAY, Weekday.THURSDAY), False),
    "MS": (day_range(Weekday.TUESDAY, Weekday.SATURDAY), False),
    "MAD": (day_range(Weekday.TUESDAY, Weekday.SUNDAY), False),
    # Viernes a domingo
    "VD": (day_range(Weekday.FRIDAY, Weekday.SUNDAY), False),
    # Single days and weekends
    "S": (frozenset({Weekday.SATURDAY}), False),
    "SA": (frozenset({Weekday.SATURDAY}), False),
    "D": (frozenset({Weekday.SUNDAY}), False),
    "SD": (WEEKEND, False),
    "SYD": (WEEKEND, False),
    # Sábados, domingos y festivos
    "SDF": (WEEKEND, True),
    "SADF": (WEEKEND, True),
    "SYDF": (WEEKEND, True),
    # Domingos y festivos
    "DF": (frozenset({Weekday.SUNDAY}), True),
    "DYF": (frozenset({Weekday.SUNDAY}), True),
    # Festivos
    "F": (NO_DAYS, True),
    "FE": (NO_DAYS, True),
    "FES": (NO_DAYS, True),
    "FEST": (NO_DAYS, True),
    "FEL": (NO_DAYS, True),
}

DAY_LETTERS: Dict[str, Weekday] = {
    "L": Weekday.MONDAY,
    "M": Weekday.TUESDAY,
    "X": Weekday.WEDNESDAY,
    "J": Weekday.THURSDAY,
    "V": Weekday.FRIDAY,
    "S": Weekday.SATURDAY,
    "D": Weekday.SUNDAY,
}
RANGE_LETTER = "A"
CONJUNCTION_LETTERS = frozenset({"Y", "I"})
HOLIDAY_LETTER = "F"

DAY_TOKENS: Dict[str, Weekday] = {
    "lunes": Weekday.MONDAY,
    "lun": Weekday.MONDAY,
    "l": Weekday.MONDAY,
    "martes": Weekday.TUESDAY,
    "mar": Weekday.TUESDAY,
    "m": Weekday.TUESDAY,
    "miercoles": Weekday.WEDNESDAY,
    "mier": Weekday.WEDNESDAY,
    "mie": Weekday.WEDNESDAY,
    "mi": Weekday.WEDNESDAY,
    "x": Weekday.WEDNESDAY,
    "jueves": Weekday.THURSDAY,
    "juev": Weekday.THURSDAY,
    "jue": Weekday.THURSDAY,
    "j": Weekday.THURSDAY,
    "viernes": Weekday.FRIDAY,
    "vier": Weekday.FRIDAY,
    "vie": Weekday.FRIDAY,
    "v": Weekday.FRIDAY,
    "sabado": Weekday.SATURDAY,
    "sabados": Weekday.SATURDAY,
    "sab": Weekday.SATURDAY,
    "s": Weekday.SATURDAY,
    "domingo": Weekday.SUNDAY,
    "domingos": Weekday.SUNDAY,
    "dom": Weekday.SUNDAY,
    "d": Weekday.SUNDAY,
}
RANGE_CONNECTORS = frozenset({"a", "al", "hasta"})
DAILY_KEYWORDS = frozenset({"diario", "diaria", "diarios", "diarias", "diar"})
WORKDAY_KEYWORDS = frozenset({
    "laborable", "laborables", "lectivo", "lectivos", "lectiva", "lectivas",
})
HOLIDAY_KEYWORDS = frozenset({
    "festivo", "festivos", "festividad", "festividades", "fest",
})
HOLIDAY_EVENT_KEYWORDS = ("santo", "navidad", "nochebuena", "nochevieja", "reyes", "ano nuevo")
WEEKEND_PHRASE = ["fin", "de", "semana"]


def _strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_frequency_code(code: Optional[str]) -> str:
    """Uppercase ASCII letters of a code, separators dropped.

    Examples:
        "L-V" -> "LV"
        "L a V" -> "LAV"
        "M,X,J" -> "MXJ"
        "Sáb" -> "SAB"
    """
    if not code:
        return ""
    stripped = _strip_diacritics(code)
    return "".join(c for c in stripped if c.isascii() and c.isalpha()).upper()


def normalize_frequency_text(text: Optional[str]) -> str:
    """Lowercase, diacritics stripped, single-space separated words."""
    if not text:
        return ""
    stripped = _strip_diacritics(text).lower()
    cleaned = "".join(c if c.isascii() and c.isalnum() else " " for c in stripped)
    return " ".join(cleaned.split())


def match_code_table(code: Optional[str]) -> Optional[FrequencyRule]:
    """Pass 1: exact lookup of the normalized code."""
    entry = FREQUENCY_CODE_TABLE.get(normalize_frequency_code(code))
    if entry is None:
        return None
    days, include_holiday = entry
    return FrequencyRule(days, include_holiday, RuleSource.CODE_TABLE)


def decompose_code_letters(code: Optional[str]) -> Optional[FrequencyRule]:
    """Pass 2: read the normalized code one letter at a time.

    "LXV" -> Mon, Wed, Fri; "JVSDF" -> Thu..Sun plus holidays;
    "LAX" -> Mon..Wed. Returns None as soon as a letter is not part of the
    day alphabet, so words like "DIARIO" or "LABORABLES" fall through.
    """
    normalized = normalize_frequency_code(code)
    if not normalized:
        return None

    days: Set[Weekday] = set()
    include_holiday = False
    last_day: Optional[Weekday] = None
    awaiting_range = False

    for letter in normalized:
        if letter == RANGE_LETTER:
            if last_day is None:
                return None
            awaiting_range = True
            continue

        if letter in CONJUNCTION_LETTERS:
            awaiting_range = False
            continue

        if letter == HOLIDAY_LETTER:
            include_holiday = True
            awaiting_range = False
            continue

        day = DAY_LETTERS.get(letter)
        if day is None:
            return None

        if awaiting_range and last_day is not None:
            days.update(day_range(last_day, day))
        else:
            days.add(day)
        last_day = day
        awaiting_range = False

    if not days and not include_holiday:
        return None
    return FrequencyRule(frozenset(days), include_holiday, RuleSource.CODE_LETTERS)


def _collect_days(tokens: List[str]) -> Set[Weekday]:
    days: Set[Weekday] = set()
    last_day: Optional[Weekday] = None
    awaiting_range = False
    index = 0

    while index < len(tokens):
        token = tokens[index]

        if tokens[index:index + len(WEEKEND_PHRASE)] == WEEKEND_PHRASE:
            days.update(WEEKEND)
            last_day = Weekday.SUNDAY
            awaiting_range = False
            index += len(WEEKEND_PHRASE)
            continue

        if token in RANGE_CONNECTORS:
            awaiting_range = last_day is not None
        elif token in DAILY_KEYWORDS:
            days.update(ALL_DAYS)
            last_day = None
            awaiting_range = False
        elif token in WORKDAY_KEYWORDS:
            # "martes y jueves laborables" keeps its explicit days
            if not days:
                days.update(WORKDAYS)
            last_day = None
            awaiting_range = False
        else:
            day = DAY_TOKENS.get(token)
            if day is not None:
                if awaiting_range and last_day is not None:
                    days.update(day_range(last_day, day))
                else:
                    days.add(day)
                last_day = day
            awaiting_range = False

        index += 1

    return days


def _has_holiday_keyword(tokens: List[str], text: str) -> bool:
    if any(token in HOLIDAY_KEYWORDS for token in tokens):
        return True
    return any(keyword in text for keyword in HOLIDAY_EVENT_KEYWORDS)


def match_name_keywords(code: Optional[str], name: Optional[str] = None) -> Optional[FrequencyRule]:
    """Pass 3: weekday and holiday words in the code and descriptive name.

    Examples:
        "Lunes a viernes" -> Mon..Fri
        "Sábados, domingos y festivos" -> Sat, Sun, holidays
        "Diario" -> every day
        "Festivos" -> holidays only
    """
    parts = [part for part in (code, name) if part]
    text = normalize_frequency_text(" ".join(parts))
    if not text:
        return None

    tokens = text.split(" ")
    days = _collect_days(tokens)
    include_holiday = _has_holiday_keyword(tokens, text)

    if not days and not include_holiday:
        return None
    return FrequencyRule(frozenset(days), include_holiday, RuleSource.NAME_KEYWORDS)


def resolve_frequency_rule(code: Optional[str], name: Optional[str] = None) -> Optional[FrequencyRule]:
    """Run the three passes in order and return the first rule found.

    Returns None when nothing in the code or name is recognised.
    """
    rule = match_code_table(code) or decompose_code_letters(code)

    if rule is None:
        return match_name_keywords(code, name)

    if name:
        from_name = match_name_keywords(None, name)
        if from_name is not None and not rule.same_days_as(from_name):
            logger.debug(
                f"Frequency name '{name}' disagrees with code '{code}' "
                f"({rule.source.value} wins): "
                f"code days={sorted(int(d) for d in rule.allowed_days)} holiday={rule.include_holiday}, "
                f"name days={sorted(int(d) for d in from_name.allowed_days)} holiday={from_name.include_holiday}"
            )

    return rule


def verdict_for_rule(rule: Optional[FrequencyRule], weekday: int, is_holiday: bool) -> FrequencyVerdict:
    """Visibility of an already resolved rule on a weekday."""
    if rule is None:
        return FrequencyVerdict(visible=True, holiday_only=False)

    visible = (is_holiday and rule.include_holiday) or weekday in rule.allowed_days
    return FrequencyVerdict(visible=visible, holiday_only=rule.is_holiday_only)


def classify_frequency(
    code: Optional[str],
    weekday: int,
    is_holiday: bool = False,
    name: Optional[str] = None,
) -> FrequencyVerdict:
    """Decide whether a frequency code runs on an ISO weekday (1=Mon..7=Sun).

    Args:
        code: Raw frequency code as found in the feed (e.g. "S-D-F")
        weekday: ISO weekday of the query date in the timetable's timezone
        is_holiday: Whether the query date is a holiday
        name: Optional descriptive name from the feed's frequency metadata

    Returns:
        FrequencyVerdict. Unrecognised codes are visible and not holiday-only.
    """
    return verdict_for_rule(resolve_frequency_rule(code, name), weekday, is_holiday)
