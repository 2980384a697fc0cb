"""Unit tests for the service frequency classifier."""

import logging

import pytest

from src.timetable_bc.frequency.domain.entities import RuleSource, Weekday
from src.timetable_bc.frequency.domain.services import (
    classify_frequency,
    decompose_code_letters,
    match_code_table,
    match_name_keywords,
    normalize_frequency_code,
    normalize_frequency_text,
    resolve_frequency_rule,
)
from src.timetable_bc.frequency.domain.services.frequency_classifier import day_range

MON, TUE, WED, THU, FRI, SAT, SUN = list(Weekday)
WORKDAYS = {MON, TUE, WED, THU, FRI}


class TestNormalization:
    """Tests for code and text normalization."""

    def test_code_drops_separators_and_uppercases(self):
        assert normalize_frequency_code("L-V") == "LV"
        assert normalize_frequency_code("L a V") == "LAV"
        assert normalize_frequency_code("M,X,J") == "MXJ"
        assert normalize_frequency_code("s-d-f") == "SDF"

    def test_code_strips_diacritics(self):
        assert normalize_frequency_code("Sáb.") == "SAB"

    def test_empty_code(self):
        assert normalize_frequency_code("") == ""
        assert normalize_frequency_code(None) == ""

    def test_text_is_lowercase_words(self):
        assert normalize_frequency_text("Sábados, domingos y festivos") == "sabados domingos y festivos"
        assert normalize_frequency_text("  LUNES   A VIERNES. ") == "lunes a viernes"


class TestDayRange:
    """Tests for inclusive weekday ranges."""

    def test_forward_range(self):
        assert day_range(MON, FRI) == WORKDAYS

    def test_wraps_past_sunday(self):
        assert day_range(FRI, MON) == {FRI, SAT, SUN, MON}

    def test_single_day(self):
        assert day_range(WED, WED) == {WED}


class TestCodeTable:
    """Tests for the exact-code pass."""

    @pytest.mark.parametrize("code", ["L-V", "LV", "L a V", "l-v"])
    def test_weekday_codes(self, code):
        rule = match_code_table(code)
        assert rule.allowed_days == WORKDAYS
        assert rule.include_holiday is False
        assert rule.source == RuleSource.CODE_TABLE

    def test_monday_to_saturday(self):
        assert match_code_table("LVSA").allowed_days == WORKDAYS | {SAT}

    def test_weekend_and_holidays(self):
        rule = match_code_table("S-D-F")
        assert rule.allowed_days == {SAT, SUN}
        assert rule.include_holiday is True

    def test_sunday_and_holidays(self):
        rule = match_code_table("D y F")
        assert rule.allowed_days == {SUN}
        assert rule.include_holiday is True

    def test_pure_holiday(self):
        rule = match_code_table("F")
        assert rule.allowed_days == set()
        assert rule.is_holiday_only is True

    def test_unknown_code(self):
        assert match_code_table("L-X-V") is None


class TestCodeLetters:
    """Tests for letter-by-letter decomposition."""

    def test_split_weekdays(self):
        rule = decompose_code_letters("L-X-V")
        assert rule.allowed_days == {MON, WED, FRI}
        assert rule.include_holiday is False
        assert rule.source == RuleSource.CODE_LETTERS

    def test_comma_list(self):
        assert decompose_code_letters("M,X,J").allowed_days == {TUE, WED, THU}

    def test_compact_code_with_holiday(self):
        rule = decompose_code_letters("JVSDF")
        assert rule.allowed_days == {THU, FRI, SAT, SUN}
        assert rule.include_holiday is True

    def test_range_letter(self):
        assert decompose_code_letters("L a X").allowed_days == {MON, TUE, WED}

    def test_wrapping_range(self):
        assert decompose_code_letters("V a L").allowed_days == {FRI, SAT, SUN, MON}

    def test_words_are_not_decomposed(self):
        assert decompose_code_letters("DIARIO") is None
        assert decompose_code_letters("LAB") is None

    def test_leading_range_letter(self):
        assert decompose_code_letters("A") is None

    def test_empty(self):
        assert decompose_code_letters("") is None
        assert decompose_code_letters("--") is None


class TestNameKeywords:
    """Tests for keyword matching over descriptive names."""

    def test_range_in_words(self):
        assert match_name_keywords(None, "Lunes a viernes").allowed_days == WORKDAYS

    def test_weekend_phrase(self):
        assert match_name_keywords(None, "Fin de semana").allowed_days == {SAT, SUN}

    def test_daily(self):
        assert match_name_keywords(None, "Diario").allowed_days == set(Weekday)

    def test_workdays_word(self):
        assert match_name_keywords(None, "Laborables").allowed_days == WORKDAYS

    def test_workdays_word_keeps_explicit_days(self):
        rule = match_name_keywords(None, "Martes y jueves laborables")
        assert rule.allowed_days == {TUE, THU}

    def test_holidays_only(self):
        rule = match_name_keywords(None, "Festivos")
        assert rule.allowed_days == set()
        assert rule.is_holiday_only is True
        assert rule.source == RuleSource.NAME_KEYWORDS

    def test_abbreviated_holiday(self):
        rule = match_name_keywords(None, "Dom. y fest.")
        assert rule.allowed_days == {SUN}
        assert rule.include_holiday is True

    def test_holiday_event(self):
        assert match_name_keywords(None, "Servicio especial Navidad").include_holiday is True

    def test_nothing_recognised(self):
        assert match_name_keywords(None, "Servicio especial") is None
        assert match_name_keywords(None, None) is None


class TestResolveFrequencyRule:
    """Tests for pass precedence."""

    def test_table_before_letters(self):
        # As letters LV would be Monday and Friday only
        assert resolve_frequency_rule("LV").allowed_days == WORKDAYS

    def test_letters_before_name(self):
        rule = resolve_frequency_rule("L-X-V", "Lunes a viernes")
        assert rule.source == RuleSource.CODE_LETTERS
        assert rule.allowed_days == {MON, WED, FRI}

    def test_name_when_code_is_a_word(self):
        rule = resolve_frequency_rule("LAB", "Laborables")
        assert rule.source == RuleSource.NAME_KEYWORDS
        assert rule.allowed_days == WORKDAYS

    def test_unrecognised(self):
        assert resolve_frequency_rule("XYZ") is None

    def test_discrepancy_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="src.timetable_bc.frequency.domain.services.frequency_classifier")
        rule = resolve_frequency_rule("L-V", "Sábados")
        assert rule.allowed_days == WORKDAYS
        assert "disagrees" in caplog.text


class TestClassifyFrequency:
    """Tests for the visibility verdict."""

    def test_weekday_code_on_monday(self):
        verdict = classify_frequency("L-V", MON, False, "Lunes a viernes")
        assert verdict.visible is True
        assert verdict.holiday_only is False

    def test_weekday_code_on_saturday(self):
        assert classify_frequency("L-V", SAT, False, "Lunes a viernes").visible is False

    def test_pure_holiday(self):
        on_holiday = classify_frequency("F", WED, True, "Festivos")
        assert on_holiday.visible is True
        assert on_holiday.holiday_only is True
        assert classify_frequency("F", WED, False, "Festivos").visible is False

    def test_weekend_and_holiday_on_weekday_holiday(self):
        verdict = classify_frequency("S-D-F", TUE, True)
        assert verdict.visible is True
        assert verdict.holiday_only is False

    def test_single_day_tokens(self):
        assert classify_frequency("S", SAT).visible is True
        assert classify_frequency("S", SUN).visible is False
        assert classify_frequency("D", SUN).visible is True

    def test_unknown_code_is_permissive(self):
        verdict = classify_frequency("ZZZ", WED, False)
        assert verdict.visible is True
        assert verdict.holiday_only is False

    def test_empty_code_does_not_raise(self):
        assert classify_frequency("", MON).visible is True
        assert classify_frequency(None, MON).visible is True

    def test_plain_int_weekday(self):
        assert classify_frequency("L-V", 1).visible is True
        assert classify_frequency("L-V", 7).visible is False

    @pytest.mark.parametrize("weekday", list(Weekday))
    def test_holiday_flag_never_hides(self, weekday):
        for code in ("S-D-F", "D y F", "F", "L-V", "JVSDF"):
            if classify_frequency(code, weekday, False).visible:
                assert classify_frequency(code, weekday, True).visible

    def test_same_inputs_same_verdict(self):
        first = classify_frequency("M,X,J", THU, False, "Martes, miércoles y jueves")
        second = classify_frequency("M,X,J", THU, False, "Martes, miércoles y jueves")
        assert first == second
