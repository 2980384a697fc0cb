"""Frequency code classification.

- classify_frequency: visibility verdict for a code on an ISO weekday
- resolve_frequency_rule: the FrequencyRule behind a code (or None)
- match_code_table / decompose_code_letters / match_name_keywords: the three passes
"""

from .frequency_classifier import (
    classify_frequency,
    decompose_code_letters,
    match_code_table,
    match_name_keywords,
    normalize_frequency_code,
    normalize_frequency_text,
    resolve_frequency_rule,
    verdict_for_rule,
)

__all__ = [
    "classify_frequency",
    "decompose_code_letters",
    "match_code_table",
    "match_name_keywords",
    "normalize_frequency_code",
    "normalize_frequency_text",
    "resolve_frequency_rule",
    "verdict_for_rule",
]
