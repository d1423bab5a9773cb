"""
Header Label Presets
====================

Fixed bilingual header labels for research-hypothesis tables.
"""

from typing import Any, Dict, List, Union

from research_tables.core.errors import FormatError
from research_tables.models.schemas import Locale

HYPOTHESIS_LABELS: Dict[Locale, List[str]] = {
    Locale.JA: ["仮説ID", "仮説", "モデル", "結果（日本）", "結果（タイ）", "メモ"],
    Locale.EN: [
        "Hypothesis ID",
        "Hypothesis",
        "Model",
        "Results (Japan)",
        "Results (Thailand)",
        "Notes",
    ],
}


def to_locale(locale: Union[Locale, str]) -> Locale:
    """
    Parse a locale selector. Names are case-insensitive.

    Raises:
        FormatError: If the locale is not supported
    """
    if isinstance(locale, str) and not isinstance(locale, Locale):
        locale = locale.strip().lower()
    try:
        return Locale(locale)
    except ValueError as e:
        raise FormatError(
            "Unsupported locale", locale=str(locale), supported=[item.value for item in Locale]
        ) from e


def hypothesis_labels(locale: Union[Locale, str] = Locale.JA) -> List[str]:
    """Header labels of the hypothesis table for a locale."""
    return list(HYPOTHESIS_LABELS[to_locale(locale)])


def lang_to_locale(lang: Any) -> Locale:
    """Japanese for ``ja`` in any case, English for everything else."""
    if isinstance(lang, str) and lang.strip().lower() == Locale.JA.value:
        return Locale.JA
    return Locale.EN
