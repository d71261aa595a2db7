"""Row normalization for the positions/skills dataset.

Raw rows come straight from a CSV reader: header spelling and case vary
between exports, and proficiency may be a number or a word.  Everything in
this module is total: a missing column reads as '' and an unreadable level
reads as 0.
"""

import logging
import math
import re
from functools import lru_cache
from types import MappingProxyType
from typing import NamedTuple

from skills_data import FIELD_CANDIDATES, MAX_LEVEL, MIN_LEVEL, PROFICIENCY_KEYWORDS

logger = logging.getLogger(__name__)

_KEYWORD_LADDER = [(re.compile(pattern), level) for pattern, level in PROFICIENCY_KEYWORDS]


class SkillRecord(NamedTuple):
    title: str
    division: str
    cluster: str
    cluster_definition: str
    objective: str
    skill: str
    skill_definition: str
    skill_type: str
    level: int


def _clean(value) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and math.isnan(value):
        return ''
    return str(value).strip()


# ---------------------------------------------------------------------------
# Field lookup
# ---------------------------------------------------------------------------

def lookup_field(row: dict, *candidates: str) -> str:
    """Return the trimmed value of the first candidate column present in row.

    Column names are compared case-insensitively.  Returns '' when nothing
    matches or row is not a mapping.
    """
    if not row or not hasattr(row, 'items'):
        return ''
    for candidate in candidates:
        wanted = candidate.strip().lower()
        for key, value in row.items():
            if str(key).strip().lower() == wanted:
                return _clean(value)
    return ''


@lru_cache(maxsize=64)
def resolve_columns(columns: tuple) -> MappingProxyType:
    """Map each normalized field to the actual header it reads from (or None).

    Resolved once per distinct header tuple so large files do not rescan the
    header for every field of every row.
    """
    by_lower = {}
    for column in columns:
        by_lower.setdefault(str(column).strip().lower(), column)
    resolved = {}
    for field, candidates in FIELD_CANDIDATES.items():
        resolved[field] = None
        for candidate in candidates:
            column = by_lower.get(candidate.lower())
            if column is not None:
                resolved[field] = column
                break
    return MappingProxyType(resolved)


# ---------------------------------------------------------------------------
# Proficiency parsing
# ---------------------------------------------------------------------------

def _to_number(text: str):
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def round_half_up(number: float) -> int:
    return int(math.floor(number + 0.5))


def clamp_level(number: float) -> int:
    """Clamp to [0, 5] and round half up to a whole level."""
    return round_half_up(max(MIN_LEVEL, min(MAX_LEVEL, number)))


def level_from_fields(value: str, level_text: str) -> int:
    """Resolve a proficiency level from the numeric and textual columns.

    A finite 'Proficiency Value' wins.  Otherwise the level text is tried as
    a number, then against the keyword ladder.  No match gives 0.
    """
    if value:
        number = _to_number(value)
        if number is not None:
            return clamp_level(number)
    if level_text:
        number = _to_number(level_text)
        if number is not None:
            return clamp_level(number)
        lowered = level_text.lower()
        for pattern, level in _KEYWORD_LADDER:
            if pattern.search(lowered):
                return level
    return MIN_LEVEL


def parse_proficiency(row: dict) -> int:
    """Proficiency level in [0, 5] for one raw row."""
    return level_from_fields(
        lookup_field(row, *FIELD_CANDIDATES['proficiency_value']),
        lookup_field(row, *FIELD_CANDIDATES['proficiency_level']),
    )


# ---------------------------------------------------------------------------
# Skill type
# ---------------------------------------------------------------------------

def classify_skill_type(raw) -> str:
    """Bucket a free-text skill type into 'functional', 'soft' or 'unknown'."""
    text = _clean(raw).lower()
    if 'functional' in text:
        return 'functional'
    if 'soft' in text:
        return 'soft'
    return 'unknown'


# ---------------------------------------------------------------------------
# Whole-row normalization
# ---------------------------------------------------------------------------

def normalize_row(row: dict) -> SkillRecord:
    """Read every known field of a raw row into a SkillRecord."""
    if not row or not hasattr(row, 'items'):
        return SkillRecord('', '', '', '', '', '', '', '', MIN_LEVEL)

    columns = resolve_columns(tuple(row.keys()))

    def read(field):
        column = columns[field]
        return _clean(row.get(column)) if column is not None else ''

    return SkillRecord(
        title=read('title'),
        division=read('division'),
        cluster=read('cluster'),
        cluster_definition=read('cluster_definition'),
        objective=read('objective'),
        skill=read('skill'),
        skill_definition=read('skill_definition'),
        skill_type=read('skill_type'),
        level=level_from_fields(read('proficiency_value'), read('proficiency_level')),
    )
