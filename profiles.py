"""Role profiles: one merged skill profile per distinct job title.

build_role_profiles() folds normalized rows into RoleProfile objects.  The
merge policy is order dependent for descriptive text: division, cluster,
cluster definition, objective, skill definition and skill type all keep the
FIRST non-empty value seen for a title, so re-ordering the input file can
change them.  Skill levels are order independent: the maximum wins.
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from functools import reduce
from typing import Iterable, Optional

from normalizer import SkillRecord, classify_skill_type, normalize_row, round_half_up
from skills_data import DEFAULT_SENIORITY_RANK, SKILL_TYPES, UNKNOWN_DIVISION

logger = logging.getLogger(__name__)


@dataclass
class RoleProfile:
    id: int
    title: str
    division: str = UNKNOWN_DIVISION
    cluster: str = ''
    cluster_definition: str = ''
    objective: str = ''
    seniority_rank: int = DEFAULT_SENIORITY_RANK
    skill_order: list = field(default_factory=list)
    skill_map: dict = field(default_factory=dict)
    skill_def_by_name: dict = field(default_factory=dict)
    skill_type_by_name: dict = field(default_factory=dict)
    description: str = ''

    def level(self, skill: str) -> int:
        return (self.skill_map or {}).get(skill, 0)

    def skill_type(self, skill: str) -> str:
        return classify_skill_type((self.skill_type_by_name or {}).get(skill))

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Seniority inference from title text
# ---------------------------------------------------------------------------

def infer_seniority_rank(title: str) -> int:
    """Rank 1 (intern) to 8 (executive) from keywords in the title.

    Rules are checked top to bottom; the first match decides.
    """
    s = (title or '').lower()

    if re.search(r'intern|apprentice|fellow', s):
        return 1
    if re.search(r'junior|assistant|trainee', s):
        return 2
    if re.search(r'support|coordinator|\bpc\b|administrator', s):
        return 2
    if re.search(r'associate|analyst|officer', s):
        return 3

    if re.search(r'vice president|\bvp\b|\bsvp\b|\bevp\b', s):
        return 8
    if re.search(r'head of|^head\b', s):
        return 8
    if 'chief' in s and not re.search(r'manager|director|lead|leader', s):
        return 8

    if 'executive director' in s:
        return 8
    if re.search(r'director|principal', s):
        return 8 if 'senior' in s else 7

    if re.search(r'senior.*(manager|lead|leader)', s):
        return 7
    if re.search(r'manager|lead|leader', s):
        return 6
    if 'senior' in s:
        return 5
    return DEFAULT_SENIORITY_RANK


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

def first_non_empty(current: str, incoming: str) -> str:
    return current or incoming


def _empty_draft(title: str) -> dict:
    return {
        'title': title,
        'division': '',
        'cluster': '',
        'cluster_definition': '',
        'objective': '',
        'skill_order': [],
        'skill_map': {},
        'skill_def_by_name': {},
        'skill_type_by_name': {},
    }


def _fold_record(draft: dict, record: SkillRecord) -> dict:
    """Merge one record into the running draft for its title."""
    for attr in ('division', 'cluster', 'cluster_definition', 'objective'):
        draft[attr] = first_non_empty(draft[attr], getattr(record, attr))

    name = record.skill
    if name:
        if name not in draft['skill_map']:
            draft['skill_order'].append(name)
            draft['skill_map'][name] = record.level
        else:
            draft['skill_map'][name] = max(draft['skill_map'][name], record.level)
        if record.skill_definition:
            draft['skill_def_by_name'].setdefault(name, record.skill_definition)
        if record.skill_type:
            draft['skill_type_by_name'].setdefault(name, record.skill_type)
    return draft


def _describe(draft: dict) -> str:
    return draft['objective'] or draft['cluster_definition'] or f"Responsibilities for {draft['title']}."


def _sort_key(draft: dict):
    division = draft['division'] or UNKNOWN_DIVISION
    return (division.casefold(), draft['title'].casefold(), division, draft['title'])


def build_role_profiles(rows: Iterable[dict]) -> list[RoleProfile]:
    """Fold raw rows into one RoleProfile per title, sorted by (division, title).

    Rows without a title are dropped and counted.  Ids are assigned 1..N
    after sorting and are only stable within one build.
    """
    grouped: dict[str, list[SkillRecord]] = {}
    dropped = 0
    for row in rows or []:
        record = normalize_row(row)
        if not record.title:
            dropped += 1
            continue
        grouped.setdefault(record.title, []).append(record)

    if dropped:
        logger.info('Dropped %d row(s) with no position title', dropped)

    drafts = [reduce(_fold_record, records, _empty_draft(title))
              for title, records in grouped.items()]
    drafts.sort(key=_sort_key)

    profiles = []
    for role_id, draft in enumerate(drafts, start=1):
        profiles.append(RoleProfile(
            id=role_id,
            title=draft['title'],
            division=draft['division'] or UNKNOWN_DIVISION,
            cluster=draft['cluster'],
            cluster_definition=draft['cluster_definition'],
            objective=draft['objective'],
            seniority_rank=infer_seniority_rank(draft['title']),
            skill_order=draft['skill_order'],
            skill_map=draft['skill_map'],
            skill_def_by_name=draft['skill_def_by_name'],
            skill_type_by_name=draft['skill_type_by_name'],
            description=_describe(draft),
        ))
    logger.debug('Built %d role profile(s)', len(profiles))
    return profiles


# ---------------------------------------------------------------------------
# Per-role views
# ---------------------------------------------------------------------------

def skills_by_type(role: RoleProfile) -> dict[str, list]:
    """Skill names split by type, each list in skill order."""
    buckets = {kind: [] for kind in SKILL_TYPES}
    for name in role.skill_order or []:
        buckets[role.skill_type(name)].append(name)
    return buckets


def skill_ladder(role: RoleProfile, limit: Optional[int] = 8) -> list[dict]:
    """Highest-level skills first, ties broken alphabetically."""
    rungs = [{
        'name': name,
        'level': role.level(name),
        'definition': (role.skill_def_by_name or {}).get(name, ''),
        'type': role.skill_type(name),
    } for name in role.skill_order or []]
    rungs.sort(key=lambda r: (-r['level'], r['name']))
    return rungs if limit is None else rungs[:limit]


def skill_mix(role: RoleProfile) -> dict:
    counts = {kind: len(names) for kind, names in skills_by_type(role).items()}
    total = max(1, sum(counts.values()))
    return {
        'counts': counts,
        'percentages': {kind: round_half_up(n / total * 100) for kind, n in counts.items()},
        'total': total,
    }


def shared_skills(role: RoleProfile, other: RoleProfile, limit: Optional[int] = 6) -> list[dict]:
    """Skills both roles reference, strongest on average first."""
    other_names = set(other.skill_order or [])
    shared = [{
        'name': name,
        'current': role.level(name),
        'target': other.level(name),
    } for name in role.skill_order or [] if name in other_names]
    shared.sort(key=lambda s: -(s['current'] + s['target']) / 2)
    return shared if limit is None else shared[:limit]
