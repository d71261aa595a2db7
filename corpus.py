"""Corpus-wide statistics and the loaded dataset context.

compute_idf() weights each skill by how rare it is across roles.  scikit-learn's
smoothed IDF is exactly 1 + ln((N + 1) / (df + 1)), so the vectorizer is fed one
document per role holding that role's distinct skill names, and the result is
clipped to [IDF_MIN, IDF_MAX].
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from profiles import RoleProfile, build_role_profiles
from skills_data import IDF_MAX, IDF_MIN

logger = logging.getLogger(__name__)


def _identity(document):
    return document


def _distinct_skills(role: RoleProfile) -> list:
    return list(dict.fromkeys(role.skill_order or []))


def compute_idf(roles: Iterable[RoleProfile]) -> dict[str, float]:
    """Skill name → rarity weight in [0.85, 1.35] over the given roles."""
    documents = [_distinct_skills(role) for role in roles or []]
    if not documents:
        return {}

    vectorizer = TfidfVectorizer(
        analyzer=_identity,
        lowercase=False,
        token_pattern=None,
        smooth_idf=True,
    )
    try:
        vectorizer.fit(documents)
    except ValueError:
        # No role references any skill.
        return {}

    weights = np.clip(vectorizer.idf_, IDF_MIN, IDF_MAX)
    names = vectorizer.get_feature_names_out()
    return {str(name): float(weight) for name, weight in zip(names, weights)}


# ---------------------------------------------------------------------------
# Loaded corpus: roles + IDF, built together and never mutated
# ---------------------------------------------------------------------------

@dataclass
class RoleCorpus:
    roles: list
    idf: dict
    divisions: list = field(init=False)
    _by_title: dict = field(init=False, repr=False)
    _by_id: dict = field(init=False, repr=False)

    def __post_init__(self):
        self.divisions = list(dict.fromkeys(role.division for role in self.roles))
        self._by_title = {role.title: role for role in self.roles}
        self._by_id = {role.id: role for role in self.roles}

    def __len__(self):
        return len(self.roles)

    def find(self, title: str) -> Optional[RoleProfile]:
        return self._by_title.get((title or '').strip())

    def get(self, role_id: int) -> Optional[RoleProfile]:
        return self._by_id.get(role_id)

    def filter(self, query: str = '', division: str = 'all') -> list[RoleProfile]:
        """Roles whose title or division contains query, optionally in one division."""
        q = (query or '').strip().lower()
        matches = []
        for role in self.roles:
            if division and division != 'all' and role.division != division:
                continue
            if q and q not in role.title.lower() and q not in role.division.lower():
                continue
            matches.append(role)
        return matches

    def grouped_by_division(self, roles: Optional[list] = None) -> dict[str, list]:
        grouped: dict[str, list] = {}
        for role in self.roles if roles is None else roles:
            grouped.setdefault(role.division, []).append(role)
        for members in grouped.values():
            members.sort(key=lambda r: r.title.casefold())
        return grouped

    def usable(self, min_skills: int = 0) -> list[RoleProfile]:
        """Roles with at least min_skills mapped skills."""
        return [role for role in self.roles if len(role.skill_order or []) >= min_skills]


def build_corpus(rows: Iterable[dict]) -> RoleCorpus:
    roles = build_role_profiles(rows)
    idf = compute_idf(roles)
    logger.info('Corpus ready: %d roles, %d distinct skills, %d divisions',
                len(roles), len(idf), len({r.division for r in roles}))
    return RoleCorpus(roles=roles, idf=idf)
