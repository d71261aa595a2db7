"""Transition scoring between two role profiles.

score() answers "how ready is someone in `current` to move into `target`".
It is directional on purpose: skill importance and type weight come from the
target, and only skills where the target asks for more than the current role
supplies are penalized.  Exceeding a requirement never costs anything.

All functions are pure; profiles and IDF tables are only read.
"""

import logging
from typing import Optional

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from normalizer import classify_skill_type, round_half_up
from skills_data import (GAP_PENALTY_CAP, GAP_PENALTY_FACTOR, IMPORTANCE_BASE,
                         IMPORTANCE_SPAN, MAX_LEVEL, MIN_LEVEL, TYPE_WEIGHTS)

logger = logging.getLogger(__name__)


def _skill_order(role) -> list:
    return list(getattr(role, 'skill_order', None) or [])


def _skill_map(role) -> dict:
    return getattr(role, 'skill_map', None) or {}


def _raw_type(role, name: str) -> str:
    return (getattr(role, 'skill_type_by_name', None) or {}).get(name) or ''


def _resolved_type(current, target, name: str) -> str:
    """Skill type as the target labels it, falling back to the current role."""
    return classify_skill_type(_raw_type(target, name) or _raw_type(current, name))


# ---------------------------------------------------------------------------
# Vector alignment
# ---------------------------------------------------------------------------

def align(role_a, role_b) -> tuple[list, list, list]:
    """Level vectors for both roles over the union of their skill names.

    Names keep first-seen order (role_a's first); a skill a role does not
    list reads as level 0.
    """
    names = list(dict.fromkeys(_skill_order(role_a) + _skill_order(role_b)))
    map_a, map_b = _skill_map(role_a), _skill_map(role_b)
    vec_a = [map_a.get(name, 0) for name in names]
    vec_b = [map_b.get(name, 0) for name in names]
    return vec_a, vec_b, names


# ---------------------------------------------------------------------------
# Similarity score
# ---------------------------------------------------------------------------

def skill_weights(current, target, names: list, idf: Optional[dict] = None) -> np.ndarray:
    """Per-skill weight = importance to target × type weight × corpus IDF."""
    idf = idf or {}
    target_map = _skill_map(target)
    weights = []
    for name in names:
        importance = max(MIN_LEVEL, min(MAX_LEVEL, target_map.get(name, 0)))
        base = IMPORTANCE_BASE + (importance / MAX_LEVEL) * IMPORTANCE_SPAN
        type_weight = TYPE_WEIGHTS[_resolved_type(current, target, name)]
        weights.append(base * type_weight * idf.get(name, 1.0))
    return np.array(weights, dtype=float)


def score(current, target, idf: Optional[dict] = None) -> int:
    """Directional 0-100 compatibility from current to target.

    Weighted cosine of the aligned level vectors, minus half of a quadratic
    gap penalty that is capped at 0.35.
    """
    if current is None or target is None:
        return 0
    if getattr(current, 'id', None) == getattr(target, 'id', None):
        return 100

    va, vb, names = align(current, target)
    if not names:
        return 0

    w = skill_weights(current, target, names, idf)
    a = np.array(va, dtype=float)
    b = np.array(vb, dtype=float)

    if np.sum(w * a * a) <= 0 or np.sum(w * b * b) <= 0:
        return 0

    # cos(√w·a, √w·b) is the w-weighted cosine of a and b.
    root = np.sqrt(np.clip(w, 0, None))
    cosine = float(cosine_similarity((root * a).reshape(1, -1), (root * b).reshape(1, -1))[0][0])

    shortfall = np.clip(b - a, 0, None) / MAX_LEVEL
    gap_accum = float(np.sum(w * shortfall * shortfall))
    weight_sum = float(np.sum(w))
    gap_norm = min(GAP_PENALTY_CAP, gap_accum / weight_sum) if weight_sum > 0 else 0.0

    score01 = max(0.0, min(1.0, cosine - GAP_PENALTY_FACTOR * gap_norm))
    return round_half_up(score01 * 100)


# ---------------------------------------------------------------------------
# Skill deltas, strengths and gaps
# ---------------------------------------------------------------------------

def skill_deltas(current, target) -> list[dict]:
    """Every aligned skill with both levels, the signed gap and its type."""
    va, vb, names = align(current, target)
    return [{
        'name': name,
        'current': cur,
        'target': tar,
        'gap': tar - cur,
        'type': _resolved_type(current, target, name),
    } for name, cur, tar in zip(names, va, vb)]


def summarize(current, target, max_items: Optional[int] = 3) -> dict:
    """Top strengths (requirement already met) and gaps (target needs more).

    Strengths are ordered by target level, gaps by gap size, both descending;
    ties keep union order.
    """
    if current is None or target is None:
        return {'strengths': [], 'gaps': []}

    deltas = skill_deltas(current, target)
    strengths = sorted((d for d in deltas if d['gap'] <= 0 and d['target'] > 0),
                       key=lambda d: -d['target'])
    gaps = sorted((d for d in deltas if d['gap'] > 0), key=lambda d: -d['gap'])
    if max_items is not None:
        strengths, gaps = strengths[:max_items], gaps[:max_items]
    return {'strengths': strengths, 'gaps': gaps}
