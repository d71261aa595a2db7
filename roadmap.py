"""Career roadmap helpers built on top of the transition scorer.

Turns scores and skill deltas into what a roadmap screen shows: a similarity
badge, readiness groups per skill type, canned training suggestions for each
gap and a ranked list of suggested next roles.
"""

import logging
import math
from typing import Iterable, Optional

from analyzer import score, skill_deltas, summarize
from skills_data import (BADGE_TIERS, MAX_TRAINING_ITEMS, READINESS_BUCKETS,
                         READINESS_THRESHOLDS, RECOMMENDATION_LIMIT,
                         RECOMMENDATION_MIN_SCORE, RECOMMENDATION_SUMMARY_ITEMS,
                         SKILL_TYPES, TRAINING_POOLS)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------

def badge_for(similarity) -> dict:
    """Label and tone for a 0-100 score.  Tiers are contiguous and monotonic."""
    try:
        value = float(similarity)
    except (TypeError, ValueError):
        value = 0.0
    for minimum, label, tone in BADGE_TIERS:
        if value >= minimum:
            return {'label': label, 'tone': tone}
    _, label, tone = BADGE_TIERS[-1]
    return {'label': label, 'tone': tone}


# ---------------------------------------------------------------------------
# Training recommendations
# ---------------------------------------------------------------------------

def training_recommendations(skill_name: str, skill_type, gap) -> list[str]:
    """Up to three canned courses for closing a gap on one skill.

    Soft skills draw from the soft pool, everything else from the functional
    pool.  The count is ceil(gap) clamped to [1, 3], so a zero, negative or
    unreadable gap still returns one item and an infinite one returns three.
    """
    pool = TRAINING_POOLS['soft'] if 'soft' in str(skill_type or '').lower() else TRAINING_POOLS['functional']
    try:
        count = math.ceil(min(float(gap or 1), MAX_TRAINING_ITEMS))
    except (TypeError, ValueError, OverflowError):
        count = 1
    count = min(MAX_TRAINING_ITEMS, max(1, count))
    return pool[:count]


def learning_plan(current, target, max_items: Optional[int] = 3) -> list[dict]:
    """Largest gaps from current to target, each with its training list."""
    gaps = summarize(current, target, max_items)['gaps']
    return [dict(gap, training=training_recommendations(gap['name'], gap['type'], gap['gap']))
            for gap in gaps]


# ---------------------------------------------------------------------------
# Readiness groups
# ---------------------------------------------------------------------------

def readiness_bucket(gap, thresholds: dict = READINESS_THRESHOLDS) -> str:
    if gap <= thresholds['similar']:
        return 'similar'
    if gap <= thresholds['fair']:
        return 'fair'
    return 'needWork'


def group_by_readiness(current, target, thresholds: dict = READINESS_THRESHOLDS) -> dict:
    """Every aligned skill sorted into similar / fair / needWork, per skill type.

    A met requirement is reported as 'similar' with gap 0.
    """
    groups = {kind: {bucket: [] for bucket in READINESS_BUCKETS} for kind in SKILL_TYPES}
    if current is None or target is None:
        return groups
    for delta in skill_deltas(current, target):
        if delta['target'] <= delta['current']:
            item, bucket = dict(delta, gap=0), 'similar'
        else:
            item, bucket = delta, readiness_bucket(delta['gap'], thresholds)
        groups[delta['type']][bucket].append(item)
    return groups


# ---------------------------------------------------------------------------
# Suggested transitions
# ---------------------------------------------------------------------------

def recommend_transitions(current, roles: Iterable, idf: Optional[dict] = None,
                          min_score: int = RECOMMENDATION_MIN_SCORE,
                          limit: Optional[int] = RECOMMENDATION_LIMIT,
                          summary_items: Optional[int] = RECOMMENDATION_SUMMARY_ITEMS,
                          same_or_higher_seniority: bool = True) -> list[dict]:
    """Best-scoring moves from current, highest score first.

    With same_or_higher_seniority the list only offers roles ranked at or
    above the current one.
    """
    if current is None:
        return []

    results = []
    for role in roles or []:
        if role.id == current.id:
            continue
        if same_or_higher_seniority and role.seniority_rank < current.seniority_rank:
            continue
        similarity = score(current, role, idf)
        if similarity < min_score:
            continue
        results.append({
            'role': role,
            'score': similarity,
            'badge': badge_for(similarity),
            'summary': summarize(current, role, summary_items),
        })

    results.sort(key=lambda r: -r['score'])
    logger.debug('%d transition(s) from %r scored >= %d', len(results), current.title, min_score)
    return results if limit is None else results[:max(0, limit)]
