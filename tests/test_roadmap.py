import pytest

from roadmap import (badge_for, group_by_readiness, learning_plan, readiness_bucket,
                     recommend_transitions, training_recommendations)
from skills_data import BADGE_TIERS, TRAINING_POOLS


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('score, label', [
    (100, 'Excellent'),
    (90, 'Excellent'),
    (89, 'Great'),
    (80, 'Great'),
    (79, 'Good'),
    (70, 'Good'),
    (69, 'Emerging'),
    (60, 'Emerging'),
    (59, 'Early Match'),
    (0, 'Early Match'),
    (None, 'Early Match'),
])
def test_badge_for(score, label):
    assert badge_for(score)['label'] == label


def test_badges_are_monotonic():
    order = [label for _, label, _ in BADGE_TIERS]
    ranks = [order.index(badge_for(s)['label']) for s in range(100, -1, -1)]
    assert ranks == sorted(ranks)


def test_badge_has_tone():
    assert badge_for(95) == {'label': 'Excellent', 'tone': 'green'}


# ---------------------------------------------------------------------------
# Training recommendations
# ---------------------------------------------------------------------------

def test_soft_skill_recommendations_round_gap_up():
    recs = training_recommendations('Negotiation', 'soft', 2.4)
    assert recs == TRAINING_POOLS['soft'][:3]
    assert len(recs) == 3


@pytest.mark.parametrize('skill_type, gap, expected', [
    ('functional', 1.2, TRAINING_POOLS['functional'][:2]),
    ('Functional Skill', 1, TRAINING_POOLS['functional'][:1]),
    ('Soft Skill', 10, TRAINING_POOLS['soft']),
    ('unknown', 2, TRAINING_POOLS['functional'][:2]),
    (None, 3, TRAINING_POOLS['functional']),
])
def test_training_recommendations_pool_and_count(skill_type, gap, expected):
    assert training_recommendations('Skill', skill_type, gap) == expected


@pytest.mark.parametrize('gap', [0, -3, None, '', 'abc', float('nan'), float('-inf')])
def test_degenerate_gap_still_gets_one_item(gap):
    assert len(training_recommendations('Skill', 'soft', gap)) == 1


@pytest.mark.parametrize('gap', [float('inf'), '2.4', '3'])
def test_large_or_numeric_text_gap_gets_three_items(gap):
    assert training_recommendations('Negotiation', 'soft', gap) == TRAINING_POOLS['soft']


def test_learning_plan(make_role):
    current = make_role(1, 'A', {'Excel': 1, 'Coaching': 3})
    target = make_role(2, 'B', {'Excel': 4, 'Coaching': 5},
                       types={'Excel': 'Functional', 'Coaching': 'Soft Skill'})
    plan = learning_plan(current, target)
    assert [(p['name'], p['gap']) for p in plan] == [('Excel', 3), ('Coaching', 2)]
    assert plan[0]['training'] == TRAINING_POOLS['functional']
    assert plan[1]['training'] == TRAINING_POOLS['soft'][:2]


# ---------------------------------------------------------------------------
# Readiness groups
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('gap, bucket', [(-2, 'similar'), (0, 'similar'), (1, 'similar'),
                                         (2, 'fair'), (3, 'needWork'), (5, 'needWork')])
def test_readiness_bucket(gap, bucket):
    assert readiness_bucket(gap) == bucket


def test_group_by_readiness(make_role):
    current = make_role(1, 'A', {'Budgeting': 3, 'Coaching': 1, 'Tax': 0, 'Filing': 4})
    target = make_role(2, 'B', {'Budgeting': 4, 'Coaching': 3, 'Tax': 5, 'Filing': 2},
                       types={'Budgeting': 'Functional', 'Coaching': 'Soft', 'Tax': 'Functional'})
    groups = group_by_readiness(current, target)

    assert [s['name'] for s in groups['functional']['similar']] == ['Budgeting']
    assert [s['name'] for s in groups['functional']['needWork']] == ['Tax']
    assert [s['name'] for s in groups['soft']['fair']] == ['Coaching']
    assert groups['unknown']['similar'] == [
        {'name': 'Filing', 'current': 4, 'target': 2, 'gap': 0, 'type': 'unknown'},
    ]
    assert groups['soft']['similar'] == [] and groups['unknown']['needWork'] == []


def test_group_by_readiness_custom_thresholds(make_role):
    current = make_role(1, 'A', {'Tax': 0})
    target = make_role(2, 'B', {'Tax': 3})
    groups = group_by_readiness(current, target, {'similar': 0, 'fair': 3})
    assert [s['name'] for s in groups['unknown']['fair']] == ['Tax']


def test_group_by_readiness_without_roles():
    groups = group_by_readiness(None, None)
    assert set(groups) == {'functional', 'soft', 'unknown'}
    assert all(not items for buckets in groups.values() for items in buckets.values())


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

@pytest.fixture
def candidates(make_role):
    skills = {'Excel': 4, 'SQL': 3}
    return {
        'current': make_role(1, 'Analyst', skills, seniority_rank=4),
        'peer': make_role(2, 'Peer', dict(skills), seniority_rank=4),
        'junior': make_role(3, 'Junior', dict(skills), seniority_rank=1),
        'stranger': make_role(4, 'Stranger', {'Welding': 5}, seniority_rank=6),
        'stretch': make_role(5, 'Stretch', {'Excel': 5, 'SQL': 5, 'Python': 4}, seniority_rank=6),
    }


def test_recommendations_filter_seniority_and_score(candidates):
    roles = list(candidates.values())
    results = recommend_transitions(candidates['current'], roles, {})
    assert [r['role'].title for r in results] == ['Peer', 'Stretch']
    assert [r['score'] for r in results] == [100, 74]
    assert results[0]['badge']['label'] == 'Excellent'
    assert set(results[0]['summary']) == {'strengths', 'gaps'}


def test_recommendations_any_seniority_keeps_input_order_on_ties(candidates):
    roles = list(candidates.values())
    results = recommend_transitions(candidates['current'], roles, {},
                                    same_or_higher_seniority=False)
    assert [r['role'].title for r in results[:2]] == ['Peer', 'Junior']


def test_recommendations_without_threshold_or_limit(candidates):
    roles = list(candidates.values())
    results = recommend_transitions(candidates['current'], roles, {}, min_score=0,
                                    limit=None, same_or_higher_seniority=False)
    titles = [r['role'].title for r in results]
    assert 'Analyst' not in titles
    assert titles[-1] == 'Stranger'
    assert results[-1]['score'] == 0
    scores = [r['score'] for r in results]
    assert scores == sorted(scores, reverse=True)


def test_recommendations_limit_and_summary_size(candidates):
    roles = list(candidates.values())
    results = recommend_transitions(candidates['current'], roles, {}, min_score=0,
                                    limit=1, summary_items=1, same_or_higher_seniority=False)
    assert len(results) == 1
    assert len(results[0]['summary']['strengths']) <= 1


def test_recommendations_for_nobody(candidates):
    assert recommend_transitions(None, list(candidates.values())) == []


def test_recommendations_negative_limit_returns_nothing(candidates):
    roles = list(candidates.values())
    assert recommend_transitions(candidates['current'], roles, {}, min_score=0,
                                 limit=-1, same_or_higher_seniority=False) == []
