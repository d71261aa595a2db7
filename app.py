import logging
import os

from dotenv import load_dotenv
load_dotenv()  # Load .env file (POSITIONS_CSV, etc.)

from flask import Flask, jsonify, request

from analyzer import score, summarize
from dataset import DatasetError, DatasetStore
from profiles import shared_skills, skill_ladder, skill_mix, skills_by_type
from roadmap import badge_for, group_by_readiness, learning_plan, recommend_transitions
from skills_data import (RECOMMENDATION_LIMIT, RECOMMENDATION_MIN_SCORE,
                         SENIORITY_LABELS)

logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s [%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.json.sort_keys = False

# Roles with fewer mapped skills are not offered as recommendation targets
MIN_ROLE_SKILLS = int(os.environ.get('MIN_ROLE_SKILLS', '0'))
TRANSITION_SUMMARY_ITEMS = 6

store = DatasetStore()


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _role_summary(role) -> dict:
    return {
        'id': role.id,
        'title': role.title,
        'division': role.division,
        'cluster': role.cluster,
        'seniority_rank': role.seniority_rank,
        'seniority': SENIORITY_LABELS.get(role.seniority_rank, ''),
        'skill_count': len(role.skill_order),
    }


def _role_detail(role) -> dict:
    detail = role.to_dict()
    detail['seniority'] = SENIORITY_LABELS.get(role.seniority_rank, '')
    detail['skill_ladder'] = skill_ladder(role)
    detail['skills_by_type'] = skills_by_type(role)
    detail['skill_mix'] = skill_mix(role)
    return detail


def _lookup(corpus, param: str):
    """Resolve a role title query arg.  Returns (role, error_response)."""
    title = request.args.get(param, '').strip()
    if not title:
        return None, (jsonify({'error': f'Missing "{param}" parameter'}), 400)
    role = corpus.find(title)
    if role is None:
        return None, (jsonify({'error': f'Unknown role: {title}'}), 404)
    return role, None


@app.errorhandler(DatasetError)
def dataset_unavailable(e):
    logger.error('Dataset load failed: %s', e, exc_info=True)
    return jsonify({'error': 'Dataset unavailable', 'detail': str(e)}), 503


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route('/api/roles')
def list_roles():
    corpus = store.get()
    roles = corpus.filter(request.args.get('q', ''), request.args.get('division', 'all'))
    groups = corpus.grouped_by_division(roles)
    return jsonify({
        'count': len(roles),
        'divisions': corpus.divisions,
        'groups': {division: [_role_summary(r) for r in members]
                   for division, members in groups.items()},
    })


@app.route('/api/roles/<path:title>')
def role_detail(title):
    role = store.get().find(title)
    if role is None:
        return jsonify({'error': f'Unknown role: {title}'}), 404
    return jsonify(_role_detail(role))


@app.route('/api/transition')
def transition():
    corpus = store.get()
    current, error = _lookup(corpus, 'current')
    if error:
        return error
    target, error = _lookup(corpus, 'target')
    if error:
        return error

    similarity = score(current, target, corpus.idf)
    return jsonify({
        'current': _role_summary(current),
        'target': _role_summary(target),
        'score': similarity,
        'reverse_score': score(target, current, corpus.idf),
        'badge': badge_for(similarity),
        'summary': summarize(current, target, TRANSITION_SUMMARY_ITEMS),
        'readiness': group_by_readiness(current, target),
        'learning_plan': learning_plan(current, target),
        'shared_skills': shared_skills(current, target),
    })


@app.route('/api/recommendations')
def recommendations():
    corpus = store.get()
    current, error = _lookup(corpus, 'current')
    if error:
        return error

    limit = request.args.get('limit', RECOMMENDATION_LIMIT, type=int)
    if limit < 1:
        return jsonify({'error': '"limit" must be a positive integer'}), 400

    results = recommend_transitions(
        current,
        corpus.usable(MIN_ROLE_SKILLS),
        corpus.idf,
        min_score=request.args.get('min_score', RECOMMENDATION_MIN_SCORE, type=int),
        limit=limit,
        same_or_higher_seniority=request.args.get('any_seniority') != '1',
    )
    return jsonify({
        'current': _role_summary(current),
        'recommendations': [dict(r, role=_role_summary(r['role'])) for r in results],
    })


@app.route('/api/reload', methods=['POST'])
def reload_dataset():
    corpus = store.reload()
    logger.info('Dataset reloaded from %s', store.source)
    return jsonify({'roles': len(corpus), 'skills': len(corpus.idf)})


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5050))
    app.run(debug=True, port=port)
