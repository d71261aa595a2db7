"""Static tables for the positions/skills dataset and the scoring engine.

Everything here is plain data: column-name candidates, keyword ladders,
weights and display tiers.  Modules that need one of these tables import it
from here so there is a single place to tune them.
"""

# ---------------------------------------------------------------------------
# Column candidates: normalized field → accepted CSV headers (case-insensitive)
# ---------------------------------------------------------------------------
FIELD_CANDIDATES = {
    'title':              ('Core Position',),
    'division':           ('Function',),
    'cluster':            ('Core Position Cluster',),
    'cluster_definition': ('Core Position Cluster Definition',),
    'objective':          ('Core Position Main Objective',),
    'skill':              ('Skill',),
    'skill_definition':   ('Skill Definition',),
    'skill_type':         ('Functional / Soft Skill', 'Functional/Soft Skill',
                           'Functional or Softskill?'),
    'proficiency_value':  ('Proficiency Value',),
    'proficiency_level':  ('Required Proficiency Level',),
}

UNKNOWN_DIVISION = 'Unknown Division'

# ---------------------------------------------------------------------------
# Proficiency
# ---------------------------------------------------------------------------
MIN_LEVEL = 0
MAX_LEVEL = 5

# Checked in order against the lowercased level text; first hit wins.
PROFICIENCY_KEYWORDS = [
    (r'^none|not required$',            0),
    (r'^basic|beginner|familiar$',      1),
    (r'^low$',                          2),
    (r'^intermediate|medium|moderate$', 3),
    (r'^advanced|high$',                4),
    (r'^expert|master$',                5),
]

# ---------------------------------------------------------------------------
# Skill types
# ---------------------------------------------------------------------------
SKILL_TYPES = ('functional', 'soft', 'unknown')

TYPE_WEIGHTS = {
    'functional': 1.15,
    'soft':       0.95,
    'unknown':    1.0,
}

# ---------------------------------------------------------------------------
# Seniority: rank 1 (intern) .. 8 (executive), inferred from title text
# ---------------------------------------------------------------------------
DEFAULT_SENIORITY_RANK = 4

SENIORITY_LABELS = {
    1: 'Intern',
    2: 'Entry',
    3: 'Associate',
    4: 'Professional',
    5: 'Senior',
    6: 'Manager',
    7: 'Senior Manager / Director',
    8: 'Executive',
}

# ---------------------------------------------------------------------------
# Corpus IDF bounds
# ---------------------------------------------------------------------------
IDF_MIN = 0.85
IDF_MAX = 1.35

# ---------------------------------------------------------------------------
# Transition scoring
# ---------------------------------------------------------------------------
IMPORTANCE_BASE = 0.5      # weight floor for a skill the target barely needs
IMPORTANCE_SPAN = 0.5      # extra weight at the target's maximum level
GAP_PENALTY_CAP = 0.35
GAP_PENALTY_FACTOR = 0.5

# ---------------------------------------------------------------------------
# Similarity badges: (minimum score, label, tone), highest tier first
# ---------------------------------------------------------------------------
BADGE_TIERS = [
    (90, 'Excellent',   'green'),
    (80, 'Great',       'yellow'),
    (70, 'Good',        'lilac'),
    (60, 'Emerging',    'blue'),
    (0,  'Early Match', 'neutral'),
]

# ---------------------------------------------------------------------------
# Roadmap readiness buckets on the positive gap (target - current)
# ---------------------------------------------------------------------------
READINESS_THRESHOLDS = {
    'similar': 1,   # gap <= 1
    'fair':    2,   # gap <= 2, anything larger needs work
}
READINESS_BUCKETS = ('similar', 'fair', 'needWork')

# ---------------------------------------------------------------------------
# Recommendation defaults
# ---------------------------------------------------------------------------
RECOMMENDATION_MIN_SCORE = 60
RECOMMENDATION_LIMIT = 8
RECOMMENDATION_SUMMARY_ITEMS = 2

# ---------------------------------------------------------------------------
# Canned training recommendations
# ---------------------------------------------------------------------------
MAX_TRAINING_ITEMS = 3

TRAINING_POOLS = {
    'soft': [
        'Executive communication workshop',
        'Stakeholder influence & negotiation',
        'Cross-cultural collaboration',
    ],
    'functional': [
        'Advanced domain certification',
        'Tools & systems deep-dive',
        'Mentored project-based learning',
    ],
}
