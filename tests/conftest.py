import pytest

from profiles import RoleProfile, infer_seniority_rank


@pytest.fixture
def make_role():
    """Build a RoleProfile directly from a {skill: level} dict."""
    def _make(role_id, title='Role', skills=None, types=None, division='Finance',
              seniority_rank=None, **extra):
        skills = dict(skills or {})
        return RoleProfile(
            id=role_id,
            title=title,
            division=division,
            seniority_rank=infer_seniority_rank(title) if seniority_rank is None else seniority_rank,
            skill_order=list(skills),
            skill_map=skills,
            skill_type_by_name=dict(types or {}),
            **extra,
        )
    return _make


@pytest.fixture
def raw_rows():
    return [
        {'Core Position': 'Financial Analyst', 'Function': 'Finance',
         'Core Position Cluster': 'Planning', 'Skill': 'Forecasting',
         'Skill Definition': 'Projecting figures', 'Functional / Soft Skill': 'Functional',
         'Proficiency Value': '3'},
        {'core position': 'Financial Analyst', 'FUNCTION': '', 'skill': 'Forecasting',
         'Skill Definition': 'Later definition', 'Proficiency Value': '5'},
        {'Core Position': 'Financial Analyst', 'Function': 'Treasury', 'Skill': 'Communication',
         'Functional/Soft Skill': 'Soft Skill', 'Required Proficiency Level': 'Intermediate'},
        {'Core Position': 'Data Intern', 'Function': 'Technology', 'Skill': 'SQL',
         'Functional or Softskill?': 'Functional', 'Required Proficiency Level': 'Basic'},
        {'Core Position': '', 'Function': 'Technology', 'Skill': 'SQL'},
        {'Core Position': 'Head of Data', 'Function': 'Technology',
         'Core Position Main Objective': 'Own the data strategy',
         'Skill': 'SQL', 'Required Proficiency Level': '4'},
        {'Core Position': 'Head of Data', 'Skill': 'People Leadership',
         'Functional / Soft Skill': 'soft', 'Required Proficiency Level': 'Expert'},
    ]
