"""
Recommendation engine: turns transition evolutions and records into ranked,
explainable planning decisions.

Modules
-------
scorer    : policy_weight() + compute_impact_score() + decision_status()
            — pure functions, no I/O.
ranker    : PrioritizedRecord + filter_records() + prioritize_records()
            + rank_records().
actions   : RecommendedAction + AuditStep + recommend_actions().
survey    : SurveyAllocation + optimize_survey_budget()
            + build_field_check_tasks().
narrative : Narrative + generate_change_narrative() + generate_change_stories().
"""
