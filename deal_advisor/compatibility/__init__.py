"""
Compatibility engine: scores how well an entity fits an opportunity or partner.

Modules
-------
matching   : contains_term() + any_term_in() + mutual_contains() — fuzzy
             case-insensitive substring rules, unit-testable on their own.
scorer     : AlignmentComponents dataclass + dimension scores +
             score_opportunity() — pure functions, no I/O.
ranker     : score_opportunities() + rank_results() + group_by_tier() + top_n().
assessment : assess_partnership() — weighted multi-dimension partner fit.
"""
