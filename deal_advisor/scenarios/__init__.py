"""
Scenario engine: multi-year financial projections for named scenarios.

Modules
-------
projector   : project_figures() + evaluate_scenario() — sampled 5-year
              revenue/profit, payback, risk score, verdict.
irr         : npv() + solve_irr() — bracketed bisection (default) and the
              legacy fixed-step search.
sensitivity : analyze_sensitivity() + rank_sensitivities().
portfolio   : ScenarioBook — owned collection of named scenarios.
"""
