"""
Recommendation classification: turns scores and flags into Go/No-Go verdicts.

Modules
-------
classifier : classify_deal() + classify_scenario() + classify_partnership()
             — pure functions, no I/O.
"""
