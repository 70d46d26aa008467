"""
Ingestion layer: reads form/UI records from disk into validated models.

Modules
-------
loaders : load_entity_profile() + load_opportunities() (JSON or CSV) +
          load_scenario_book() + load_partnership_brief().
"""
