"""
Reporting layer: export adapters and CLI text formatting.

Modules
-------
export     : export_to_csv() + export_to_json() + flatten_*_for_export().
formatters : format_*() — ASCII tables returned as strings for typer.echo().
"""
