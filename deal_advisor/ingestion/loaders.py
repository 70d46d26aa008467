"""
File loaders for the plain records supplied by the form/UI layer.

Supported inputs
----------------
entity profile          JSON object with ``EntityProfile`` fields.
opportunities           JSON list (or ``{"opportunities": [...]}``), or CSV
                        with a header row.
scenario book           JSON list (or ``{"scenarios": [...]}``) of
                        ``{key, name, description, assumptions: {...}}``.
partnership brief       JSON object ``{dimensions: [...], synergies,
                        risks, next_steps}``.

Opportunity CSV columns
-----------------------
Required: id, name, type, country, industry, stage, value, risk_level
Optional: description, roi, timeline  (empty string -> default)

Validation
----------
All records are validated before any are returned. If **any** record fails,
a single ``ValueError`` is raised listing the first 10 failures with their
item / row numbers. A missing file raises ``FileNotFoundError``.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from deal_advisor.models.compatibility import CompatibilityDimension, validate_dimension_weights
from deal_advisor.models.entity import EntityProfile
from deal_advisor.models.opportunity import Opportunity
from deal_advisor.models.scenario import NamedScenario
from deal_advisor.scenarios.portfolio import ScenarioBook

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ERRORS_SHOWN = 10

REQUIRED_OPPORTUNITY_COLUMNS = frozenset({
    "id", "name", "type", "country", "industry", "stage", "value", "risk_level",
})
_OPTIONAL_OPPORTUNITY_COLUMNS = ("description", "roi", "timeline")


@dataclass(frozen=True)
class PartnershipBrief:
    """Inputs of one weighted partnership assessment."""

    dimensions: tuple[CompatibilityDimension, ...]
    synergies:  tuple[str, ...] = ()
    risks:      tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()


def load_entity_profile(path: Path) -> EntityProfile:
    """Load one entity profile from a JSON object.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON object or fails validation.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path.name}, got {type(data).__name__}.")
    try:
        profile = EntityProfile.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid entity profile in {path.name}:\n{exc}") from exc
    logger.info("Loaded entity profile '%s' from %s", profile.name, path.name)
    return profile


def load_opportunities(path: Path) -> list[Opportunity]:
    """Load opportunities from a ``.csv`` file or a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On missing CSV columns, duplicate ids, or any invalid record.
    """
    if path.suffix.lower() == ".csv":
        opportunities = _load_opportunities_csv(path)
    else:
        items = _json_list(_read_json(path), "opportunities", path)
        opportunities = _validate_all(
            [(i + 1, item) for i, item in enumerate(items)],
            lambda item: Opportunity.model_validate(item),
            path,
            label="Item",
        )

    seen: set[str] = set()
    dupes: set[str] = set()
    for opp in opportunities:
        if opp.id in seen:
            dupes.add(opp.id)
        seen.add(opp.id)
    if dupes:
        raise ValueError(f"Duplicate opportunity id(s) in {path.name}: {sorted(dupes)}")

    logger.info("Loaded %d opportunities from %s", len(opportunities), path.name)
    return opportunities


def load_scenario_book(path: Path) -> ScenarioBook:
    """Load named scenarios into a ``ScenarioBook`` (file order kept).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On duplicate keys or any invalid scenario.
    """
    items = _json_list(_read_json(path), "scenarios", path)
    scenarios = _validate_all(
        [(i + 1, item) for i, item in enumerate(items)],
        lambda item: NamedScenario.model_validate(item),
        path,
        label="Item",
    )
    book = ScenarioBook(scenarios)
    logger.info("Loaded %d scenarios from %s", len(book), path.name)
    return book


def load_partnership_brief(path: Path) -> PartnershipBrief:
    """Load weighted partnership dimensions plus their narrative lists.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On any invalid dimension or weights not summing to 100.
    """
    data = _read_json(path)
    if isinstance(data, list):
        data = {"dimensions": data}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path.name}, got {type(data).__name__}.")

    dimensions = _validate_all(
        [(i + 1, item) for i, item in enumerate(_json_list(data, "dimensions", path))],
        lambda item: CompatibilityDimension.model_validate(item),
        path,
        label="Dimension",
    )
    validate_dimension_weights(dimensions)

    brief = PartnershipBrief(
        dimensions=tuple(dimensions),
        synergies=_string_list(data, "synergies", path),
        risks=_string_list(data, "risks", path),
        next_steps=_string_list(data, "next_steps", path),
    )
    logger.info("Loaded %d partnership dimensions from %s", len(dimensions), path.name)
    return brief


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Malformed JSON in {path.name}: {exc}") from exc


def _json_list(data: Any, key: str, path: Path) -> list[Any]:
    """Accept either a bare list or an object wrapping the list under ``key``."""
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {key} in {path.name}.")
    return data


def _string_list(data: dict[str, Any], key: str, path: Path) -> tuple[str, ...]:
    values = data.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ValueError(f"'{key}' must be a list of strings in {path.name}.")
    return tuple(values)


def _validate_all(
    items: list[tuple[int, Any]],
    build: Callable[[Any], T],
    path:  Path,
    label: str,
) -> list[T]:
    """Build every item; aggregate failures into one ``ValueError``."""
    built: list[T] = []
    errors: list[tuple[int, str]] = []

    for number, item in items:
        try:
            built.append(build(item))
        except (ValueError, ValidationError) as exc:
            errors.append((number, str(exc)))

    if errors:
        detail = "\n".join(f"  {label} {n}: {msg}" for n, msg in errors[:MAX_ERRORS_SHOWN])
        extra = len(errors) - MAX_ERRORS_SHOWN
        suffix = f"\n  … and {extra} more" if extra > 0 else ""
        raise ValueError(
            f"{len(errors)} record(s) failed validation in {path.name}:\n{detail}{suffix}"
        )
    return built


def _load_opportunities_csv(path: Path) -> list[Opportunity]:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = set(reader.fieldnames)
        missing = REQUIRED_OPPORTUNITY_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        rows = list(reader)

    if not rows:
        logger.warning("Opportunity CSV is empty (header only): %s", path)
        return []

    # line numbers are 1-based and skip the header row
    return _validate_all(
        [(i + 2, row) for i, row in enumerate(rows)],
        _row_to_opportunity,
        path,
        label="Row",
    )


def _row_to_opportunity(row: dict[str, str]) -> Opportunity:
    record: dict[str, Any] = {
        key: (row.get(key) or "").strip() for key in REQUIRED_OPPORTUNITY_COLUMNS
    }
    for key in _OPTIONAL_OPPORTUNITY_COLUMNS:
        value = (row.get(key) or "").strip()
        if value:
            record[key] = value
    return Opportunity.model_validate(record)
