"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``DEAL_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance and hand plain values
(baseline revenue, ``IRRSettings``, sensitivity step) to the pure
computation modules, which never read configuration themselves.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from deal_advisor.scenarios.irr import IRRSettings

# ── Sub-config models ─────────────────────────────────────────────────────────


class ScenarioConfig(BaseModel):
    """Scenario projection, IRR solver and sensitivity settings."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    baseline_revenue: float = 10_000_000.0
    irr_method: Literal["bisection", "legacy"] = "bisection"
    irr_lower_bound: float = -0.99
    irr_upper_bound: float = 10.0
    irr_max_iterations: int = 200
    irr_tolerance: float = 1e-7
    sensitivity_step: float = 0.10
    reference_scenario: str = "realistic"

    @field_validator("baseline_revenue")
    @classmethod
    def validate_baseline(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"baseline_revenue must be non-negative, got {v}.")
        return v

    @field_validator("sensitivity_step")
    @classmethod
    def validate_step(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"sensitivity_step must be in (0.0, 1.0), got {v}.")
        return v

    @field_validator("irr_max_iterations")
    @classmethod
    def validate_iterations(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"irr_max_iterations must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_bracket(self) -> "ScenarioConfig":
        if self.irr_lower_bound <= -1.0 or self.irr_upper_bound <= self.irr_lower_bound:
            raise ValueError(
                f"IRR bracket [{self.irr_lower_bound}, {self.irr_upper_bound}] is invalid; "
                "need -1 < irr_lower_bound < irr_upper_bound."
            )
        return self

    def irr_settings(self) -> IRRSettings:
        """Solver settings for ``solve_irr`` / ``evaluate_scenario``."""
        return IRRSettings(
            method=self.irr_method,
            lower_bound=self.irr_lower_bound,
            upper_bound=self.irr_upper_bound,
            max_iterations=self.irr_max_iterations,
            tolerance=self.irr_tolerance,
        )


class CompatibilityConfig(BaseModel):
    """Deal ranking display settings."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 3
    show_reasons: bool = True

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"top_n must be non-negative, got {v}.")
        return v


class DataConfig(BaseModel):
    """Default input file locations (relative to the working directory)."""

    model_config = ConfigDict(frozen=True)

    entity_profile_file: str = "config/seeds/entity_profile.json"
    opportunities_file: str = "config/seeds/opportunities.json"
    scenarios_file: str = "config/seeds/scenarios.json"
    partnership_file: str = "config/seeds/partnership_dimensions.json"
    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()``, which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    scenarios: ScenarioConfig = ScenarioConfig()
    compatibility: CompatibilityConfig = CompatibilityConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. .env is optional
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. TOML
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Pass --config or create config/default.toml first."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. DEAL_ADVISOR_* overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply DEAL_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      DEAL_ADVISOR_BASELINE_REVENUE → raw["scenarios"]["baseline_revenue"]
      DEAL_ADVISOR_IRR_METHOD       → raw["scenarios"]["irr_method"]
      DEAL_ADVISOR_LOG_LEVEL        → raw["logging"]["level"]
      DEAL_ADVISOR_DEBUG            → raw["debug"]
    """
    if baseline := os.environ.get("DEAL_ADVISOR_BASELINE_REVENUE"):
        raw.setdefault("scenarios", {})["baseline_revenue"] = baseline

    if irr_method := os.environ.get("DEAL_ADVISOR_IRR_METHOD"):
        raw.setdefault("scenarios", {})["irr_method"] = irr_method.lower()

    if log_level := os.environ.get("DEAL_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("DEAL_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        scenarios=ScenarioConfig(**raw.get("scenarios", {})),
        compatibility=CompatibilityConfig(**raw.get("compatibility", {})),
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
