"""
Deal taxonomy: the categorical inputs an entity profile and an opportunity share.

Two dimensions describe every profile/opportunity pair:
  - ``CompanyStage`` — the *when*: how mature is the business?
  - ``RiskLevel``    — the *how risky*: declared tolerance (entity) or
    exposure (opportunity).

Both enums parse leniently so form input such as ``"early-stage"``,
``"EarlyStage"`` or ``"early stage"`` all resolve to the same member::

    CompanyStage("earlystage") is CompanyStage.EARLY_STAGE   # True
    RiskLevel("high") is RiskLevel.HIGH                        # True

This module has NO imports from any other ``deal_advisor`` package.
"""

from enum import StrEnum


def _normalise_label(value: object) -> str:
    """Lower-case a label and drop separators: ``"Early-Stage"`` -> ``"earlystage"``."""
    text = str(value).strip().lower()
    for sep in ("-", "_", " "):
        text = text.replace(sep, "")
    return text


class _LenientStrEnum(StrEnum):
    """StrEnum that matches values and member names ignoring case and separators."""

    @classmethod
    def _missing_(cls, value: object):
        key = _normalise_label(value)
        for member in cls:
            if key in (_normalise_label(member.value), _normalise_label(member.name)):
                return member
        return None


class CompanyStage(_LenientStrEnum):
    """Maturity stage of an entity or of the business behind an opportunity."""

    PRE_LAUNCH = "Pre-Launch"
    """No revenue yet; product or market entry still being prepared."""

    EARLY_STAGE = "Early-Stage"
    """First customers and revenue; business model still being proven."""

    GROWTH = "Growth"
    """Repeatable revenue, scaling sales and operations."""

    EXPANSION = "Expansion"
    """Entering new markets, geographies or product lines."""

    MATURE = "Mature"
    """Established market position; optimising rather than scaling."""


class RiskLevel(_LenientStrEnum):
    """Three-step risk scale used for both tolerance and exposure."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
