"""Built-in scoring presets.

Presets are plain configurations shipped with the engine; saving custom
presets belongs to the storage layer.
"""

from typing import Optional

from leadscore.models import CriterionKind, ScoringConfiguration, ScoringCriterion


def _match(key: str, target: str, weight: float) -> ScoringCriterion:
    return ScoringCriterion(key=key, kind=CriterionKind.MATCH, target_value=target, weight=weight)


PRESETS: dict[str, ScoringConfiguration] = {
    "logistics_focus": ScoringConfiguration(
        name="Logistics Focus",
        description="Optimized for logistics companies in Bangkok area",
        criteria=[
            _match("industrial", "Logistics", 35),
            _match("province", "Bangkok", 25),
            _match("company_size", "M", 10),
            _match("verification_status", "Active", 10),
        ],
    ),
    "manufacturing_b2b": ScoringConfiguration(
        name="Manufacturing B2B",
        description="Focused on large manufacturing companies",
        criteria=[
            _match("industrial", "Manufacturing", 35),
            _match("province", "Bangkok", 15),
            _match("company_size", "L", 20),
            _match("verification_status", "Active", 10),
        ],
    ),
    "intrinsic_quality": ScoringConfiguration(
        name="Intrinsic Quality",
        description="No criteria; ranks by record quality signals only",
    ),
}


def get_preset(name: str) -> Optional[ScoringConfiguration]:
    """Look up a preset by key, returning a copy safe to modify."""
    preset = PRESETS.get(name)
    return preset.model_copy(deep=True) if preset else None
