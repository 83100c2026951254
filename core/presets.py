# core/presets.py
# Готові набори вводу для калькулятора. Це лише підстановка значень, не логіка ціни.

from __future__ import annotations

from typing import Any

from .models import CostInputs, ProjectType, Zone

PRESETS: dict[str, dict[str, Any]] = {
    "lawn": {
        "label": "Lawn maintenance",
        "hours": 2,
        "sqft": 1000,
        "visits": 1,
        "project_type": "maintenance",
    },
    "sprinkler": {
        "label": "Sprinkler repair",
        "hours": 3,
        "sqft": 200,
        "visits": 2,
        "project_type": "repair",
    },
    "install": {
        "label": "Landscape installation",
        "hours": 16,
        "sqft": 2500,
        "visits": 3,
        "project_type": "installation",
    },
}


def apply_preset(name: str, zone: Zone = "residential") -> CostInputs:
    try:
        p = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'") from None
    return CostInputs(
        hours=p["hours"],
        sqft=p["sqft"],
        visits=p["visits"],
        zone=zone,
        project_type=p["project_type"],
    )


def infer_project_type(title: str) -> ProjectType:
    """Default suggestion from a job title. Callers may always override it."""
    t = title.lower()
    if "install" in t:
        return "installation"
    if "repair" in t or "fix" in t:
        return "repair"
    return "maintenance"
