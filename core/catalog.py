# core/catalog.py
# Які типи проєктів дозволені для кожної послуги.

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import NotFoundError
from .models import ProjectType, Service
from .rules import ALL_PROJECT_TYPES

logger = logging.getLogger(__name__)

DEFAULT_SERVICES: list[Service] = [
    Service(id="1", name="Lawn Care & Maintenance", project_types=["maintenance"]),
    Service(id="2", name="Tree Services & Pruning", project_types=["repair", "maintenance"]),
    Service(id="3", name="Desert Landscaping", project_types=["installation"]),
    Service(id="4", name="Irrigation Systems", project_types=["installation", "repair", "maintenance"]),
    Service(id="5", name="Hardscaping & Patios", project_types=["installation"]),
]


class ServiceCatalog:
    def __init__(self, services: list[Service] | None = None):
        items = DEFAULT_SERVICES if services is None else services
        self._services: dict[str, Service] = {s.id: s for s in items}

    @classmethod
    def from_json(cls, path: str | Path) -> "ServiceCatalog":
        """
        Reads a catalogue file shaped like:
        {"1": {"name": "Lawn Care", "project_types": ["maintenance"]}, ...}
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        services = [
            Service(id=service_id, name=cfg["name"], project_types=cfg.get("project_types", list(ALL_PROJECT_TYPES)))
            for service_id, cfg in raw.items()
        ]
        logger.info("Loaded %d services from %s", len(services), path)
        return cls(services)

    def list_services(self) -> list[Service]:
        return list(self._services.values())

    def get_service(self, service_id: str) -> Service:
        try:
            return self._services[service_id]
        except KeyError:
            raise NotFoundError("Service", service_id) from None

    def get_allowed_project_types(self, service_id: str) -> list[ProjectType]:
        """Unknown service -> no restriction (all project types)."""
        service = self._services.get(service_id)
        if service is None:
            return list(ALL_PROJECT_TYPES)
        return list(service.project_types)


def format_allowed_types(types: list[ProjectType]) -> str:
    if len(types) == 1:
        return f"{types[0].capitalize()} only"
    return " & ".join(t.capitalize() for t in types)
