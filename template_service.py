from __future__ import annotations

import json
from typing import Any, List, Optional

from loguru import logger

from auth import Identity
from db import Database, TemplateRepository, UNSET
from models import TemplateUpdate
from workout_service import WorkoutService


class TemplateService:
    """Saved workout blueprints owned by a single user.

    Template items are kept as an opaque JSON list; they are only checked
    against the catalog when a workout is created from them.
    """

    def __init__(
        self,
        db: Database,
        workout_service: WorkoutService,
        template_repo: TemplateRepository | None = None,
    ) -> None:
        self.db = db
        self.workouts = workout_service
        self.templates = template_repo or TemplateRepository(db)

    @staticmethod
    def _decode(row: dict) -> dict:
        result = dict(row)
        result["items"] = json.loads(result.pop("itemsJson") or "[]")
        return result

    def list_templates(self, identity: Identity) -> List[dict]:
        return self.templates.fetch_for_user(identity.id)

    def create(
        self, identity: Identity, name: str, notes: Optional[str], items: List[Any]
    ) -> int:
        template_id = self.templates.create(identity.id, name, notes, json.dumps(items))
        logger.info(f"Template {template_id} created for user {identity.id}")
        return template_id

    def fetch(self, identity: Identity, template_id: int) -> dict:
        return self._decode(self.templates.fetch_detail(template_id, identity.id))

    def update(self, identity: Identity, template_id: int, changes: TemplateUpdate) -> dict:
        """Apply the fields present in ``changes``; ``notes`` may be cleared with null."""
        self.templates.fetch_detail(template_id, identity.id)
        provided = changes.model_fields_set
        self.templates.update(
            template_id,
            name=changes.name or None,
            notes=changes.notes if "notes" in provided else UNSET,
            items_json=json.dumps(changes.items) if changes.items is not None else None,
        )
        return self.fetch(identity, template_id)

    def delete(self, identity: Identity, template_id: int) -> None:
        self.templates.fetch_detail(template_id, identity.id)
        self.templates.delete(template_id)
        logger.info(f"Template {template_id} deleted by user {identity.id}")

    def duplicate(
        self, identity: Identity, template_id: int, name: Optional[str] = None
    ) -> int:
        source = self.fetch(identity, template_id)
        return self.create(
            identity, name or f"{source['name']} (copy)", source["notes"], source["items"]
        )

    def instantiate(
        self,
        identity: Identity,
        template_id: int,
        date: str,
        title: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Log a new workout on ``date`` from the template's items."""
        template = self.fetch(identity, template_id)
        payload = {
            "date": date,
            "title": title if title is not None else template["name"],
            "notes": notes if notes is not None else template["notes"],
            "items": template["items"],
        }
        workout_id = self.workouts.create(identity, payload)
        logger.info(f"Workout {workout_id} created from template {template_id}")
        return workout_id
