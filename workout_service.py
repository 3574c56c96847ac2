from __future__ import annotations

from typing import Any, List, Optional

from loguru import logger
from pydantic import ValidationError as PayloadError

from algorithms import Capabilities, prune_set
from auth import Identity
from db import (
    Database,
    ExerciseCatalogRepository,
    GroupItemRepository,
    SetRepository,
    WorkoutItemRepository,
    WorkoutRepository,
)
from errors import NotFoundError, ValidationError, field_errors
from models import WorkoutPayload


def parse_payload(data: Any) -> WorkoutPayload:
    """Validate a raw workout payload, converting pydantic errors to field errors."""
    if isinstance(data, WorkoutPayload):
        return data
    try:
        return WorkoutPayload.model_validate(data)
    except PayloadError as e:
        raise ValidationError("Invalid payload", field_errors(e.errors()))


class WorkoutService:
    """Creates, replaces, deletes and reassembles workout trees.

    A workout is stored across four tables: ``workouts`` → ``workout_items``
    → (``sets`` | ``group_items`` → ``sets``). Every write runs in one
    transaction, so a failure part-way leaves the store untouched. Edits
    delete the whole item subtree and insert it again; child ids are
    regenerated on every replace.
    """

    def __init__(
        self,
        db: Database,
        workout_repo: WorkoutRepository | None = None,
        item_repo: WorkoutItemRepository | None = None,
        group_item_repo: GroupItemRepository | None = None,
        set_repo: SetRepository | None = None,
        catalog: ExerciseCatalogRepository | None = None,
    ) -> None:
        self.db = db
        self.workouts = workout_repo or WorkoutRepository(db)
        self.items = item_repo or WorkoutItemRepository(db)
        self.group_items = group_item_repo or GroupItemRepository(db)
        self.sets = set_repo or SetRepository(db)
        self.catalog = catalog or ExerciseCatalogRepository(db)

    # reads

    def _owned(self, workout_id: int, identity: Identity) -> dict:
        """Fetch a workout the caller may see; others get the same 404."""
        try:
            workout = self.workouts.fetch_detail(workout_id)
        except NotFoundError:
            logger.info(f"Workout {workout_id} not found for user {identity.id}")
            raise
        if not (identity.is_admin or workout["userId"] == identity.id):
            logger.warning(f"User {identity.id} denied access to workout {workout_id}")
            raise NotFoundError("Not found")
        return workout

    def tree(self, workout_id: int) -> dict:
        """Reassemble a workout without an ownership check."""
        return self._assemble(self.workouts.fetch_detail(workout_id))

    def _assemble(self, workout: dict) -> dict:
        items = self.items.fetch_for_workout(workout["id"])
        for item in items:
            if item["itemType"] == "exercise":
                item["sets"] = self.sets.fetch_for_item(item["id"])
                item["groupItems"] = []
            else:
                item["sets"] = []
                item["groupItems"] = self.group_items.fetch_for_item(item["id"])
                for group_item in item["groupItems"]:
                    group_item["sets"] = self.sets.fetch_for_group_item(group_item["id"])
        return {**workout, "items": items}

    def fetch_tree(self, workout_id: int, identity: Identity) -> dict:
        return self._assemble(self._owned(workout_id, identity))

    def list_workouts(
        self,
        identity: Identity,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        summary: bool = False,
    ) -> List[dict]:
        """The caller's own workouts, newest first."""
        workouts = self.workouts.fetch_for_user(identity.id, start_date, end_date)
        if summary:
            for workout in workouts:
                workout["exerciseNames"] = self.workouts.exercise_names(workout["id"])
        return workouts

    # writes

    def _validate(self, payload: WorkoutPayload) -> dict[int, Capabilities]:
        """Check item shapes and exercise ids; return flags per exercise."""
        errors: dict[str, list[str]] = {}
        referenced: dict[int, list[str]] = {}

        for index, item in enumerate(payload.items):
            path = f"items.{index}"
            if item.itemType == "exercise":
                if item.exerciseId is None:
                    errors.setdefault(f"{path}.exerciseId", []).append(
                        "exerciseId is required for itemType 'exercise'"
                    )
                else:
                    referenced.setdefault(item.exerciseId, []).append(f"{path}.exerciseId")
                if item.groupItems:
                    errors.setdefault(f"{path}.groupItems", []).append(
                        "groupItems are not allowed for itemType 'exercise'"
                    )
            else:
                if item.exerciseId is not None:
                    errors.setdefault(f"{path}.exerciseId", []).append(
                        f"exerciseId is not allowed for itemType '{item.itemType}'"
                    )
                if item.sets:
                    errors.setdefault(f"{path}.sets", []).append(
                        f"sets of a {item.itemType} belong to its groupItems"
                    )
                for g_index, group_item in enumerate(item.groupItems):
                    referenced.setdefault(group_item.exerciseId, []).append(
                        f"{path}.groupItems.{g_index}.exerciseId"
                    )

        known = self.catalog.fetch_many(referenced)
        for exercise_id, paths in referenced.items():
            if exercise_id not in known:
                for p in paths:
                    errors.setdefault(p, []).append(f"unknown exercise {exercise_id}")

        if errors:
            logger.info(f"Rejected workout payload: {sorted(errors)}")
            raise ValidationError("Invalid payload", errors)
        return {eid: Capabilities.from_row(row) for eid, row in known.items()}

    def _write_tree(
        self, workout_id: int, payload: WorkoutPayload, caps: dict[int, Capabilities]
    ) -> None:
        # order indices come from array position, never from the client
        for index, item in enumerate(payload.items):
            if item.itemType == "exercise":
                item_id = self.items.add(workout_id, item.itemType, item.exerciseId, index)
                for set_payload in item.sets:
                    self.sets.add(
                        prune_set(set_payload.model_dump(), caps[item.exerciseId]),
                        workout_item_id=item_id,
                    )
                continue
            item_id = self.items.add(workout_id, item.itemType, None, index)
            for g_index, group_item in enumerate(item.groupItems):
                group_item_id = self.group_items.add(item_id, group_item.exerciseId, g_index)
                for set_payload in group_item.sets:
                    self.sets.add(
                        prune_set(set_payload.model_dump(), caps[group_item.exerciseId]),
                        group_item_id=group_item_id,
                    )

    def _clear_tree(self, workout_id: int) -> None:
        self.sets.delete_for_workout(workout_id)
        self.group_items.delete_for_workout(workout_id)
        self.items.delete_for_workout(workout_id)

    def create(self, identity: Identity, data: Any) -> int:
        payload = parse_payload(data)
        caps = self._validate(payload)
        with self.db.transaction():
            workout_id = self.workouts.create(
                identity.id, payload.date, payload.title or None, payload.notes or None
            )
            self._write_tree(workout_id, payload, caps)
        logger.info(
            f"Workout {workout_id} created for user {identity.id} with {len(payload.items)} items"
        )
        return workout_id

    def replace(self, workout_id: int, identity: Identity, data: Any) -> int:
        self._owned(workout_id, identity)
        payload = parse_payload(data)
        caps = self._validate(payload)
        with self.db.transaction():
            self.workouts.update(
                workout_id, payload.date, payload.title or None, payload.notes or None
            )
            self._clear_tree(workout_id)
            self._write_tree(workout_id, payload, caps)
        logger.info(f"Workout {workout_id} replaced with {len(payload.items)} items")
        return workout_id

    def delete(self, workout_id: int, identity: Identity) -> None:
        self._owned(workout_id, identity)
        with self.db.transaction():
            self._clear_tree(workout_id)
            self.workouts.delete(workout_id)
        logger.info(f"Workout {workout_id} deleted by user {identity.id}")

    def delete_all_for_user(self, user_id: int) -> int:
        """Remove every workout a user owns; returns how many were deleted."""
        workout_ids = self.workouts.ids_for_user(user_id)
        with self.db.transaction():
            for workout_id in workout_ids:
                self._clear_tree(workout_id)
                self.workouts.delete(workout_id)
        return len(workout_ids)
