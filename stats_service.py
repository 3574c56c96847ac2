from __future__ import annotations

from typing import Dict, List

from loguru import logger

from db import Database, ExerciseCatalogRepository, SetRepository
from algorithms import MathTools


class StatisticsService:
    """Compute workout statistics for analysis."""

    def __init__(
        self,
        db: Database,
        set_repo: SetRepository | None = None,
        catalog_repo: ExerciseCatalogRepository | None = None,
    ) -> None:
        self.sets = set_repo or SetRepository(db)
        self.catalog = catalog_repo or ExerciseCatalogRepository(db)

    def daily_totals(self, user_id: int) -> Dict[str, Dict[str, float]]:
        """Return lifted volume and timed duration per calendar day.

        Both direct and grouped sets count. A day only appears in a
        mapping when at least one set contributed to it.
        """
        volume_by_day: Dict[str, float] = {}
        duration_by_day: Dict[str, float] = {}
        for row in self.sets.fetch_history(user_id):
            day = MathTools.day_key(row["date"])
            volume = MathTools.set_volume(row["weight"], row["reps"])
            if volume:
                volume_by_day[day] = volume_by_day.get(day, 0.0) + volume
            if row["durationSec"]:
                duration_by_day[day] = duration_by_day.get(day, 0.0) + float(
                    row["durationSec"]
                )
        return {
            "volumeByDay": {d: round(v, 2) for d, v in volume_by_day.items()},
            "cardioDurationByDay": duration_by_day,
        }

    def progression(self, user_id: int, exercise_id: int) -> dict:
        """Per-day progression series for one exercise.

        ``mode`` is ``duration`` only for exercises that track time but not
        load. Exercises with neither flag fall back to ``load`` and are
        reported with ``modeInferred``.
        """
        exercise = self.catalog.fetch_detail(exercise_id)
        by_date: Dict[str, dict] = {}
        for row in self.sets.fetch_exercise_rows(user_id, exercise_id):
            # items logged without sets come back from the outer join empty
            if row["setId"] is None:
                continue
            day = MathTools.day_key(row["date"])
            entry = by_date.setdefault(day, {"date": day})
            weight, reps = row["weight"], row["reps"]
            if weight is not None:
                weight = float(weight)
                entry["topWeight"] = max(entry.get("topWeight", weight), weight)
                if reps is not None and reps > 0:
                    volume = weight * float(reps)
                    est = MathTools.epley_1rm(weight, float(reps))
                    entry["topVolume"] = max(entry.get("topVolume", volume), volume)
                    entry["est1rm"] = max(entry.get("est1rm", est), est)
            if row["durationSec"] is not None:
                entry["durationSec"] = entry.get("durationSec", 0.0) + float(
                    row["durationSec"]
                )

        data: List[dict] = []
        for day in sorted(by_date):
            entry = by_date[day]
            if "est1rm" in entry:
                entry["est1rm"] = round(entry["est1rm"], 2)
            if "topVolume" in entry:
                entry["topVolume"] = round(entry["topVolume"], 2)
            data.append(entry)

        inferred = False
        if exercise["hasLoad"]:
            mode = "load"
        elif exercise["hasDuration"]:
            mode = "duration"
        else:
            mode = "load"
            inferred = True
            logger.debug(f"Exercise {exercise_id} tracks neither load nor duration")
        return {
            "exerciseId": exercise["id"],
            "name": exercise["name"],
            "mode": mode,
            "modeInferred": inferred,
            "data": data,
        }
