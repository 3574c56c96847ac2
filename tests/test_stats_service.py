import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from auth import Identity
from db import Database, ExerciseCatalogRepository, UserRepository
from errors import NotFoundError
from migrate import seed_catalog
from stats_service import StatisticsService
from workout_service import WorkoutService

BACK_SQUAT, BENCH, RUN, BIKE, BOX_JUMP = 1, 2, 6, 7, 8


@pytest.fixture
def env(tmp_path):
    db = Database(str(tmp_path / "stats.sqlite"))
    seed_catalog(ExerciseCatalogRepository(db))
    users = UserRepository(db)
    user = Identity(users.create("lifter@example.com", "Lifter", "x"), "lifter@example.com", "USER")
    other = Identity(users.create("other@example.com", "Other", "x"), "other@example.com", "USER")
    return WorkoutService(db), StatisticsService(db), user, other


def exercise(exercise_id, *sets):
    return {"itemType": "exercise", "exerciseId": exercise_id, "sets": list(sets)}


def test_daily_totals_counts_direct_and_grouped_sets(env):
    workouts, stats, user, _ = env
    workouts.create(
        user,
        {
            "date": "2024-01-01",
            "items": [
                exercise(BENCH, {"reps": 5, "weight": 100}),
                {
                    "itemType": "superset",
                    "groupItems": [
                        {"exerciseId": BACK_SQUAT, "sets": [{"reps": 7, "weight": 100}]}
                    ],
                },
            ],
        },
    )
    workouts.create(
        user,
        {"date": "2024-01-02T07:00:00Z", "items": [exercise(RUN, {"durationSec": 1500})]},
    )
    totals = stats.daily_totals(user.id)
    assert totals["volumeByDay"] == {"2024-01-01": 1200}
    assert totals["cardioDurationByDay"] == {"2024-01-02": 1500}


def test_days_without_contribution_are_absent(env):
    workouts, stats, user, other = env
    workouts.create(user, {"date": "2024-01-03", "items": [exercise(BOX_JUMP, {"reps": 10})]})
    workouts.create(other, {"date": "2024-01-04", "items": [exercise(BENCH, {"reps": 5, "weight": 60})]})
    totals = stats.daily_totals(user.id)
    assert totals == {"volumeByDay": {}, "cardioDurationByDay": {}}


def test_same_day_workouts_are_summed(env):
    workouts, stats, user, _ = env
    workouts.create(user, {"date": "2024-01-05", "items": [exercise(BENCH, {"reps": 5, "weight": 100})]})
    workouts.create(user, {"date": "2024-01-05", "items": [exercise(BENCH, {"reps": 7, "weight": 100})]})
    assert stats.daily_totals(user.id)["volumeByDay"] == {"2024-01-05": 1200}


def test_progression_load_mode(env):
    workouts, stats, user, _ = env
    workouts.create(
        user,
        {
            "date": "2024-01-01",
            "items": [exercise(BENCH, {"reps": 5, "weight": 100}, {"reps": 6, "weight": 110})],
        },
    )
    workouts.create(
        user,
        {
            "date": "2024-01-08",
            "items": [
                {
                    "itemType": "circuit",
                    "groupItems": [{"exerciseId": BENCH, "sets": [{"reps": 5, "weight": 100}]}],
                }
            ],
        },
    )
    result = stats.progression(user.id, BENCH)
    assert result["mode"] == "load"
    assert result["modeInferred"] is False
    assert result["name"] == "Bench Press"
    first, second = result["data"]
    assert first["date"] == "2024-01-01"
    assert first["topWeight"] == 110
    assert first["topVolume"] == 660
    assert first["est1rm"] == pytest.approx(132.0)
    assert second["date"] == "2024-01-08"
    assert second["est1rm"] == pytest.approx(116.67)


def test_progression_skips_items_without_sets(env):
    workouts, stats, user, _ = env
    workouts.create(user, {"date": "2024-01-01", "items": [exercise(BENCH)]})
    workouts.create(
        user,
        {
            "date": "2024-01-02",
            "items": [{"itemType": "superset", "groupItems": [{"exerciseId": BENCH, "sets": []}]}],
        },
    )
    workouts.create(user, {"date": "2024-01-03", "items": [exercise(BENCH, {"reps": 3, "weight": 90})]})
    data = stats.progression(user.id, BENCH)["data"]
    assert [d["date"] for d in data] == ["2024-01-03"]


def test_progression_weight_without_reps_has_no_estimate(env):
    workouts, stats, user, _ = env
    workouts.create(user, {"date": "2024-01-01", "items": [exercise(BENCH, {"weight": 80})]})
    (entry,) = stats.progression(user.id, BENCH)["data"]
    assert entry == {"date": "2024-01-01", "topWeight": 80}


def test_progression_duration_mode(env):
    workouts, stats, user, _ = env
    workouts.create(
        user,
        {"date": "2024-01-01", "items": [exercise(RUN, {"durationSec": 600}, {"durationSec": 900})]},
    )
    result = stats.progression(user.id, RUN)
    assert result["mode"] == "duration"
    assert result["modeInferred"] is False
    assert result["data"] == [{"date": "2024-01-01", "durationSec": 1500}]


def test_progression_mode_inferred_without_load_or_duration(env):
    _, stats, user, _ = env
    for exercise_id in (BOX_JUMP, BIKE):
        result = stats.progression(user.id, exercise_id)
        assert result["mode"] == "load"
        assert result["modeInferred"] is True
        assert result["data"] == []


def test_progression_ignores_other_users(env):
    workouts, stats, user, other = env
    workouts.create(other, {"date": "2024-01-01", "items": [exercise(BENCH, {"reps": 5, "weight": 100})]})
    assert stats.progression(user.id, BENCH)["data"] == []


def test_progression_unknown_exercise(env):
    _, stats, user, _ = env
    with pytest.raises(NotFoundError):
        stats.progression(user.id, 999)


def test_volume_and_epley_properties(env):
    workouts, stats, user, _ = env
    workouts.create(
        user,
        {
            "date": "2024-01-01",
            "items": [
                exercise(BENCH, {"weight": 100, "reps": 5}),
                exercise(BACK_SQUAT, {"weight": 50, "reps": 4}),
            ],
        },
    )
    assert stats.daily_totals(user.id)["volumeByDay"]["2024-01-01"] == 700
    (entry,) = stats.progression(user.id, BENCH)["data"]
    assert entry["est1rm"] == pytest.approx(116.67)
    assert entry["topVolume"] == 500

    workouts.create(
        user,
        {"date": "2024-01-01", "items": [exercise(BENCH, {"weight": 120, "reps": 3})]},
    )
    (entry,) = stats.progression(user.id, BENCH)["data"]
    assert entry["est1rm"] == pytest.approx(132.0)
    assert entry["topWeight"] == 120
    assert entry["topVolume"] == 500


def test_duration_only_exercise_drops_reps(env):
    workouts, _, user, _ = env
    wid = workouts.create(
        user,
        {"date": "2024-01-01", "items": [exercise(RUN, {"reps": 10, "durationSec": 60, "notes": "easy"})]},
    )
    (stored,) = workouts.fetch_tree(wid, user)["items"][0]["sets"]
    assert stored["reps"] is None
    assert stored["durationSec"] == 60
    assert stored["notes"] == "easy"
