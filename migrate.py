import sys
from typing import Optional

from loguru import logger

from account_service import AccountService
from auth import TokenService
from config import load_settings
from db import Database, ExerciseCatalogRepository, UserRepository
from settings_schema import SettingsSchema

# name, category, muscleGroup, equipment, youtubeUrl, hasLoad, hasReps, hasDuration, hasIntervals
BASE_EXERCISES = [
    ("Back Squat", "weights", "legs", None, None, True, True, False, False),
    ("Bench Press", "weights", "chest", None, None, True, True, False, False),
    ("Deadlift", "weights", "posterior", None, None, True, True, False, False),
    ("Overhead Press", "weights", "shoulders", None, None, True, True, False, False),
    ("Barbell Row", "weights", "back", None, None, True, True, False, False),
    ("5k Run", "cardio", None, None, None, False, False, True, False),
    ("Assault Bike Intervals", "hiit", None, None, None, False, False, False, True),
    ("Box Jump", "plyometric", None, None, None, False, True, False, False),
    (
        "Dynamic Hip Mobility",
        "mobility",
        None,
        None,
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        False,
        False,
        True,
        False,
    ),
]


def seed_catalog(catalog: ExerciseCatalogRepository) -> int:
    """Insert the base exercises into an empty catalog."""
    if catalog.count("exercises"):
        return 0
    for name, category, muscle, equipment, url, load, reps, duration, intervals in BASE_EXERCISES:
        catalog.add(
            name,
            category,
            muscle_group=muscle,
            equipment=equipment,
            youtube_url=url,
            has_load=load,
            has_reps=reps,
            has_duration=duration,
            has_intervals=intervals,
        )
    logger.info(f"Seeded {len(BASE_EXERCISES)} catalog exercises")
    return len(BASE_EXERCISES)


def seed_admin(accounts: AccountService, settings: SettingsSchema) -> Optional[int]:
    """Create the first admin from settings when there are no users yet."""
    if accounts.users.count("users"):
        return None
    return accounts.ensure_admin(
        settings.admin_email, settings.admin_name, settings.admin_password
    )


def migrate(db_path: Optional[str] = None, settings: Optional[SettingsSchema] = None) -> Database:
    settings = settings or load_settings(db_file=db_path)
    db = Database(db_path or settings.db_file)
    seed_catalog(ExerciseCatalogRepository(db))
    accounts = AccountService(
        db,
        TokenService(settings.jwt_secret, settings.token_expire_days),
        UserRepository(db),
    )
    seed_admin(accounts, settings)
    logger.info(f"Database ready at {db.path}")
    return db


if __name__ == '__main__':
    path = sys.argv[1] if len(sys.argv) > 1 else None
    migrate(path)
