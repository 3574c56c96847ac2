import argparse
import json
import os
import shutil
from typing import Optional

from loguru import logger

from account_service import AccountService
from auth import TokenService
from config import load_settings
from db import Database, UserRepository, WorkoutRepository
from log_setup import setup_logger
from migrate import migrate
from workout_service import WorkoutService


def export_workouts(db_path: str, output_dir: str = ".") -> int:
    """Write one JSON file per workout tree; returns how many were written."""
    db = Database(db_path)
    service = WorkoutService(db)
    os.makedirs(output_dir, exist_ok=True)
    workout_ids = WorkoutRepository(db).fetch_all_ids()
    for wid in workout_ids:
        out_path = os.path.join(output_dir, f"workout_{wid}.json")
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(service.tree(wid), f, indent=2)
    logger.info(f"Exported {len(workout_ids)} workouts to {output_dir}")
    return len(workout_ids)


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def create_admin(db_path: str, email: str, name: str, password: str) -> Optional[int]:
    """Create an admin account, or promote the existing account with ``email``."""
    settings = load_settings(db_file=db_path)
    db = Database(db_path)
    users = UserRepository(db)
    accounts = AccountService(
        db, TokenService(settings.jwt_secret, settings.token_expire_days), users
    )
    existing = users.fetch_by_email(email.strip().lower())
    if existing is not None:
        accounts.promote(existing["id"])
        return existing["id"]
    return accounts.ensure_admin(email, name, password)


def serve(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run("rest_api:create_app", factory=True, host=host, port=port)


def main() -> None:
    parser = argparse.ArgumentParser(description="Utility commands")
    sub = parser.add_subparsers(dest="cmd", required=True)
    settings = load_settings()

    mig = sub.add_parser("migrate")
    mig.add_argument("--db", default=settings.db_file)

    srv = sub.add_parser("serve")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=settings.port)

    exp = sub.add_parser("export")
    exp.add_argument("--db", default=settings.db_file)
    exp.add_argument("--out", default=".")

    bkp = sub.add_parser("backup")
    bkp.add_argument("--db", default=settings.db_file)
    bkp.add_argument("--out", default="backup.sqlite")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="backup.sqlite")
    rst.add_argument("--db", default=settings.db_file)

    adm = sub.add_parser("create-admin")
    adm.add_argument("--db", default=settings.db_file)
    adm.add_argument("--email", required=True)
    adm.add_argument("--name", default="Admin")
    adm.add_argument("--password", required=True)

    args = parser.parse_args()
    setup_logger(settings.log_level, settings.log_file)

    if args.cmd == "migrate":
        migrate(args.db)
    elif args.cmd == "serve":
        serve(args.host, args.port)
    elif args.cmd == "export":
        count = export_workouts(args.db, args.out)
        print(f"Exported {count} workouts")
    elif args.cmd == "backup":
        backup_db(args.db, args.out)
    elif args.cmd == "restore":
        restore_db(args.src, args.db)
    elif args.cmd == "create-admin":
        user_id = create_admin(args.db, args.email, args.name, args.password)
        print(f"Admin account id: {user_id}")


if __name__ == "__main__":
    main()
