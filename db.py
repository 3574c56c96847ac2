import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from errors import ConflictError, NotFoundError


class Database:
    """Provides SQLite connection management, schema initialization and transactions."""

    _TABLE_DEFINITIONS = {
        "users": (
            """CREATE TABLE users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL UNIQUE,
                    name TEXT NOT NULL,
                    password TEXT NOT NULL,
                    role TEXT NOT NULL DEFAULT 'USER' CHECK (role IN ('USER', 'ADMIN')),
                    createdAt TEXT NOT NULL DEFAULT (datetime('now')),
                    updatedAt TEXT NOT NULL DEFAULT (datetime('now'))
                );""",
            ["id", "email", "name", "password", "role", "createdAt", "updatedAt"],
        ),
        "exercises": (
            """CREATE TABLE exercises (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE,
                    category TEXT NOT NULL CHECK (category IN ('weights', 'cardio', 'hiit', 'plyometric', 'mobility')),
                    muscleGroup TEXT,
                    equipment TEXT,
                    youtubeUrl TEXT,
                    createdById INTEGER,
                    hasLoad INTEGER NOT NULL DEFAULT 0,
                    hasReps INTEGER NOT NULL DEFAULT 0,
                    hasDuration INTEGER NOT NULL DEFAULT 0,
                    hasIntervals INTEGER NOT NULL DEFAULT 0,
                    createdAt TEXT NOT NULL DEFAULT (datetime('now')),
                    updatedAt TEXT NOT NULL DEFAULT (datetime('now')),
                    FOREIGN KEY(createdById) REFERENCES users(id) ON DELETE SET NULL
                );""",
            [
                "id",
                "name",
                "category",
                "muscleGroup",
                "equipment",
                "youtubeUrl",
                "createdById",
                "hasLoad",
                "hasReps",
                "hasDuration",
                "hasIntervals",
                "createdAt",
                "updatedAt",
            ],
        ),
        "workouts": (
            """CREATE TABLE workouts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    userId INTEGER NOT NULL,
                    date TEXT NOT NULL,
                    title TEXT,
                    notes TEXT,
                    createdAt TEXT NOT NULL DEFAULT (datetime('now')),
                    FOREIGN KEY(userId) REFERENCES users(id)
                );""",
            ["id", "userId", "date", "title", "notes", "createdAt"],
        ),
        "workout_items": (
            """CREATE TABLE workout_items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    workoutId INTEGER NOT NULL,
                    itemType TEXT NOT NULL CHECK (itemType IN ('exercise', 'superset', 'circuit')),
                    exerciseId INTEGER,
                    orderIndex INTEGER NOT NULL,
                    UNIQUE (workoutId, orderIndex),
                    CHECK ((itemType = 'exercise') = (exerciseId IS NOT NULL)),
                    FOREIGN KEY(workoutId) REFERENCES workouts(id),
                    FOREIGN KEY(exerciseId) REFERENCES exercises(id)
                );""",
            ["id", "workoutId", "itemType", "exerciseId", "orderIndex"],
        ),
        "group_items": (
            """CREATE TABLE group_items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    workoutItemId INTEGER NOT NULL,
                    exerciseId INTEGER NOT NULL,
                    orderIndex INTEGER NOT NULL,
                    UNIQUE (workoutItemId, orderIndex),
                    FOREIGN KEY(workoutItemId) REFERENCES workout_items(id),
                    FOREIGN KEY(exerciseId) REFERENCES exercises(id)
                );""",
            ["id", "workoutItemId", "exerciseId", "orderIndex"],
        ),
        "sets": (
            """CREATE TABLE sets (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    workoutItemId INTEGER,
                    groupItemId INTEGER,
                    reps REAL,
                    weight REAL,
                    durationSec REAL,
                    distanceM REAL,
                    intervals REAL,
                    workSec REAL,
                    restSec REAL,
                    notes TEXT,
                    CHECK ((workoutItemId IS NULL) <> (groupItemId IS NULL)),
                    FOREIGN KEY(workoutItemId) REFERENCES workout_items(id),
                    FOREIGN KEY(groupItemId) REFERENCES group_items(id)
                );""",
            [
                "id",
                "workoutItemId",
                "groupItemId",
                "reps",
                "weight",
                "durationSec",
                "distanceM",
                "intervals",
                "workSec",
                "restSec",
                "notes",
            ],
        ),
        "templates": (
            """CREATE TABLE templates (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    userId INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    notes TEXT,
                    itemsJson TEXT NOT NULL DEFAULT '[]',
                    createdAt TEXT NOT NULL DEFAULT (datetime('now')),
                    updatedAt TEXT NOT NULL DEFAULT (datetime('now')),
                    FOREIGN KEY(userId) REFERENCES users(id)
                );""",
            ["id", "userId", "name", "notes", "itemsJson", "createdAt", "updatedAt"],
        ),
    }

    def __init__(self, db_path: str = "data.sqlite") -> None:
        self._db_path = db_path
        self._local = threading.local()
        self._ensure_schema()

    @property
    def path(self) -> str:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys=on;")
        return connection

    @contextmanager
    def _connection(self):
        active = getattr(self._local, "connection", None)
        if active is not None:
            yield active
            return
        connection = self._connect()
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    @contextmanager
    def transaction(self):
        """Run every repository call in the block on one connection.

        Commits when the block exits normally and rolls back on any
        exception. Nested blocks join the outer transaction.
        """
        active = getattr(self._local, "connection", None)
        if active is not None:
            yield active
            return
        connection = self._connect()
        self._local.connection = connection
        try:
            yield connection
            connection.commit()
        except Exception:
            connection.rollback()
            logger.error("Transaction rolled back")
            raise
        finally:
            self._local.connection = None
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.execute("PRAGMA foreign_keys=off;")
            # keep references in other tables pointing at the rebuilt table
            conn.execute("PRAGMA legacy_alter_table=on;")
            for table, (sql, columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, columns)
            conn.commit()
            conn.execute("PRAGMA legacy_alter_table=off;")
            conn.execute("PRAGMA foreign_keys=on;")

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, columns: List[str]
    ) -> None:
        conn.execute(f"DROP TABLE IF EXISTS {table}_old;")
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (table,)
        )
        if cur.fetchone() is None:
            conn.execute(sql)
            return

        cur = conn.execute(f"PRAGMA table_info({table});")
        existing_cols = [row[1] for row in cur.fetchall()]
        if existing_cols == columns:
            return

        logger.info(f"Migrating table {table}")
        conn.execute(f"ALTER TABLE {table} RENAME TO {table}_old;")
        conn.execute(sql)
        common = [c for c in existing_cols if c in columns]
        if common:
            cols = ", ".join(common)
            conn.execute(f"INSERT INTO {table} ({cols}) SELECT {cols} FROM {table}_old;")
        conn.execute(f"DROP TABLE {table}_old;")


class BaseRepository:
    """Base repository providing helper methods over a shared ``Database``."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self.db._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[sqlite3.Row]:
        with self.db._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()

    def fetch_dicts(self, query: str, params: Tuple = ()) -> List[dict]:
        return [dict(row) for row in self.fetch_all(query, params)]

    def fetch_one(self, query: str, params: Tuple = ()) -> Optional[dict]:
        rows = self.fetch_dicts(query, params)
        return rows[0] if rows else None

    def count(self, table: str) -> int:
        rows = self.fetch_all(f"SELECT COUNT(*) FROM {table};")
        return int(rows[0][0])


class UserRepository(BaseRepository):
    """Repository for user accounts."""

    PUBLIC_COLUMNS = "id, email, name, role, createdAt, updatedAt"

    def create(self, email: str, name: str, password_hash: str, role: str = "USER") -> int:
        try:
            return self.execute(
                "INSERT INTO users (email, name, password, role) VALUES (?, ?, ?, ?);",
                (email, name, password_hash, role),
            )
        except sqlite3.IntegrityError:
            raise ConflictError("Email already registered")

    def fetch_by_email(self, email: str) -> Optional[dict]:
        """Return the full row including the password hash."""
        return self.fetch_one("SELECT * FROM users WHERE email = ?;", (email,))

    def fetch_credentials(self, user_id: int) -> Optional[dict]:
        """Return id, email and role, or ``None`` once the account is gone."""
        return self.fetch_one(
            "SELECT id, email, role FROM users WHERE id = ?;", (user_id,)
        )

    def fetch_detail(self, user_id: int) -> dict:
        row = self.fetch_one(
            f"SELECT {self.PUBLIC_COLUMNS} FROM users WHERE id = ?;", (user_id,)
        )
        if row is None:
            raise NotFoundError("User not found")
        return row

    def fetch_all_users(self) -> List[dict]:
        return self.fetch_dicts(f"SELECT {self.PUBLIC_COLUMNS} FROM users ORDER BY id ASC;")

    def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        row = self.fetch_one("SELECT id FROM users WHERE email = ?;", (email,))
        return row is not None and row["id"] != exclude_id

    def admin_ids(self) -> List[int]:
        rows = self.fetch_all("SELECT id FROM users WHERE role = 'ADMIN' ORDER BY id;")
        return [int(r[0]) for r in rows]

    def update(
        self,
        user_id: int,
        email: str | None = None,
        name: str | None = None,
        role: str | None = None,
        password_hash: str | None = None,
    ) -> None:
        fields: list[str] = []
        vals: list = []
        for column, value in (
            ("email", email),
            ("name", name),
            ("role", role),
            ("password", password_hash),
        ):
            if value is not None:
                fields.append(f"{column} = ?")
                vals.append(value)
        if not fields:
            return
        vals.append(user_id)
        try:
            self.execute(
                f"UPDATE users SET {', '.join(fields)}, updatedAt = datetime('now') WHERE id = ?;",
                tuple(vals),
            )
        except sqlite3.IntegrityError:
            raise ConflictError("Email already in use")

    def delete(self, user_id: int) -> None:
        self.execute("DELETE FROM users WHERE id = ?;", (user_id,))


class ExerciseCatalogRepository(BaseRepository):
    """Repository for the exercise catalog."""

    FLAG_COLUMNS = ("hasLoad", "hasReps", "hasDuration", "hasIntervals")
    UPDATABLE = (
        "name",
        "category",
        "muscleGroup",
        "equipment",
        "youtubeUrl",
    ) + FLAG_COLUMNS

    def add(
        self,
        name: str,
        category: str,
        created_by: Optional[int] = None,
        muscle_group: Optional[str] = None,
        equipment: Optional[str] = None,
        youtube_url: Optional[str] = None,
        has_load: bool = False,
        has_reps: bool = False,
        has_duration: bool = False,
        has_intervals: bool = False,
    ) -> int:
        try:
            return self.execute(
                "INSERT INTO exercises (name, category, muscleGroup, equipment, youtubeUrl, createdById, hasLoad, hasReps, hasDuration, hasIntervals) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?);",
                (
                    name,
                    category,
                    muscle_group,
                    equipment,
                    youtube_url,
                    created_by,
                    int(has_load),
                    int(has_reps),
                    int(has_duration),
                    int(has_intervals),
                ),
            )
        except sqlite3.IntegrityError:
            raise ConflictError(f"Exercise '{name}' already exists")

    def fetch_all_exercises(self) -> List[dict]:
        return self.fetch_dicts("SELECT * FROM exercises ORDER BY name ASC;")

    def fetch_detail(self, exercise_id: int) -> dict:
        row = self.fetch_one("SELECT * FROM exercises WHERE id = ?;", (exercise_id,))
        if row is None:
            raise NotFoundError("Exercise not found")
        return row

    def fetch_many(self, exercise_ids: Iterable[int]) -> dict[int, dict]:
        ids = sorted(set(exercise_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        rows = self.fetch_dicts(
            f"SELECT * FROM exercises WHERE id IN ({placeholders});", tuple(ids)
        )
        return {row["id"]: row for row in rows}

    def update(self, exercise_id: int, changes: dict) -> None:
        self.fetch_detail(exercise_id)
        fields: list[str] = []
        vals: list = []
        for column in self.UPDATABLE:
            if column not in changes or changes[column] is None:
                continue
            value = changes[column]
            if column in self.FLAG_COLUMNS:
                value = int(bool(value))
            fields.append(f"{column} = ?")
            vals.append(value)
        if not fields:
            return
        vals.append(exercise_id)
        try:
            self.execute(
                f"UPDATE exercises SET {', '.join(fields)}, updatedAt = datetime('now') WHERE id = ?;",
                tuple(vals),
            )
        except sqlite3.IntegrityError:
            raise ConflictError("Exercise name already in use")

    def is_referenced(self, exercise_id: int) -> bool:
        rows = self.fetch_all(
            "SELECT 1 FROM workout_items WHERE exerciseId = ? "
            "UNION ALL SELECT 1 FROM group_items WHERE exerciseId = ? LIMIT 1;",
            (exercise_id, exercise_id),
        )
        return bool(rows)

    def remove(self, exercise_id: int) -> None:
        """Delete an exercise unless logged workouts still reference it."""
        self.fetch_detail(exercise_id)
        if self.is_referenced(exercise_id):
            raise ConflictError("Exercise is used by logged workouts")
        self.execute("DELETE FROM exercises WHERE id = ?;", (exercise_id,))


class WorkoutRepository(BaseRepository):
    """Repository for workout table operations."""

    def create(
        self,
        user_id: int,
        date: str,
        title: str | None = None,
        notes: str | None = None,
    ) -> int:
        return self.execute(
            "INSERT INTO workouts (userId, date, title, notes) VALUES (?, ?, ?, ?);",
            (user_id, date, title, notes),
        )

    def fetch_detail(self, workout_id: int) -> dict:
        row = self.fetch_one("SELECT * FROM workouts WHERE id = ?;", (workout_id,))
        if row is None:
            raise NotFoundError("Not found")
        return row

    def fetch_for_user(
        self,
        user_id: int,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        descending: bool = True,
    ) -> List[dict]:
        query = "SELECT * FROM workouts"
        params: list = [user_id]
        where_clauses = ["userId = ?"]
        if start_date:
            where_clauses.append("date >= ?")
            params.append(start_date)
        if end_date:
            where_clauses.append("date <= ?")
            params.append(end_date)
        query += " WHERE " + " AND ".join(where_clauses)
        order = "DESC" if descending else "ASC"
        query += f" ORDER BY date {order}, id {order};"
        return self.fetch_dicts(query, tuple(params))

    def ids_for_user(self, user_id: int) -> List[int]:
        rows = self.fetch_all("SELECT id FROM workouts WHERE userId = ?;", (user_id,))
        return [int(r[0]) for r in rows]

    def fetch_all_ids(self) -> List[int]:
        rows = self.fetch_all("SELECT id FROM workouts ORDER BY id;")
        return [int(r[0]) for r in rows]

    def update(
        self, workout_id: int, date: str, title: str | None, notes: str | None
    ) -> None:
        self.execute(
            "UPDATE workouts SET date = ?, title = ?, notes = ? WHERE id = ?;",
            (date, title, notes, workout_id),
        )

    def delete(self, workout_id: int) -> None:
        self.execute("DELETE FROM workouts WHERE id = ?;", (workout_id,))

    def exercise_names(self, workout_id: int) -> List[str]:
        """Distinct exercise names, direct items first, then grouped ones."""
        rows = self.fetch_all(
            "SELECT e.name FROM workout_items wi JOIN exercises e ON e.id = wi.exerciseId "
            "WHERE wi.workoutId = ? ORDER BY wi.orderIndex;",
            (workout_id,),
        )
        grouped = self.fetch_all(
            "SELECT e.name FROM workout_items wi "
            "JOIN group_items gi ON gi.workoutItemId = wi.id "
            "JOIN exercises e ON e.id = gi.exerciseId "
            "WHERE wi.workoutId = ? ORDER BY wi.orderIndex, gi.orderIndex;",
            (workout_id,),
        )
        names = [r[0] for r in rows] + [r[0] for r in grouped]
        return list(dict.fromkeys(names))


class WorkoutItemRepository(BaseRepository):
    """Repository for the top-level items of a workout."""

    def add(
        self,
        workout_id: int,
        item_type: str,
        exercise_id: Optional[int],
        order_index: int,
    ) -> int:
        return self.execute(
            "INSERT INTO workout_items (workoutId, itemType, exerciseId, orderIndex) VALUES (?, ?, ?, ?);",
            (workout_id, item_type, exercise_id, order_index),
        )

    def fetch_for_workout(self, workout_id: int) -> List[dict]:
        return self.fetch_dicts(
            "SELECT * FROM workout_items WHERE workoutId = ? ORDER BY orderIndex ASC;",
            (workout_id,),
        )

    def delete_for_workout(self, workout_id: int) -> None:
        self.execute("DELETE FROM workout_items WHERE workoutId = ?;", (workout_id,))


class GroupItemRepository(BaseRepository):
    """Repository for exercise slots inside supersets and circuits."""

    def add(self, workout_item_id: int, exercise_id: int, order_index: int) -> int:
        return self.execute(
            "INSERT INTO group_items (workoutItemId, exerciseId, orderIndex) VALUES (?, ?, ?);",
            (workout_item_id, exercise_id, order_index),
        )

    def fetch_for_item(self, workout_item_id: int) -> List[dict]:
        return self.fetch_dicts(
            "SELECT * FROM group_items WHERE workoutItemId = ? ORDER BY orderIndex ASC;",
            (workout_item_id,),
        )

    def delete_for_workout(self, workout_id: int) -> None:
        self.execute(
            "DELETE FROM group_items WHERE workoutItemId IN "
            "(SELECT id FROM workout_items WHERE workoutId = ?);",
            (workout_id,),
        )


class SetRepository(BaseRepository):
    """Repository for sets owned by a workout item or a group item."""

    FIELDS = (
        "reps",
        "weight",
        "durationSec",
        "distanceM",
        "intervals",
        "workSec",
        "restSec",
        "notes",
    )

    def add(
        self,
        values: dict,
        workout_item_id: Optional[int] = None,
        group_item_id: Optional[int] = None,
    ) -> int:
        if (workout_item_id is None) == (group_item_id is None):
            raise ValueError("a set needs exactly one of workout_item_id or group_item_id")
        cols = ", ".join(self.FIELDS)
        placeholders = ", ".join("?" for _ in self.FIELDS)
        return self.execute(
            f"INSERT INTO sets (workoutItemId, groupItemId, {cols}) VALUES (?, ?, {placeholders});",
            (workout_item_id, group_item_id, *(values.get(f) for f in self.FIELDS)),
        )

    def fetch_for_item(self, workout_item_id: int) -> List[dict]:
        return self.fetch_dicts(
            "SELECT * FROM sets WHERE workoutItemId = ? ORDER BY id;", (workout_item_id,)
        )

    def fetch_for_group_item(self, group_item_id: int) -> List[dict]:
        return self.fetch_dicts(
            "SELECT * FROM sets WHERE groupItemId = ? ORDER BY id;", (group_item_id,)
        )

    def delete_for_workout(self, workout_id: int) -> None:
        self.execute(
            "DELETE FROM sets WHERE groupItemId IN ("
            "SELECT gi.id FROM group_items gi JOIN workout_items wi ON wi.id = gi.workoutItemId "
            "WHERE wi.workoutId = ?);",
            (workout_id,),
        )
        self.execute(
            "DELETE FROM sets WHERE workoutItemId IN "
            "(SELECT id FROM workout_items WHERE workoutId = ?);",
            (workout_id,),
        )

    def fetch_history(self, user_id: int) -> List[dict]:
        """Every set under the user's workouts with its workout date, oldest first."""
        return self.fetch_dicts(
            "SELECT w.date AS date, w.id AS workoutId, s.reps, s.weight, s.durationSec FROM workouts w "
            "JOIN workout_items wi ON wi.workoutId = w.id "
            "JOIN sets s ON s.workoutItemId = wi.id "
            "WHERE w.userId = ? "
            "UNION ALL "
            "SELECT w.date AS date, w.id AS workoutId, s.reps, s.weight, s.durationSec FROM workouts w "
            "JOIN workout_items wi ON wi.workoutId = w.id "
            "JOIN group_items gi ON gi.workoutItemId = wi.id "
            "JOIN sets s ON s.groupItemId = gi.id "
            "WHERE w.userId = ? "
            "ORDER BY date ASC, workoutId ASC;",
            (user_id, user_id),
        )

    def fetch_exercise_rows(self, user_id: int, exercise_id: int) -> List[dict]:
        """Sets logged for one exercise, direct or grouped.

        Items without sets still produce a row whose ``setId`` is NULL.
        """
        return self.fetch_dicts(
            "SELECT w.date AS date, s.id AS setId, s.reps, s.weight, s.durationSec FROM workouts w "
            "JOIN workout_items wi ON wi.workoutId = w.id "
            "LEFT JOIN sets s ON s.workoutItemId = wi.id "
            "WHERE w.userId = ? AND wi.exerciseId = ? "
            "UNION ALL "
            "SELECT w.date AS date, s.id AS setId, s.reps, s.weight, s.durationSec FROM workouts w "
            "JOIN workout_items wi ON wi.workoutId = w.id "
            "JOIN group_items gi ON gi.workoutItemId = wi.id "
            "LEFT JOIN sets s ON s.groupItemId = gi.id "
            "WHERE w.userId = ? AND gi.exerciseId = ?;",
            (user_id, exercise_id, user_id, exercise_id),
        )


UNSET = object()


class TemplateRepository(BaseRepository):
    """Repository for saved workout templates."""

    def create(
        self, user_id: int, name: str, notes: Optional[str], items_json: str
    ) -> int:
        return self.execute(
            "INSERT INTO templates (userId, name, notes, itemsJson) VALUES (?, ?, ?, ?);",
            (user_id, name, notes, items_json),
        )

    def fetch_for_user(self, user_id: int) -> List[dict]:
        return self.fetch_dicts(
            "SELECT id, name, notes, createdAt, updatedAt FROM templates "
            "WHERE userId = ? ORDER BY updatedAt DESC, id DESC;",
            (user_id,),
        )

    def fetch_detail(self, template_id: int, user_id: int) -> dict:
        row = self.fetch_one(
            "SELECT * FROM templates WHERE id = ? AND userId = ?;", (template_id, user_id)
        )
        if row is None:
            raise NotFoundError("Not found")
        return row

    def update(
        self,
        template_id: int,
        name: str | None = None,
        notes=UNSET,
        items_json: str | None = None,
    ) -> None:
        fields: list[str] = []
        vals: list = []
        if name is not None:
            fields.append("name = ?")
            vals.append(name)
        if notes is not UNSET:
            fields.append("notes = ?")
            vals.append(notes)
        if items_json is not None:
            fields.append("itemsJson = ?")
            vals.append(items_json)
        if not fields:
            return
        vals.append(template_id)
        self.execute(
            f"UPDATE templates SET {', '.join(fields)}, updatedAt = datetime('now') WHERE id = ?;",
            tuple(vals),
        )

    def delete(self, template_id: int) -> None:
        self.execute("DELETE FROM templates WHERE id = ?;", (template_id,))

    def delete_for_user(self, user_id: int) -> None:
        self.execute("DELETE FROM templates WHERE userId = ?;", (user_id,))
