# src/demand_timeline/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path

from .task_models import (
    Daily,
    InvalidTaskError,
    Recurrence,
    RecurringTask,
    Task,
    Weekly,
    recurrence_from_dict,
    recurrence_to_dict,
    validate_recurrence,
    validate_time_range,
)

logger = logging.getLogger(__name__)

# (title, start, end, completed, recurrence)
DEMO_TASKS: list[tuple[str, str, str, bool, Recurrence]] = [
    ("Import data sources (CRM/analytics)", "08:30", "09:15", True, Daily()),
    ("Run funnel job and validate engaged leads", "09:30", "10:30", False, Daily()),
    ("Weekly sync: bookings and finance", "11:00", "12:00", False, Weekly(weekday=1)),
    ("Refresh BI dashboards", "14:00", "15:00", False, Daily()),
    ("Send daily funnel report to clients", "17:30", "18:00", False, Daily()),
]


class TaskStore:
    """
    SQLite store for recurring task definitions.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    start_hhmm TEXT NOT NULL,
                    end_hhmm TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    recurrence TEXT NOT NULL DEFAULT '{"kind": "daily"}',
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("recurrence", "TEXT NOT NULL DEFAULT '{\"kind\": \"daily\"}'")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _recurrence_to_str(rec: Recurrence) -> str:
        return json.dumps(recurrence_to_dict(rec), ensure_ascii=False)

    @staticmethod
    def _str_to_recurrence(s: str | None) -> Recurrence:
        try:
            raw = json.loads(s or "")
        except json.JSONDecodeError as e:
            raise InvalidTaskError(f"recurrence is not JSON: {s!r}") from e
        if not isinstance(raw, dict):
            raise InvalidTaskError(f"recurrence is not an object: {s!r}")
        return recurrence_from_dict(raw)

    def _row_to_task(self, row: sqlite3.Row) -> RecurringTask | None:
        try:
            recurrence = self._str_to_recurrence(row["recurrence"])
        except InvalidTaskError:
            # Unknown shapes never show up on any day.
            logger.warning("Task %s has an unrecognized recurrence; skipping", row["id"])
            return None

        task = Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            start=str(row["start_hhmm"]),
            end=str(row["end_hhmm"]),
            completed=bool(row["completed"]),
        )
        return RecurringTask(task=task, recurrence=recurrence)

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        title: str,
        start: str,
        end: str,
        recurrence: Recurrence,
        completed: bool = False,
    ) -> int:
        if not title or not title.strip():
            raise InvalidTaskError("title is required")
        validate_time_range(start, end)
        validate_recurrence(recurrence)
        rec_str = self._recurrence_to_str(recurrence)

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(title, start_hhmm, end_hhmm, completed, recurrence, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (title.strip(), start, end, int(bool(completed)), rec_str, now, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s %s-%s recurrence=%s", task_id, start, end, rec_str)
            return task_id
        finally:
            conn.close()

    def get_task(self, task_id: int) -> RecurringTask | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(self) -> list[RecurringTask]:
        """All loadable tasks, in insertion order."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY id ASC")
            out: list[RecurringTask] = []
            for row in cur.fetchall():
                task = self._row_to_task(row)
                if task is not None:
                    out.append(task)
            return out
        finally:
            conn.close()

    def set_completed(self, task_id: int, completed: bool) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE tasks SET completed = ?, updated_at = ? WHERE id = ?",
                (int(bool(completed)), time.time(), int(task_id)),
            )
            conn.commit()
            changed = cur.rowcount == 1
        finally:
            conn.close()
        if changed:
            logger.debug("Task %s completed=%s", task_id, completed)
        return changed

    def delete_task(self, task_id: int) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            deleted = cur.rowcount == 1
        finally:
            conn.close()
        if deleted:
            logger.info("Task %s deleted", task_id)
        return deleted

    def clear_all(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks")
            conn.commit()
            n = int(cur.rowcount)
        finally:
            conn.close()
        logger.info("TaskStore cleared (%d tasks removed)", n)
        return n

    def seed_demo_tasks(self) -> int:
        """Insert the sample day if the store is empty. Returns how many were added."""
        if self.count_tasks() > 0:
            return 0
        for title, start, end, completed, rec in DEMO_TASKS:
            self.add_task(title=title, start=start, end=end, recurrence=rec, completed=completed)
        logger.info("Seeded %d demo tasks", len(DEMO_TASKS))
        return len(DEMO_TASKS)
