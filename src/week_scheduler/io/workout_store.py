"""
JSONL-based row store for workouts and their sets.

Handles reading, writing, and managing the workout, set, and goal files
inside one store directory.
"""

import json
import uuid
from pathlib import Path

from ..core.models import SetRecord, SetTemplate, WorkoutRecord
from .serializers import (
    ValidationError,
    dict_to_set_record,
    dict_to_workout_record,
    set_record_to_dict,
    validate_date,
    workout_record_to_dict,
)

# Fields update_workout() may change; identity fields are fixed at insert.
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {"type", "target_intensity", "target_volume", "notes", "goal_type", "experience_level", "plan_id"}
)


class StoreError(Exception):
    """Raised when the store cannot be read or written."""

    pass


class DuplicateWorkoutError(StoreError):
    """Raised when inserting a second workout for the same (user_id, workout_date)."""

    pass


class WorkoutNotFoundError(StoreError):
    """Raised when a workout id does not exist."""

    pass


class WorkoutStore:
    """
    Manages workouts stored in JSONL format.

    The store directory contains:
    - workouts.jsonl: one workout row per line, unique per (user_id, workout_date)
    - workout_sets.jsonl: one set row per line, owned by a workout id
    - goals.json: {user_id: goal text}
    """

    def __init__(self, store_dir: str | Path):
        """
        Initialize the workout store.

        Args:
            store_dir: Directory holding the store files
        """
        self.store_dir = Path(store_dir)
        self.workouts_path = self.store_dir / "workouts.jsonl"
        self.sets_path = self.store_dir / "workout_sets.jsonl"
        self.goals_path = self.store_dir / "goals.json"

    def exists(self) -> bool:
        """Check if the workouts file exists."""
        return self.workouts_path.exists()

    def init(self) -> None:
        """
        Create empty store files if they don't exist.

        Creates parent directories if needed.
        """
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            for path in (self.workouts_path, self.sets_path):
                if not path.exists():
                    path.touch()
        except OSError as e:
            raise StoreError(f"Cannot initialize store at {self.store_dir}: {e}") from e

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def _read_goals(self) -> dict[str, str]:
        if not self.goals_path.exists():
            return {}
        try:
            with open(self.goals_path, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StoreError(f"Cannot read goals from {self.goals_path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def load_goal(self, user_id: str) -> str | None:
        """
        Load the stored goal text for a user.

        Returns:
            Goal text or None if not set

        Raises:
            StoreError: If the goals file is unreadable
        """
        goal = self._read_goals().get(user_id)
        return str(goal) if goal else None

    def save_goal(self, user_id: str, goal: str) -> None:
        """
        Store the goal text for a user, replacing any previous goal.

        Args:
            user_id: User identifier
            goal: Free-text goal, e.g. "build muscle"
        """
        goals = self._read_goals()
        goals[user_id] = goal
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            with open(self.goals_path, "w") as f:
                json.dump(goals, f, indent=2)
        except OSError as e:
            raise StoreError(f"Cannot write goals to {self.goals_path}: {e}") from e

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def _read_rows(self, path: Path) -> list[dict]:
        """Read all JSON rows from a JSONL file (missing file = no rows)."""
        if not path.exists():
            return []

        rows: list[dict] = []
        try:
            with open(path, "r") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        row = json.loads(line)
                    except json.JSONDecodeError as e:
                        raise ValidationError(
                            f"Error parsing line {line_num} in {path}: {e}"
                        ) from e
                    if not isinstance(row, dict):
                        raise ValidationError(
                            f"Error parsing line {line_num} in {path}: expected an object, "
                            f"got {type(row).__name__}"
                        )
                    rows.append(row)
        except OSError as e:
            raise StoreError(f"Cannot read {path}: {e}") from e
        return rows

    def _write_rows(self, path: Path, rows: list[dict]) -> None:
        """Rewrite a JSONL file with the given rows."""
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                for row in rows:
                    f.write(json.dumps(row) + "\n")
        except OSError as e:
            raise StoreError(f"Cannot write {path}: {e}") from e

    def load_workouts(self) -> list[WorkoutRecord]:
        """
        Load all workouts.

        Returns:
            List of WorkoutRecord, sorted by (user_id, workout_date)

        Raises:
            ValidationError: If a row is malformed
        """
        workouts = [dict_to_workout_record(r) for r in self._read_rows(self.workouts_path)]
        workouts.sort(key=lambda w: (w.user_id, w.workout_date))
        return workouts

    def _save_workouts(self, workouts: list[WorkoutRecord]) -> None:
        self._write_rows(self.workouts_path, [workout_record_to_dict(w) for w in workouts])

    def list_workouts(self, user_id: str, start_date: str, end_date: str) -> list[WorkoutRecord]:
        """
        Get a user's workouts within an inclusive date range.

        Args:
            user_id: User identifier
            start_date: First date (YYYY-MM-DD)
            end_date: Last date (YYYY-MM-DD)

        Returns:
            Workouts sorted by date
        """
        validate_date(start_date)
        validate_date(end_date)
        return [
            w for w in self.load_workouts()
            if w.user_id == user_id and start_date <= w.workout_date <= end_date
        ]

    def find_workout(self, user_id: str, workout_date: str) -> WorkoutRecord | None:
        """
        Point lookup by natural key.

        Returns:
            The workout for (user_id, workout_date) or None
        """
        validate_date(workout_date)
        for w in self.load_workouts():
            if w.user_id == user_id and w.workout_date == workout_date:
                return w
        return None

    def get_workout(self, workout_id: str) -> WorkoutRecord:
        """
        Lookup by id.

        Raises:
            WorkoutNotFoundError: If no workout has this id
        """
        for w in self.load_workouts():
            if w.id == workout_id:
                return w
        raise WorkoutNotFoundError(f"Workout not found: {workout_id}")

    def insert_workout(self, record: WorkoutRecord) -> WorkoutRecord:
        """
        Insert a new workout and assign its id.

        Args:
            record: Workout to insert (id is ignored and replaced)

        Returns:
            The stored record with its id

        Raises:
            DuplicateWorkoutError: If (user_id, workout_date) already exists
        """
        workouts = self.load_workouts()
        for w in workouts:
            if w.user_id == record.user_id and w.workout_date == record.workout_date:
                raise DuplicateWorkoutError(
                    f"Workout already exists for {record.user_id} on {record.workout_date}"
                )

        record.id = uuid.uuid4().hex
        workouts.append(record)
        self._save_workouts(workouts)
        return record

    def update_workout(self, workout_id: str, **fields) -> WorkoutRecord:
        """
        Update fields of an existing workout in place.

        Args:
            workout_id: Id of the workout to update
            **fields: Any of UPDATABLE_FIELDS

        Returns:
            The updated record

        Raises:
            ValueError: If a field is not updatable
            WorkoutNotFoundError: If no workout has this id
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        workouts = self.load_workouts()
        for i, w in enumerate(workouts):
            if w.id == workout_id:
                data = workout_record_to_dict(w)
                data.update(fields)
                workouts[i] = dict_to_workout_record(data)
                self._save_workouts(workouts)
                return workouts[i]

        raise WorkoutNotFoundError(f"Workout not found: {workout_id}")

    def delete_workout(self, workout_id: str) -> None:
        """
        Delete a workout and all of its sets.

        Raises:
            WorkoutNotFoundError: If no workout has this id
        """
        workouts = self.load_workouts()
        remaining = [w for w in workouts if w.id != workout_id]
        if len(remaining) == len(workouts):
            raise WorkoutNotFoundError(f"Workout not found: {workout_id}")
        self.delete_sets(workout_id)
        self._save_workouts(remaining)

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    def load_sets(self, workout_id: str) -> list[SetRecord]:
        """
        Get the set rows of one workout.

        Returns:
            Set rows in position order
        """
        sets = [
            dict_to_set_record(r) for r in self._read_rows(self.sets_path)
            if r.get("workout_id") == workout_id
        ]
        sets.sort(key=lambda s: s.position)
        return sets

    def delete_sets(self, workout_id: str) -> int:
        """
        Delete every set row of a workout.

        Returns:
            Number of rows deleted
        """
        rows = self._read_rows(self.sets_path)
        remaining = [r for r in rows if r.get("workout_id") != workout_id]
        self._write_rows(self.sets_path, remaining)
        return len(rows) - len(remaining)

    def insert_sets(self, workout_id: str, templates: list[SetTemplate]) -> list[SetRecord]:
        """
        Append set rows for a workout, numbered in template order.

        Returns:
            The inserted rows
        """
        records = [
            SetRecord(
                workout_id=workout_id,
                position=i,
                movement=t.movement,
                target_sets=t.target_sets,
                target_reps=t.target_reps,
                target_rpe=t.target_rpe,
            )
            for i, t in enumerate(templates)
        ]
        if not records:
            return []
        rows = self._read_rows(self.sets_path)
        rows.extend(set_record_to_dict(r) for r in records)
        self._write_rows(self.sets_path, rows)
        return records

    def replace_sets(self, workout_id: str, templates: list[SetTemplate]) -> list[SetRecord]:
        """
        Replace all set rows of a workout: delete the old set, insert the new one.

        Returns:
            The inserted rows
        """
        self.delete_sets(workout_id)
        return self.insert_sets(workout_id, templates)
