"""Maps every stored or generated plan shape onto ``GeneratedPlan``.

Plans have been stored as ``{"days": [...]}`` and as
``{"weeks": [{"days": [...]}]}``, and models return ``reps``/``rest`` as
strings, numbers or one value per set. ``normalize_plan`` is the single
place those variants are reconciled; everything downstream reads the
canonical model.
"""
import logging
import math
import re
from typing import List, Optional

from pydantic import ValidationError

from .errors import MalformedOutputError
from .schemas import GeneratedPlan, WorkoutDay

logger = logging.getLogger(__name__)

DEFAULT_SETS = 3
DEFAULT_REPS = "10"
DEFAULT_REST = "60s"
DEFAULT_REST_SECONDS = 60

_INT_RE = re.compile(r"\d+")


def _first_int(value) -> Optional[int]:
    match = _INT_RE.search(str(value))
    return int(match.group()) if match else None


def _is_number(value) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedOutputError(f"Plan contains a non-finite number ({value}).")
    return True


def _normalize_sets(sets, reps) -> int:
    if isinstance(sets, list):
        return len(sets)
    if _is_number(sets):
        return max(int(sets), 0)
    if isinstance(sets, str):
        parsed = _first_int(sets)
        if parsed is not None:
            return parsed
    if isinstance(reps, list) and reps:
        return len(reps)
    return DEFAULT_SETS


def _normalize_reps(reps) -> str:
    if isinstance(reps, list):
        values = [r for r in reps if r is not None and str(r).strip()]
        if not values:
            return DEFAULT_REPS
        if all(_is_number(v) for v in values):
            low, high = int(min(values)), int(max(values))
            return str(low) if low == high else f"{low}-{high}"
        return str(values[0]).strip()
    if _is_number(reps):
        return str(int(reps))
    if isinstance(reps, str) and reps.strip():
        return reps.strip()
    return DEFAULT_REPS


def _normalize_rest(rest) -> str:
    if isinstance(rest, list):
        rest = next((r for r in rest if r is not None and str(r).strip()), None)
    if _is_number(rest):
        return f"{int(rest)}s"
    if isinstance(rest, str) and rest.strip():
        rest = rest.strip()
        return f"{rest}s" if rest.isdigit() else rest
    return DEFAULT_REST


def _normalize_exercise(exercise) -> Optional[dict]:
    if isinstance(exercise, str):
        exercise = {"name": exercise}
    if not isinstance(exercise, dict):
        return None
    name = str(exercise.get("name") or "").strip()
    if not name:
        return None
    reps = exercise.get("reps")
    return {
        "name": name,
        "sets": _normalize_sets(exercise.get("sets"), reps),
        "reps": _normalize_reps(reps),
        "rest": _normalize_rest(exercise.get("rest")),
    }


def _normalize_day(day: dict, index: int) -> dict:
    exercises = []
    for exercise in day.get("exercises") or []:
        normalized = _normalize_exercise(exercise)
        if normalized is None:
            logger.warning(f"[Normalize] Day {index + 1}: dropping unreadable exercise entry {exercise!r}")
            continue
        exercises.append(normalized)
    return {
        "day_name": str(day.get("day_name") or day.get("name") or f"Day {index + 1}"),
        "focus": str(day.get("focus") or ""),
        "exercises": exercises,
    }


def _collect_days(obj: dict):
    weeks = obj.get("weeks")
    if isinstance(weeks, list):
        days = []
        for week in weeks:
            if isinstance(week, dict) and isinstance(week.get("days"), list):
                days.extend(week["days"])
        first = next((w for w in weeks if isinstance(w, dict)), {})
        return first.get("week_number", 1), days
    if isinstance(obj.get("days"), list):
        return obj.get("week_number", 1), obj["days"]
    raise MalformedOutputError("Plan has neither 'days' nor 'weeks'.")


def normalize_plan(obj) -> GeneratedPlan:
    if not isinstance(obj, dict):
        raise MalformedOutputError("Plan must be a JSON object.")
    week_number, raw_days = _collect_days(obj)

    days = []
    for index, day in enumerate(raw_days):
        if not isinstance(day, dict):
            logger.warning(f"[Normalize] Skipping day {index + 1}: expected an object, got {type(day).__name__}")
            continue
        days.append(_normalize_day(day, len(days)))

    week = _first_int(week_number) if not _is_number(week_number) else int(week_number)
    try:
        return GeneratedPlan.model_validate({"week_number": week or 1, "days": days})
    except ValidationError as e:
        raise MalformedOutputError(f"Plan does not match the expected shape: {e}") from e


def session_template(day: WorkoutDay) -> List[dict]:
    """Per-set logging rows for a plan day, prefilled from its targets."""
    rows = []
    for exercise in day.exercises:
        reps = _first_int(exercise.reps.split("-")[0]) or int(DEFAULT_REPS)
        rest = _first_int(exercise.rest) or DEFAULT_REST_SECONDS
        set_count = exercise.sets or DEFAULT_SETS
        rows.append({
            "name": exercise.name,
            "sets": [
                {"set_number": i + 1, "weight": "", "reps": str(reps), "rest_seconds": rest, "completed": False}
                for i in range(set_count)
            ],
        })
    return rows
