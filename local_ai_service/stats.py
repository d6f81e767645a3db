from typing import Iterable, List, Optional

from .schemas import ExerciseBest, LoggedExercise, WorkoutSummary


def _to_float(value) -> float:
    ## blank or garbled inputs count as zero
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def calculate_volume(exercises: Iterable[LoggedExercise]) -> float:
    """Total weight x reps over completed sets."""
    total = 0.0
    for exercise in exercises:
        for s in exercise.sets:
            if s.completed:
                total += _to_float(s.weight) * _to_float(s.reps)
    return total


def count_prs(exercises: Iterable[LoggedExercise], history: Optional[List[ExerciseBest]] = None) -> int:
    bests = {}
    for entry in history or []:
        bests.setdefault(entry.name, entry.max_weight)

    prs = 0
    for exercise in exercises:
        current_max = max((_to_float(s.weight) for s in exercise.sets), default=0.0)
        if current_max > 0 and current_max > bests.get(exercise.name, 0):
            prs += 1
    return prs


def average_rpe(exercises: Iterable[LoggedExercise]) -> int:
    values = [_to_float(s.rpe) for exercise in exercises for s in exercise.sets if s.rpe not in (None, "")]
    if not values:
        return 0
    return round(sum(values) / len(values))


def fatigue_level(avg_rpe: float) -> str:
    if avg_rpe >= 8:
        return "high"
    if avg_rpe <= 5:
        return "low"
    return "medium"


def summarize_session(exercises: List[LoggedExercise], history: Optional[List[ExerciseBest]] = None) -> WorkoutSummary:
    avg = average_rpe(exercises)
    return WorkoutSummary(
        volume=calculate_volume(exercises),
        prs=count_prs(exercises, history),
        avg_rpe=avg,
        fatigue=fatigue_level(avg),
    )
