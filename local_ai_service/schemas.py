from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Catalog entry as sent by the client ──────────────────────
class CatalogExercise(BaseModel):
    name: str = Field(..., description="Exercise name, unique in the catalog")
    muscle: str = Field("Other", description="Primary muscle group")
    type: str = Field("", description="Compound, Isolation or Bodyweight")


# ── Plan generation request ──────────────────────────────────
class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    goal: str = Field("build_muscle", description="Training goal (lose_weight, build_muscle, endurance, strength)")
    experience: str = Field("intermediate", description="Experience level (beginner, intermediate, advanced)")
    equipment: str = Field("", description="Comma-joined list of available equipment")
    days: int = Field(3, ge=1, le=7, description="Training days per week")
    duration: int = Field(60, gt=0, description="Session duration in minutes")
    split: str = Field("Full Body", description="Split identifier, e.g. 'Push Pull Legs'")
    available_exercises: Optional[List[CatalogExercise]] = Field(
        None, alias="availableExercises", description="Exercises the plan may use; defaults to the built-in catalog"
    )

    @field_validator("equipment", mode="before")
    @classmethod
    def join_equipment(cls, value):
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return value

    @field_validator("split", mode="before")
    @classmethod
    def default_split(cls, value):
        if value is None or not str(value).strip():
            return "Full Body"
        return str(value).strip()


# ── Generated plan (canonical shape) ─────────────────────────
MAX_SETS = 20


class Exercise(BaseModel):
    name: str
    sets: int = Field(3, ge=0, le=MAX_SETS)
    reps: str = "10"
    rest: str = "60s"


class WorkoutDay(BaseModel):
    day_name: str
    focus: str = ""
    exercises: List[Exercise] = Field(default_factory=list)


class GeneratedPlan(BaseModel):
    week_number: int = 1
    days: List[WorkoutDay] = Field(default_factory=list)

    def exercise_names(self) -> List[str]:
        return [ex.name for day in self.days for ex in day.exercises]


# ── Logged session (workout summary) ─────────────────────────
class LoggedSet(BaseModel):
    weight: Union[str, float, None] = ""
    reps: Union[str, float, None] = ""
    rpe: Union[str, float, None] = ""
    completed: bool = False


class LoggedExercise(BaseModel):
    name: str
    sets: List[LoggedSet] = Field(default_factory=list)


class ExerciseBest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    max_weight: float = Field(0, alias="maxWeight")


class WorkoutSummaryRequest(BaseModel):
    exercises: List[LoggedExercise]
    history: List[ExerciseBest] = Field(default_factory=list)


class WorkoutSummary(BaseModel):
    volume: float
    prs: int
    avg_rpe: int
    fatigue: str
