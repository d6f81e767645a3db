import logging
from typing import List, Optional

from .config import CATALOG_VALIDATION_MODES as VALIDATION_MODES
from .errors import UnknownExerciseError
from .schemas import GeneratedPlan

logger = logging.getLogger(__name__)


def _match_key(name: str) -> str:
    return " ".join(name.lower().split())


def validate_plan_exercises(
    plan: GeneratedPlan,
    catalog: list,
    mode: str = "filter",
    day_names: Optional[List[str]] = None,
) -> GeneratedPlan:
    """Checks every exercise name against the catalog the prompt offered.

    ``filter`` repairs names that differ from a catalog entry only in case or
    spacing and drops the rest; ``reject`` raises ``UnknownExerciseError``
    naming every unknown exercise; ``off`` returns the plan untouched.
    """
    if mode not in VALIDATION_MODES:
        raise ValueError(f"Unknown catalog validation mode '{mode}'")

    if day_names is not None and len(plan.days) != len(day_names):
        logger.warning(f"[Day Count] Plan has {len(plan.days)} days, requested {len(day_names)}")

    if mode == "off":
        return plan

    exact_names = {item['name'] for item in catalog}
    loose_names = {_match_key(name): name for name in exact_names}

    unknown = []
    fixed_days = []
    for day_idx, day in enumerate(plan.days):
        kept = []
        for exercise in day.exercises:
            if exercise.name in exact_names:
                kept.append(exercise)
                continue
            canonical = loose_names.get(_match_key(exercise.name))
            if canonical:
                logger.info(f"[Catalog Fix] Day {day_idx + 1}: renaming '{exercise.name}' to '{canonical}'")
                kept.append(exercise.model_copy(update={"name": canonical}))
                continue
            unknown.append(exercise.name)
            logger.warning(f"[Catalog Fix] Day {day_idx + 1}: dropping unknown exercise '{exercise.name}'")
        if not kept and day.exercises:
            logger.warning(f"[Catalog Fix] Day {day_idx + 1}: no catalog exercises left for '{day.day_name}'")
        fixed_days.append(day.model_copy(update={"exercises": kept}))

    if unknown and mode == "reject":
        raise UnknownExerciseError(dict.fromkeys(unknown))

    return plan.model_copy(update={"days": fixed_days})
