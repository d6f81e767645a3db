# -*- coding: utf-8 -*-
from .prompts import plan_prompt, EXAMPLE_EXERCISES
import json
from dataclasses import dataclass
from typing import Dict, List, Tuple

REST_DAY = "Rest"
DEFAULT_SPLIT = "Full Body"

# --- Split Templates ---
# Day labels per split; "Rest" entries are dropped before use.
SPLIT_TEMPLATES: Dict[str, List[str]] = {
    "Full Body": ["Full Body A", "Full Body B", "Full Body C"],
    "Upper Lower": ["Upper Body Power", "Lower Body Power", REST_DAY, "Upper Body Hypertrophy", "Lower Body Hypertrophy"],
    "Upper Lower Full": ["Upper Body", "Lower Body", "Full Body"],
    "Push Pull Legs": ["Push (Chest/Shoulders/Tri)", "Pull (Back/Bi)", "Legs", REST_DAY, "Upper Body", "Lower Body"],
    "Torso Limbs": ["Torso (Chest/Back)", "Limbs (Arms/Legs)", REST_DAY, "Torso", "Limbs"],
    "Push Pull": ["Push", "Pull", REST_DAY, "Push", "Pull"],
    "Arnold Split": ["Chest & Back", "Shoulders & Arms", "Legs", "Chest & Back", "Shoulders & Arms", "Legs"],
    "Body Part Split": ["Chest", "Back", "Legs", "Shoulders", "Arms"],
}

SPLIT_OPTIONS = {
    2: [
        {"id": "Full Body", "name": "Full Body", "description": "Hit every muscle group each session."},
    ],
    3: [
        {"id": "Full Body", "name": "Full Body (FBW)", "description": "Classic 3-day frequency. Best for beginners."},
        {"id": "Push Pull Legs", "name": "Push / Pull / Legs", "description": "One dedicated day for each movement pattern."},
        {"id": "Upper Lower Full", "name": "Upper / Lower / Full", "description": "Hybrid approach for balance."},
    ],
    4: [
        {"id": "Upper Lower", "name": "Upper / Lower", "description": "2 Upper days, 2 Lower days. Gold standard."},
        {"id": "Torso Limbs", "name": "Torso / Limbs", "description": "Chest/Back/Shoulders vs Arms/Legs."},
        {"id": "Push Pull", "name": "Push / Pull", "description": "Squat pattern with Push, Hinge pattern with Pull."},
    ],
    5: [
        {"id": "Push Pull Legs", "name": "PPL (Rotating)", "description": "High frequency, rotating schedule."},
        {"id": "Body Part Split", "name": "Bro Split", "description": "Focus on 1-2 muscle groups per day."},
        {"id": "Arnold Split", "name": "Arnold Split", "description": "Chest/Back, Shoulders/Arms, Legs."},
    ],
}

# Exercises per day by experience level and session length (minutes)
EXERCISE_COUNT_SCHEMA = {
    'beginner': {
        30: (3, 4), 45: (4, 5), 60: (5, 6), 75: (5, 7), 90: (6, 8)
    },
    'intermediate': {
        30: (4, 5), 45: (5, 6), 60: (6, 8), 75: (6, 8), 90: (7, 9)
    },
    'advanced': {
        30: (4, 5), 45: (5, 7), 60: (6, 8), 75: (7, 9), 90: (8, 10)
    },
}


@dataclass
class User:
    goal: str
    experience: str
    equipment: str
    days: int
    duration: int
    split: str


def get_valid_splits(days: int) -> List[dict]:
    ## split options offered for a weekly frequency
    if days <= 2:
        return SPLIT_OPTIONS[2]
    return SPLIT_OPTIONS[min(days, 5)]


def resolve_day_names(split: str, day_count: int) -> List[str]:
    """Returns exactly ``day_count`` day labels for a split.

    Unknown splits fall back to ``Day 1..Day N``. Known splits drop their
    rest days, are cut to the requested length, and repeat from the start
    when the template is shorter than the week.
    """
    template = SPLIT_TEMPLATES.get(split)
    labels = [d for d in (template or []) if d != REST_DAY]
    if not labels:
        return [f"Day {i + 1}" for i in range(day_count)]
    return [labels[i % len(labels)] for i in range(day_count)]


def exercise_count_bounds(experience: str, duration: int) -> Tuple[int, int]:
    level_schema = EXERCISE_COUNT_SCHEMA.get((experience or '').lower(), EXERCISE_COUNT_SCHEMA['intermediate'])
    duration_key = min(level_schema.keys(), key=lambda k: abs(k - duration) if k <= duration else float('inf'))
    return level_schema[duration_key]


def _build_catalog_string(catalog: list) -> str:
    return "\n".join(f"- {item['name']} ({item.get('muscle', 'Other')})" for item in catalog)


def _build_example_json(day_names: List[str]) -> str:
    example = {
        "week_number": 1,
        "days": [
            {
                "day_name": day_names[0] if day_names else "Day 1",
                "focus": "Target Muscle",
                "exercises": EXAMPLE_EXERCISES,
            }
        ],
    }
    return json.dumps(example, indent=2)


def build_prompt(user: User, catalog: list) -> Tuple[str, List[str]]:
    ## prompt and the day labels it asks for
    day_names = resolve_day_names(user.split, user.days)
    min_ex, max_ex = exercise_count_bounds(user.experience, user.duration)

    prompt = plan_prompt.format(
        goal=user.goal,
        experience=user.experience,
        days=user.days,
        split=user.split,
        duration=user.duration,
        equipment=user.equipment or "Any",
        day_names_json=json.dumps(day_names),
        min_ex=min_ex,
        max_ex=max_ex,
        catalog_list=_build_catalog_string(catalog),
        example_json=_build_example_json(day_names),
    )
    return prompt, day_names
