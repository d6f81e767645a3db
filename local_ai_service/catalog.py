import json
import logging
import os
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# --- Path Definitions ---
DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')
EXERCISE_CATALOG_PATH = os.path.join(DATA_DIR, 'exercises.json')


def load_catalog(path: str = EXERCISE_CATALOG_PATH) -> List[dict]:
    """Loads the exercise catalog; the service cannot run without it."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            catalog = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Could not load exercise catalog at {path}: {e}")
        raise RuntimeError(f"Failed to load exercise catalog: {e}")
    if not isinstance(catalog, list):
        raise RuntimeError(f"Exercise catalog at {path} must be a JSON list")
    return _dedupe(catalog)


def _dedupe(entries) -> List[dict]:
    ## keep first occurrence of each name, drop nameless entries
    seen = set()
    result = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = str(entry.get('name') or '').strip()
        if not name or name in seen:
            continue
        seen.add(name)
        result.append({
            'name': name,
            'muscle': entry.get('muscle') or 'Other',
            'type': entry.get('type') or '',
        })
    return result


def build_name_map(catalog: List[dict]) -> Dict[str, dict]:
    return {exercise['name']: exercise for exercise in catalog}


# --- Load Exercise Catalog and Name Map ---
EXERCISE_CATALOG = load_catalog()
name_to_exercise_map = build_name_map(EXERCISE_CATALOG)


def resolve_catalog(available: Optional[List[dict]]) -> List[dict]:
    """Returns the catalog a request is constrained to.

    A client may send its own exercise list (for example after filtering by
    equipment); when it sends nothing usable the built-in catalog is used.
    """
    if available:
        catalog = _dedupe(available)
        if catalog:
            return catalog
    return EXERCISE_CATALOG
