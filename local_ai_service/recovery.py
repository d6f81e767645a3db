"""Recovers a JSON plan object from free-text model output.

Models asked for JSON still wrap it in markdown fences or add a sentence
before and after. Recovery strips the fences, keeps the text between the
first ``{`` and the last ``}`` and parses that. Anything that does not
reduce to a JSON object is reported as ``MalformedOutputError``; no default
plan is ever returned.
"""
import json
import logging
import re

from json_repair import repair_json

from .errors import MalformedOutputError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_PREVIEW_CHARS = 500


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not valid JSON")


def extract_json_object(text: str) -> str:
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last < first:
        raise MalformedOutputError("AI model returned no JSON object.")
    return text[first:last + 1]


def recover_plan(raw: str, repair: bool = False) -> dict:
    raw = raw or ""
    candidate = extract_json_object(strip_code_fences(raw))
    try:
        obj = json.loads(candidate, parse_constant=_reject_constant)
    except ValueError as e:
        if not repair:
            logger.error(f"JSON decode error: {e}. Raw response: {raw[:_PREVIEW_CHARS]}")
            raise MalformedOutputError(f"AI model returned invalid JSON: {e}") from e
        logger.warning(f"JSON decode error: {e}. Attempting repair.")
        obj = repair_json(candidate, return_objects=True)

    if not isinstance(obj, dict):
        logger.error(f"Recovered value is not a JSON object. Raw response: {raw[:_PREVIEW_CHARS]}")
        raise MalformedOutputError("AI model output is not a JSON object.")
    return obj
