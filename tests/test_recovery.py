import pytest

from local_ai_service.errors import MalformedOutputError
from local_ai_service.recovery import extract_json_object, recover_plan, strip_code_fences


def test_recovers_fenced_json_after_prose():
    raw = 'Sure! ```json\n{"week_number":1,"days":[]}\n```'
    assert recover_plan(raw) == {"week_number": 1, "days": []}


def test_recovers_json_surrounded_by_commentary():
    raw = 'Here is your plan:\n{"week_number": 1, "days": [{"day_name": "Legs", "focus": "a } b", "exercises": []}]}\nEnjoy!'
    assert recover_plan(raw) == {
        "week_number": 1,
        "days": [{"day_name": "Legs", "focus": "a } b", "exercises": []}],
    }


def test_strip_code_fences_removes_all_markers():
    assert strip_code_fences('```json\n{}\n```') == "\n{}\n"


@pytest.mark.parametrize("raw", ["", "I cannot help with that.", "[1, 2, 3]", "} backwards {"])
def test_output_without_brace_pair_is_malformed(raw):
    with pytest.raises(MalformedOutputError):
        recover_plan(raw)


def test_truncated_output_is_malformed():
    with pytest.raises(MalformedOutputError):
        recover_plan('{"week_number":1,')


def test_unbalanced_braces_are_malformed():
    with pytest.raises(MalformedOutputError) as excinfo:
        recover_plan('{"week_number": 1, "days": [{"day_name": "Push"}')
    assert excinfo.value.status_code == 500


def test_none_is_malformed():
    with pytest.raises(MalformedOutputError):
        recover_plan(None)


def test_extract_keeps_outermost_object():
    assert extract_json_object('x {"a": {"b": 1}} y') == '{"a": {"b": 1}}'


def test_repair_mode_fixes_trailing_comma():
    raw = '{"week_number": 1, "days": [],}'
    with pytest.raises(MalformedOutputError):
        recover_plan(raw)
    assert recover_plan(raw, repair=True) == {"week_number": 1, "days": []}


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_constants_are_malformed(constant):
    with pytest.raises(MalformedOutputError) as excinfo:
        recover_plan('{"week_number": %s, "days": []}' % constant)
    assert "non-finite" in excinfo.value.message
