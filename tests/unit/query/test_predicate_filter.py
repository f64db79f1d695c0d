"""Unit tests for record predicate filtering."""

from __future__ import annotations

import pytest

from core.types import Criterion, FilterLogic, FormRecord, Operator
from query.predicate_filter import apply_filter, matches_criterion


def _listing_records() -> tuple[FormRecord, ...]:
    return (
        FormRecord(record_id=1, values={"city": "Brisbane", "price": "100"}),
        FormRecord(record_id=2, values={"city": "Sydney", "price": "50"}),
    )


def _mixed_records() -> tuple[FormRecord, ...]:
    return (
        FormRecord(record_id=1, values={"city": "Brisbane", "price": "100", "beds": 3}),
        FormRecord(record_id=2, values={"city": "Sydney", "price": "50"}),
        FormRecord(record_id=3, values={"city": "Byron Bay", "price": 250, "beds": "2"}),
        FormRecord(record_id=4, values={"price": None}),
        FormRecord(record_id=5, values={}),
    )


def _ids(records: tuple[FormRecord, ...]) -> list[int | str]:
    return [record.record_id for record in records]


def test_apply_filter_with_no_criteria_returns_records_unchanged() -> None:
    """Empty criteria should return the same elements in the same order."""
    records = _mixed_records()

    for logic in FilterLogic:
        result = apply_filter(records, [], logic)
        assert result == records
        assert all(left is right for left, right in zip(result, records))


def test_apply_filter_with_no_criteria_returns_tuple_input_itself() -> None:
    """A tuple snapshot should be returned as-is for empty criteria."""
    records = _mixed_records()

    assert apply_filter(records, ()) is records


def test_apply_filter_less_or_equal_scenario() -> None:
    """Numeric lessOrEqual should keep only the cheaper listing."""
    criteria = [Criterion(field="price", operator=Operator.LESS_OR_EQUAL, value="75")]

    result = apply_filter(_listing_records(), criteria, FilterLogic.AND)

    assert _ids(result) == [2]


def test_apply_filter_or_scenario_matches_on_city_only() -> None:
    """OR logic should keep a record when any criterion holds."""
    criteria = [
        Criterion(field="city", operator=Operator.STARTSWITH, value="B"),
        Criterion(field="price", operator=Operator.GREATER, value="200"),
    ]

    result = apply_filter(_listing_records(), criteria, FilterLogic.OR)

    assert _ids(result) == [1]


def test_single_criterion_ignores_logic_mode() -> None:
    """With one criterion AND and OR should agree."""
    records = _mixed_records()
    criteria_options = [
        Criterion(field="price", operator="greater", value="60"),
        Criterion(field="city", operator="contains", value="b"),
        Criterion(field="beds", operator="equals", value="2"),
    ]

    for criterion in criteria_options:
        assert apply_filter(records, [criterion], FilterLogic.AND) == apply_filter(
            records, [criterion], FilterLogic.OR
        )


def test_and_result_is_subset_and_or_result_is_superset() -> None:
    """AND should narrow and OR should widen single-criterion results."""
    records = _mixed_records()
    first = Criterion(field="price", operator="greaterOrEqual", value="100")
    second = Criterion(field="city", operator="startswith", value="b")

    only_first = set(_ids(apply_filter(records, [first])))
    only_second = set(_ids(apply_filter(records, [second])))
    both = set(_ids(apply_filter(records, [first, second], FilterLogic.AND)))
    either = set(_ids(apply_filter(records, [first, second], FilterLogic.OR)))

    assert both <= only_first and both <= only_second
    assert either >= only_first and either >= only_second
    assert both == {1, 3} and either == {1, 3}


def test_missing_field_never_matches() -> None:
    """Records without the target field should be excluded for every operator."""
    record = FormRecord(record_id=9, values={})

    for operator in Operator:
        criterion = Criterion(field="age", operator=operator, value="5")
        assert apply_filter([record], [criterion]) == ()


def test_null_value_never_matches() -> None:
    """Null values should count as missing."""
    record = FormRecord(record_id=9, values={"age": None})

    assert not matches_criterion(record, Criterion(field="age", operator="equals", value="null"))


def test_numeric_path_compares_numbers_not_text() -> None:
    """Numeric strings should compare by value, not lexically."""
    record = FormRecord(record_id=1, values={"x": "10"})

    assert matches_criterion(record, Criterion(field="x", operator="greater", value="5"))


def test_string_path_contains() -> None:
    """Non-numeric values should use substring matching."""
    record = FormRecord(record_id=1, values={"x": "apple"})

    assert matches_criterion(record, Criterion(field="x", operator="contains", value="app"))


def test_string_equals_is_case_insensitive() -> None:
    """Text equality should ignore case on both sides."""
    record = FormRecord(record_id=1, values={"city": "Sydney"})

    assert matches_criterion(record, Criterion(field="city", operator="equals", value="sydney"))


def test_numeric_equals_matches_equivalent_literals() -> None:
    """Numeric equality should treat 2020 and 2020.0 as equal."""
    record = FormRecord(record_id=1, values={"year": "2020"})

    assert matches_criterion(record, Criterion(field="year", operator="equals", value="2020.0"))


def test_text_operator_in_numeric_mode_is_not_satisfied() -> None:
    """String-only operators should fail when both sides are numeric."""
    record = FormRecord(record_id=1, values={"price": "100"})

    assert not matches_criterion(record, Criterion(field="price", operator="contains", value="10"))


def test_numeric_operator_in_text_mode_is_not_satisfied() -> None:
    """Numeric-only operators should fail when either side is text."""
    record = FormRecord(record_id=1, values={"city": "Brisbane"})

    assert not matches_criterion(record, Criterion(field="city", operator="greater", value="A"))


def test_unknown_operator_is_not_satisfied() -> None:
    """Unknown operator names should resolve to not satisfied."""
    record = FormRecord(record_id=1, values={"city": "Perth"})

    assert not matches_criterion(record, Criterion(field="city", operator="endswith", value="th"))


def test_geo_value_is_not_satisfied() -> None:
    """Geo points have no comparable form."""
    record = FormRecord(record_id=1, values={"where": {"latitude": -27.5, "longitude": 153.0}})

    assert apply_filter([record], [Criterion(field="where", operator="contains", value="27")]) == ()


def test_boolean_values_compare_as_text() -> None:
    """Boolean values should compare as lowercase text."""
    record = FormRecord(record_id=1, values={"active": True})

    assert matches_criterion(record, Criterion(field="active", operator="equals", value="TRUE"))


def test_apply_filter_does_not_mutate_inputs() -> None:
    """Filtering should leave records and criteria untouched."""
    records = [FormRecord(record_id=1, values={"tags": ["a", "b"], "price": "5"})]
    criteria = [Criterion(field="tags", operator="contains", value="b")]
    values_before = [dict(record.values) for record in records]
    criteria_before = list(criteria)

    result = apply_filter(records, criteria)

    assert _ids(result) == [1]
    assert [dict(record.values) for record in records] == values_before
    assert criteria == criteria_before


def test_record_values_are_read_only() -> None:
    """Record values should reject item assignment."""
    record = FormRecord(record_id=1, values={"price": "5"})

    with pytest.raises(TypeError):
        record.values["price"] = "6"  # type: ignore[index]

    assert record.values == {"price": "5"}


def test_apply_filter_preserves_input_order() -> None:
    """Matches should keep their relative input order."""
    records = tuple(
        FormRecord(record_id=index, values={"n": str(value)})
        for index, value in enumerate([9, 1, 7, 3, 8])
    )

    result = apply_filter(records, [Criterion(field="n", operator="greater", value="2")])

    assert _ids(result) == [0, 2, 3, 4]
