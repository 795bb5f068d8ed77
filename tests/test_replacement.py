import pytest
from pydantic import ValidationError

from genfx.evolution.strategies.replacement import (
    PopulationReplacementValue,
    ReplacementValueKind,
)


def test_default_is_ten_percent():
    value = PopulationReplacementValue()
    assert value.kind == ReplacementValueKind.PERCENTAGE
    assert value.resolve(50) == 5
    assert str(value) == "10%"


@pytest.mark.parametrize(
    "raw,size,expected",
    [("25%", 10, 2), ("15%", 10, 2), ("50%", 7, 4), ("0%", 10, 0), (3, 10, 3), ("4", 100, 4)],
)
def test_parse_and_resolve(raw, size, expected):
    assert PopulationReplacementValue.parse(raw).resolve(size) == expected


def test_fixed_count_kind():
    value = PopulationReplacementValue.parse(6)
    assert value.kind == ReplacementValueKind.FIXED_COUNT
    assert str(value) == "6"


def test_invalid_values():
    with pytest.raises(ValidationError):
        PopulationReplacementValue(value=101)
    with pytest.raises(ValidationError):
        PopulationReplacementValue(value=-1, kind=ReplacementValueKind.FIXED_COUNT)
    with pytest.raises(ValueError):
        PopulationReplacementValue.parse("ten%")
