"""BlueprintParameter の JSON decode/encode のテスト群。"""

from __future__ import annotations

import pytest

from propdraft.core.parameters.codec import (
    decode_parameter,
    decode_parameters,
    dumps_parameters,
    loads_parameters,
)


def test_decode_parameter_coerces_numbers_and_defaults_description() -> None:
    p = decode_parameter(
        {"name": "Base_Width", "value": "120", "min": 50, "max": 200, "unit": "mm"}
    )
    assert p.name == "Base_Width"
    assert p.value == 120.0
    assert p.min == 50.0
    assert p.max == 200.0
    assert p.unit == "mm"
    assert p.description == ""


def test_decode_parameter_missing_required_key_raises() -> None:
    with pytest.raises(ValueError, match="unit"):
        decode_parameter({"name": "Width", "value": 1, "min": 0, "max": 2})


@pytest.mark.parametrize("bad", ["abc", None, float("nan"), float("inf")])
def test_decode_parameter_rejects_non_numeric_value(bad: object) -> None:
    with pytest.raises(ValueError):
        decode_parameter({"name": "Width", "value": bad, "min": 0, "max": 2, "unit": "mm"})


def test_decode_parameters_requires_list() -> None:
    with pytest.raises(TypeError):
        decode_parameters({"name": "Width"})


def test_dumps_and_loads_preserve_order() -> None:
    text = (
        '[{"name": "Tier Count", "value": 3, "min": 1, "max": 5, "unit": "pcs"},'
        ' {"name": "Step Height", "value": 40, "min": 10, "max": 80, "unit": "mm",'
        ' "description": "per tier"}]'
    )
    params = loads_parameters(text)
    assert [p.name for p in params] == ["Tier Count", "Step Height"]
    assert params[1].description == "per tier"
    assert loads_parameters(dumps_parameters(params)) == params
