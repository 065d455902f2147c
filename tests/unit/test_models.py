"""Unit tests for weather models."""

import pytest
from pydantic import ValidationError

from weather_cli.models.weather import FORMAT_CODES, FormatSelector, JsonWeatherPayload


def test_every_format_has_a_code_entry():
    """Test that the format code table covers every selector."""
    assert set(FORMAT_CODES) == set(FormatSelector)


@pytest.mark.parametrize(
    "fmt, code",
    [
        (FormatSelector.FULL, None),
        (FormatSelector.SIMPLE, "3"),
        (FormatSelector.PLAIN, "4"),
        (FormatSelector.CUSTOM, "%l:+%c+%t+%w+%h"),
        (FormatSelector.JSON, "j1"),
    ],
)
def test_format_codes(fmt, code):
    """Test the query value of each format."""
    assert fmt.format_code == code


def test_payload_parses_upstream_names(mock_json_payload):
    """Test that upstream field names map onto the model."""
    payload = JsonWeatherPayload.model_validate(mock_json_payload)

    assert payload.current.temp_c == "15"
    assert payload.current.temp_f == "59"
    assert payload.current.description == "Clear"
    assert payload.current.winddir_16_point == "N"
    assert payload.current.feels_like_c == "14"
    assert payload.area.name == "London"
    assert payload.area.country_name == "UK"


def test_payload_tolerates_missing_fields():
    """Test that absent condition fields are left empty."""
    payload = JsonWeatherPayload.model_validate(
        {"current_condition": [{}], "nearest_area": [{"areaName": []}]}
    )

    assert payload.current.temp_c is None
    assert payload.current.description is None
    assert payload.area.name is None


def test_payload_requires_condition_arrays():
    """Test that missing arrays are rejected."""
    with pytest.raises(ValidationError):
        JsonWeatherPayload.model_validate({"nearest_area": [{}]})


def test_payload_rejects_empty_arrays():
    """Test that empty arrays are rejected."""
    with pytest.raises(ValidationError):
        JsonWeatherPayload.model_validate({"current_condition": [], "nearest_area": [{}]})


def test_payload_accepts_numeric_fields():
    """Test that numbers sent instead of strings are kept as text."""
    payload = JsonWeatherPayload.model_validate(
        {
            "current_condition": [{"temp_C": 15, "humidity": 50, "weatherDesc": [{"value": 7}]}],
            "nearest_area": [{"areaName": [{"value": "London"}]}],
        }
    )

    assert payload.current.temp_c == "15"
    assert payload.current.humidity == "50"
    assert payload.current.description == "7"
