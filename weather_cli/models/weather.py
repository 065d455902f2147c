"""Pydantic models for wttr.in responses and fetch results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FormatSelector(str, Enum):
    """Output formats understood by the weather service."""

    FULL = "full"
    SIMPLE = "simple"
    PLAIN = "plain"
    CUSTOM = "custom"
    JSON = "json"

    @property
    def format_code(self) -> str | None:
        """Value of the ``format`` query parameter, None for the HTML page."""
        return FORMAT_CODES[self]


FORMAT_CODES: dict[FormatSelector, str | None] = {
    FormatSelector.FULL: None,
    FormatSelector.SIMPLE: "3",
    FormatSelector.PLAIN: "4",
    # %l location, %c condition, %t temperature, %w wind, %h humidity
    FormatSelector.CUSTOM: "%l:+%c+%t+%w+%h",
    FormatSelector.JSON: "j1",
}


class ValueItem(BaseModel):
    """wttr.in wraps most strings as ``[{"value": "..."}]``."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    value: str | None = None


def first_value(items: list[ValueItem]) -> str | None:
    """Return the value of the first wrapped item, if any."""
    return items[0].value if items else None


class CurrentCondition(BaseModel):
    """Current observation block of the j1 payload."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    temp_c: str | None = Field(None, alias="temp_C")
    temp_f: str | None = Field(None, alias="temp_F")
    weather_desc: list[ValueItem] = Field(default_factory=list, alias="weatherDesc")
    windspeed_kmph: str | None = Field(None, alias="windspeedKmph")
    winddir_16_point: str | None = Field(None, alias="winddir16Point")
    humidity: str | None = None
    visibility: str | None = None
    feels_like_c: str | None = Field(None, alias="FeelsLikeC")

    @property
    def description(self) -> str | None:
        return first_value(self.weather_desc)


class NearestArea(BaseModel):
    """Location block of the j1 payload."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    area_name: list[ValueItem] = Field(default_factory=list, alias="areaName")
    country: list[ValueItem] = Field(default_factory=list)

    @property
    def name(self) -> str | None:
        return first_value(self.area_name)

    @property
    def country_name(self) -> str | None:
        return first_value(self.country)


class JsonWeatherPayload(BaseModel):
    """Subset of the wttr.in ``format=j1`` document used for the report."""

    model_config = ConfigDict(extra="ignore")

    current_condition: list[CurrentCondition] = Field(..., min_length=1)
    nearest_area: list[NearestArea] = Field(..., min_length=1)

    @property
    def current(self) -> CurrentCondition:
        return self.current_condition[0]

    @property
    def area(self) -> NearestArea:
        return self.nearest_area[0]


class WeatherData(BaseModel):
    """Parsed result of a single weather request."""

    location: str = Field(..., description="Location as requested")
    format: FormatSelector = Field(FormatSelector.FULL, description="Requested output format")
    url: str = Field(..., description="URL that was fetched")
    body: str = Field("", description="Response text, or the <pre> text for the full format")
    temperatures: list[str] = Field(
        default_factory=list, description="Distinct Celsius readings found in the full page"
    )
    page_title: str | None = Field(None, description="HTML <title> of the full page")
    pre_count: int = Field(0, description="Number of <pre> elements in the full page")
    payload: JsonWeatherPayload | None = Field(None, description="Decoded j1 document")
