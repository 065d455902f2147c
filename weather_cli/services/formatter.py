"""Console report rendering."""

from collections.abc import Callable

from weather_cli.models.weather import FormatSelector, WeatherData
from weather_cli.services.weather import (
    HttpStatusError,
    ParseError,
    WeatherNotFoundError,
    WeatherServiceError,
)

SEPARATOR = "=" * 60
MISSING = "N/A"


def _value(value: str | None) -> str:
    return value if value else MISSING


def frame(header: str, content: list[str]) -> list[str]:
    """Wrap content lines in the separator frame."""
    return ["", SEPARATOR, header, SEPARATOR, *content, SEPARATOR]


def _body_lines(body: str) -> list[str]:
    # A trailing newline from the service would otherwise print as a blank line
    return [body[:-1] if body.endswith("\n") else body]


def _location_header(data: WeatherData) -> str:
    return f"Weather for: {data.location.capitalize()}"


def _render_text(data: WeatherData) -> list[str]:
    return frame(_location_header(data), _body_lines(data.body))


def _render_custom(data: WeatherData) -> list[str]:
    return frame("Weather Details", _body_lines(data.body))


def _render_json(data: WeatherData) -> list[str]:
    if data.payload is None:
        raise ValueError("json report requires a decoded payload")

    current = data.payload.current
    area = data.payload.area
    header = f"Weather for: {_value(area.name)}, {_value(area.country_name)}"
    return frame(
        header,
        [
            f"🌡️  Temperature: {_value(current.temp_c)}°C ({_value(current.temp_f)}°F)",
            f"☁️  Condition: {_value(current.description)}",
            f"💨 Wind: {_value(current.windspeed_kmph)} km/h {_value(current.winddir_16_point)}",
            f"💧 Humidity: {_value(current.humidity)}%",
            f"👁️  Visibility: {_value(current.visibility)} km",
            f"🌡️  Feels Like: {_value(current.feels_like_c)}°C",
        ],
    )


def _render_full(data: WeatherData) -> list[str]:
    lines = frame(_location_header(data), _body_lines(data.body))
    if data.temperatures:
        lines += ["", "📊 Extracted Details:"]
        lines += [
            f"  Temperature reading {i}: {temp}°C"
            for i, temp in enumerate(data.temperatures, start=1)
        ]
    return lines


RENDERERS: dict[FormatSelector, Callable[[WeatherData], list[str]]] = {
    FormatSelector.FULL: _render_full,
    FormatSelector.SIMPLE: _render_text,
    FormatSelector.PLAIN: _render_text,
    FormatSelector.CUSTOM: _render_custom,
    FormatSelector.JSON: _render_json,
}


def render_report(data: WeatherData) -> list[str]:
    """Render fetched weather data as output lines.

    Args:
        data: Parsed weather data

    Returns:
        Report lines, framed by separators
    """
    return RENDERERS[data.format](data)


def render_not_found(location: str) -> list[str]:
    """Informational lines for a page without weather data."""
    return [
        "",
        f"❌ Could not find weather data for '{location}'.",
        "The city name might be incorrect or not recognized.",
    ]


def render_error(error: WeatherServiceError) -> list[str]:
    """One-line user message for a failed fetch, plus a hint where useful."""
    if isinstance(error, WeatherNotFoundError):
        return render_not_found(error.location)
    if isinstance(error, HttpStatusError):
        return [
            f"❌ HTTP Error: {error}",
            "The city name might be invalid or the service is unavailable.",
        ]
    if isinstance(error, ParseError):
        return [f"❌ Error parsing JSON: {error}"]
    return [f"❌ Error: {error}"]
