"""wttr.in client: URL construction, request and per-format parsing."""

import re
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from weather_cli.core.config import settings
from weather_cli.core.logging import get_logger
from weather_cli.models.weather import FormatSelector, JsonWeatherPayload, WeatherData

logger = get_logger(__name__)

CELSIUS_PATTERN = re.compile(r"(\d+)°C")
MAX_TEMPERATURE_READINGS = 3


class WeatherServiceError(Exception):
    """Weather service error."""

    pass


class NetworkError(WeatherServiceError):
    """The request could not be completed."""

    pass


class HttpStatusError(WeatherServiceError):
    """The service answered with a non-success status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ParseError(WeatherServiceError):
    """The JSON body could not be decoded into the expected payload."""

    pass


class WeatherNotFoundError(WeatherServiceError):
    """The HTML page carried no weather block."""

    def __init__(self, location: str):
        super().__init__(f"Could not find weather data for '{location}'")
        self.location = location


def extract_temperatures(text: str, limit: int = MAX_TEMPERATURE_READINGS) -> list[str]:
    """Return distinct Celsius readings in first-seen order.

    Args:
        text: Text to scan for ``<number>°C``
        limit: Maximum number of readings to keep

    Returns:
        Up to ``limit`` temperature values as strings
    """
    seen: list[str] = []
    for value in CELSIUS_PATTERN.findall(text):
        if value not in seen:
            seen.append(value)
    return seen[:limit]


class WeatherService:
    """Single-request client for the wttr.in text service."""

    def __init__(self, client: httpx.Client | None = None, base_url: str | None = None):
        """Initialize weather service.

        Args:
            client: Preconfigured HTTP client, mostly for tests
            base_url: Service root, defaults to settings.base_url
        """
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.client = client or httpx.Client(
            timeout=settings.request_timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )
        self._parsers = {
            FormatSelector.FULL: self._parse_full,
            FormatSelector.SIMPLE: self._parse_text,
            FormatSelector.PLAIN: self._parse_text,
            FormatSelector.CUSTOM: self._parse_text,
            FormatSelector.JSON: self._parse_json,
        }

    def __enter__(self) -> "WeatherService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close HTTP client."""
        self.client.close()

    def build_url(self, location: str, fmt: FormatSelector = FormatSelector.FULL) -> str:
        """Build the request URL for a location.

        The location is percent-encoded as a single path segment. The format
        code is appended literally since wttr.in templates use ``%`` and ``+``.

        Args:
            location: Location name, may contain spaces
            fmt: Output format

        Returns:
            Absolute URL
        """
        url = f"{self.base_url}/{quote(location, safe='')}"
        if fmt.format_code is not None:
            url = f"{url}?format={fmt.format_code}"
        return url

    def _get(self, url: str) -> str:
        """Send the GET request.

        Args:
            url: Absolute request URL

        Returns:
            Response body as text

        Raises:
            HttpStatusError: If the service returned a non-success status
            NetworkError: If the request could not be completed
        """
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.debug("weather_http_status", url=url, status_code=status)
            raise HttpStatusError(
                f"{status} {e.response.reason_phrase}".strip(),
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            logger.debug("weather_request_failed", url=url, error=str(e))
            raise NetworkError(str(e) or type(e).__name__) from e
        return response.text

    def _parse_text(self, data: WeatherData, body: str) -> WeatherData:
        """Keep a pre-formatted text body as is."""
        data.body = body
        return data

    def _parse_json(self, data: WeatherData, body: str) -> WeatherData:
        """Decode the j1 document.

        Args:
            data: Result being filled
            body: Response body

        Returns:
            Result with the decoded payload

        Raises:
            ParseError: If the body is not JSON or lacks the condition arrays
        """
        try:
            data.payload = JsonWeatherPayload.model_validate_json(body)
        except ValidationError as e:
            logger.debug("weather_json_invalid", errors=e.error_count())
            detail = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
                for err in e.errors()
            )
            raise ParseError(detail) from e
        data.body = body
        return data

    def _parse_full(self, data: WeatherData, body: str) -> WeatherData:
        """Extract the first <pre> block and its Celsius readings.

        Args:
            data: Result being filled
            body: HTML page

        Returns:
            Result with the block text, temperatures and page details

        Raises:
            WeatherNotFoundError: If no <pre> block exists or it is empty
        """
        soup = BeautifulSoup(body, "html.parser")
        title = soup.find("title")
        blocks = soup.find_all("pre")

        data.page_title = title.get_text() if title else None
        data.pre_count = len(blocks)
        logger.debug("html_parsed", title=data.page_title, pre_count=data.pre_count)

        text = blocks[0].get_text() if blocks else ""
        if not text:
            raise WeatherNotFoundError(data.location)

        data.body = text
        data.temperatures = extract_temperatures(text)
        return data

    def fetch(self, location: str, fmt: FormatSelector = FormatSelector.FULL) -> WeatherData:
        """Fetch and parse weather for a location.

        Args:
            location: Location name
            fmt: Output format

        Returns:
            Parsed weather data

        Raises:
            NetworkError: If the request could not be completed
            HttpStatusError: If the service returned a non-success status
            ParseError: If the JSON body is malformed or incomplete
            WeatherNotFoundError: If the HTML page has no weather block
        """
        url = self.build_url(location, fmt)
        logger.debug("weather_request", url=url, format=fmt.value)

        body = self._get(url)
        data = WeatherData(location=location, format=fmt, url=url)
        result = self._parsers[fmt](data, body)

        logger.info("weather_fetched", location=location, format=fmt.value)
        return result
