"""WorldWeatherOnline Premium API client.

This module implements the integration with the worldweatheronline.com
premium API. A WWO instance holds the API key and is used to perform
queries, one blocking request per call:

    weather = WWO("your-api-key")
    forecast = weather.get_local("London", {"num_of_days": "3"})

The optional options passed in the mapping are documented with the various
get_* methods; they are forwarded to the provider without validation. Each
get_* method returns a report of the appropriate wwo_types class, or raises:

    1. WWOTransportError if the provider could not be reached.
    2. WWODecodeError if the payload did not match the report schema.
    3. WWORemoteError if the provider answered with an error message.

The last two carry the report as far as it could be filled in.
"""

import logging
from typing import Dict, Mapping, Optional, Protocol, Type, TypeVar

import requests

from wwo_config import Settings
from wwo_decode import decode
from wwo_errors import WWODecodeError, WWORemoteError, WWOTransportError
from wwo_types import Local, Marine, PastLocal, PastMarine, Search, Ski, TimeZone

logger = logging.getLogger(__name__)

T = TypeVar("T")

API_HOST = "api.worldweatheronline.com"
API_PATH = "/premium/v1/{service}.ashx"

# Payload format requested from the provider; the decoder only understands XML.
API_FORMAT = "xml"


def api_base_url(insecure: bool = False) -> str:
    scheme = "http" if insecure else "https"
    return f"{scheme}://{API_HOST}"


class Transport(Protocol):
    """Fetches the raw body of a provider endpoint."""

    def fetch(self, path: str, params: Mapping[str, str]) -> bytes:
        ...


class RequestsTransport:
    """Transport issuing GET requests through a requests session.

        Attributes:
            base_url: Scheme and host every path is appended to.
            session: The requests session used for all calls.
            timeout: Seconds to wait for the provider, or None to wait forever.
    """
    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, path: str, params: Mapping[str, str]) -> bytes:
        """Performs the GET request and returns the response body.

            The provider reports most failures inside the payload, so a body
            received with an error status is still returned for decoding.

            Raises:
                WWOTransportError: If the request fails, or an error status
                    comes back without a body.
        """
        try:
            response = self.session.get(self.base_url + path, params=params, timeout=self.timeout)

            # Raise an exception for bad status codes (4xx or 5xx)
            response.raise_for_status()

            return response.content

        except requests.exceptions.HTTPError as err:
            if err.response is not None and err.response.content:
                logger.warning("Provider answered %s with HTTP %s", path, err.response.status_code)
                return err.response.content
            raise WWOTransportError(err) from err
        except requests.exceptions.RequestException as err:
            raise WWOTransportError(err) from err


class WWO:
    """Essential information for WorldWeatherOnline lookups.

        The key is never changed after construction, so one instance may be
        shared by callers issuing independent requests.

        Attributes:
            key: The API key.
            insecure: Use http rather than https.
            transport: The collaborator performing the HTTP requests.
    """
    def __init__(self, key: str, insecure: bool = False, transport: Optional[Transport] = None):
        """Initializes the client.

                Args:
                    key: The premium API key.
                    insecure: If True, talk to the provider over plain http.
                    transport: Optional transport; a RequestsTransport for the
                        selected scheme is created when omitted.
        """
        self.key = key
        self.insecure = insecure
        self.transport = transport or RequestsTransport(self.base_url)

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[Transport] = None) -> "WWO":
        """Builds a client from runtime settings."""
        if transport is None:
            transport = RequestsTransport(api_base_url(settings.insecure), timeout=settings.timeout)
        return cls(settings.api_key, insecure=settings.insecure, transport=transport)

    @property
    def base_url(self) -> str:
        return api_base_url(self.insecure)

    def _query(self, location: str, options: Optional[Mapping[str, str]]) -> Dict[str, str]:
        # The caller's mapping is copied; key, q, date_format and format are fixed here.
        params = {"key": self.key}
        params.update(options or {})
        params["q"] = location
        params["date_format"] = ""
        params["format"] = API_FORMAT
        return params

    def _get(self, service: str, report_cls: Type[T], location: str,
             options: Optional[Mapping[str, str]]) -> T:
        """Fetches one report and decodes it.

            Args:
                service: The endpoint name (e.g. 'weather' or 'past-marine').
                report_cls: The wwo_types report class to decode into.
                location: Free-form location query.
                options: Extra provider query parameters.

            Returns:
                The decoded report.

            Raises:
                WWOTransportError: If the provider could not be reached.
                WWODecodeError: If the payload is malformed.
                WWORemoteError: If the payload carries an error message.
        """
        path = API_PATH.format(service=service)
        logger.info("Fetching %s for %r", service, location)

        payload = self.transport.fetch(path, self._query(location, options))

        try:
            report = decode(report_cls, payload)
        except WWODecodeError as e:
            logger.warning("Could not decode %s payload for %r: %s", service, location, e)
            raise

        if report.error is not None:
            logger.warning("Provider rejected %s query %r: %s", service, location, report.error)
            raise WWORemoteError(report.error, report)

        return report

    def get_local(self, location: str, options: Optional[Mapping[str, str]] = None) -> Local:
        """Fetches a local forecast for location.

            Supported options are (defaults marked with *):
                num_of_days      Number of days of forecast to include (0-21, *14)
                date             Start date of forecast (today, *tomorrow, YYYY-mm-dd)
                fx               Include forecast (*yes, no)
                cc               Include current conditions (*yes, no)
                mca              Include monthly averages (*yes, no)
                fx24             Include tp-hourly forecasts (*yes, no)
                includelocation  Include nearest location information (yes, *no)
                tp               Number of hours in detailed forecast (1, *3, 6, 12, 24)
        """
        return self._get("weather", Local, location, options)

    def get_marine(self, location: str, options: Optional[Mapping[str, str]] = None) -> Marine:
        """Fetches a marine forecast for location.

            Supported options are (defaults marked with *):
                fx    Include forecast (*yes, no)
                tp    Number of hours in detailed forecast (1, *3, 6, 12, 24)
                tide  Include tide information (yes, *no)
        """
        return self._get("marine", Marine, location, options)

    def get_ski(self, location: str, options: Optional[Mapping[str, str]] = None) -> Ski:
        """Fetches a ski forecast for location.

            Supported options are (defaults marked with *):
                num_of_days      Number of days of forecast to include (0-21, *14)
                date             Start date of forecast (today, *tomorrow, YYYY-mm-dd)
                includelocation  Include nearest location information (yes, *no)
        """
        return self._get("ski", Ski, location, options)

    def get_past_local(self, location: str, options: Optional[Mapping[str, str]] = None) -> PastLocal:
        """Fetches historical local weather information for location.

            Supported options are (defaults marked with *):
                date             Start date (YYYY-mm-dd)
                enddate          End date (YYYY-mm-dd)
                includelocation  Include nearest location information (yes, *no)
                tp               Number of hours in detailed forecast (1, *3, 6, 12, 24)
        """
        return self._get("past-weather", PastLocal, location, options)

    def get_past_marine(self, location: str, options: Optional[Mapping[str, str]] = None) -> PastMarine:
        """Fetches historical marine weather information for location.

            Supported options are (defaults marked with *):
                date     Start date (YYYY-mm-dd)
                enddate  End date (YYYY-mm-dd)
                tp       Number of hours in detailed forecast (1, *3, 6, 12, 24)
                tide     Include tide information (yes, *no)
        """
        return self._get("past-marine", PastMarine, location, options)

    def get_search(self, location: str, options: Optional[Mapping[str, str]] = None) -> Search:
        """Looks up locations matching a query.

            Supported options are (defaults marked with *):
                num_of_results  Number of results to return (1-50, *10)
                timezone        Include timezone information (yes, *no)
                popular         Include only popular locations (yes, *no)
                wct             Limit locations to type (ski, cricket, football, golf, fishing)
        """
        return self._get("search", Search, location, options)

    def get_time_zone(self, location: str, options: Optional[Mapping[str, str]] = None) -> TimeZone:
        """Looks up time zone information for location. No options are supported."""
        return self._get("tz", TimeZone, location, options)
