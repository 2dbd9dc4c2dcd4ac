"""Unit tests for the WWO client and its requests-based transport.

Client tests run against a recording fake transport so the query building
and the three failure kinds can be checked without the network. Transport
tests use the responses library to stand in for the provider.
"""

from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses
from wwo import API_HOST, WWO, RequestsTransport
from wwo_config import Settings
from wwo_errors import WWODecodeError, WWOError, WWORemoteError, WWOTransportError
from wwo_types import Local, Marine, PastLocal, PastMarine, Search, Ski, TimeZone

LOCAL_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<data>
  <request><type>City</type><query>Paris, France</query></request>
  <current_condition>
    <observation_time>08:00 AM</observation_time>
    <temp_C>20</temp_C>
    <humidity>60</humidity>
    <pressure>1022</pressure>
    <visibility>10</visibility>
    <windspeedKmph>15</windspeedKmph>
    <winddirDegree>90</winddirDegree>
    <winddir16Point>E</winddir16Point>
  </current_condition>
</data>
"""

ERROR_XML = (b"<data><request><type>City</type><query>Atlantis</query></request>"
             b"<error><msg>Unable to find any matching weather location to the query submitted!</msg></error></data>")


class FakeTransport:
    """Transport returning a canned payload and remembering each call."""

    def __init__(self, payload: bytes = b"<data/>", error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls = []

    def fetch(self, path, params):
        self.calls.append((path, dict(params)))
        if self.error is not None:
            raise self.error
        return self.payload


def test_get_local_success():
    """Verifies a well-formed local payload comes back as a Local report with matching current conditions."""
    transport = FakeTransport(LOCAL_XML)
    weather = WWO("secret", transport=transport)

    report = weather.get_local("Paris")

    cc = report.current
    assert isinstance(report, Local)
    assert report.error is None
    assert (cc.temp, cc.humidity, cc.pressure, cc.visibility) == (20, 60, 1022, 10)
    assert (cc.wind_speed, cc.wind_dir, cc.wind_dir_compass) == (15, 90, "E")


def test_query_parameters_are_forced():
    """Checks that q, date_format and format are always set regardless of caller options."""
    transport = FakeTransport(LOCAL_XML)
    weather = WWO("secret", transport=transport)
    options = {"q": "Berlin", "date_format": "unix", "format": "json", "num_of_days": "3"}

    weather.get_local("Paris", options)

    path, params = transport.calls[0]
    assert path == "/premium/v1/weather.ashx"
    assert params == {
        "key": "secret",
        "q": "Paris",
        "date_format": "",
        "format": "xml",
        "num_of_days": "3",
    }
    # The caller's mapping is left alone.
    assert options["q"] == "Berlin"


def test_location_overrides_caller_query_in_echo():
    """Ensures the echoed request reflects the location argument, not an option-supplied q."""

    class EchoTransport(FakeTransport):
        def fetch(self, path, params):
            super().fetch(path, params)
            return f"<data><request><query>{params['q']}</query></request></data>".encode()

    weather = WWO("secret", transport=EchoTransport())

    report = weather.get_time_zone("Tokyo", {"q": "Osaka"})

    assert report.request.query == "Tokyo"


def test_unknown_options_are_passed_through():
    transport = FakeTransport()
    weather = WWO("secret", transport=transport)

    weather.get_search("Par", {"num_of_results": "5", "not_a_real_option": "x"})

    _, params = transport.calls[0]
    assert params["not_a_real_option"] == "x"
    assert params["num_of_results"] == "5"


@pytest.mark.parametrize("method, service, report_cls", [
    ("get_local", "weather", Local),
    ("get_marine", "marine", Marine),
    ("get_ski", "ski", Ski),
    ("get_past_local", "past-weather", PastLocal),
    ("get_past_marine", "past-marine", PastMarine),
    ("get_search", "search", Search),
    ("get_time_zone", "tz", TimeZone),
])
def test_each_report_uses_its_endpoint(method, service, report_cls):
    transport = FakeTransport()
    weather = WWO("secret", transport=transport)

    report = getattr(weather, method)("London")

    assert isinstance(report, report_cls)
    assert transport.calls[0][0] == f"/premium/v1/{service}.ashx"


def test_remote_error_carries_message_and_report():
    """Validates that an in-payload error node becomes a WWORemoteError with the exact message."""
    weather = WWO("secret", transport=FakeTransport(ERROR_XML))

    with pytest.raises(WWORemoteError) as excinfo:
        weather.get_local("Atlantis")

    message = "Unable to find any matching weather location to the query submitted!"
    assert str(excinfo.value) == message
    assert excinfo.value.message == message
    report = excinfo.value.report
    assert report.request.query == "Atlantis"
    assert report.current.temp == 0
    assert report.weather == []
    assert report.climate == []


def test_malformed_payload_raises_decode_error_with_report():
    weather = WWO("secret", transport=FakeTransport(b"<data><request><query>Paris</query></request><current_"))

    with pytest.raises(WWODecodeError) as excinfo:
        weather.get_local("Paris")

    assert excinfo.value.report is not None
    assert excinfo.value.report.request.query == "Paris"


def test_transport_error_is_propagated():
    error = WWOTransportError(requests.exceptions.ConnectionError("connection refused"))
    weather = WWO("secret", transport=FakeTransport(error=error))

    with pytest.raises(WWOTransportError) as excinfo:
        weather.get_marine("Brest")

    assert excinfo.value is error
    assert not hasattr(excinfo.value, "report")


def test_errors_share_a_base_class():
    for error_cls in (WWOTransportError, WWODecodeError, WWORemoteError):
        assert issubclass(error_cls, WWOError)


def test_default_transport_scheme():
    assert WWO("secret").transport.base_url == f"https://{API_HOST}"
    assert WWO("secret", insecure=True).transport.base_url == f"http://{API_HOST}"


def test_from_settings():
    weather = WWO.from_settings(Settings(api_key="from-env", insecure=True, timeout=12.5))

    assert weather.key == "from-env"
    assert weather.insecure is True
    assert weather.transport.base_url == f"http://{API_HOST}"
    assert weather.transport.timeout == 12.5


@responses.activate
def test_requests_transport_end_to_end():
    """Simulates the provider over HTTP and checks the full query string and decoded report."""
    weather = WWO("secret")
    responses.add(
        responses.GET,
        f"https://{API_HOST}/premium/v1/weather.ashx",
        body=LOCAL_XML,
        status=200,
        content_type="application/xml",
    )

    report = weather.get_local("Paris", {"fx": "no"})

    query = parse_qs(urlsplit(responses.calls[0].request.url).query, keep_blank_values=True)
    assert query == {
        "key": ["secret"],
        "q": ["Paris"],
        "date_format": [""],
        "format": ["xml"],
        "fx": ["no"],
    }
    assert report.request.query == "Paris, France"
    assert report.current.temp == 20


@responses.activate
def test_requests_transport_returns_error_status_body():
    """Ensures an error status with an XML body is decoded so the provider's message surfaces."""
    weather = WWO("secret")
    responses.add(responses.GET, f"https://{API_HOST}/premium/v1/ski.ashx", body=ERROR_XML, status=400)

    with pytest.raises(WWORemoteError) as excinfo:
        weather.get_ski("Atlantis")

    assert "Unable to find" in str(excinfo.value)


@responses.activate
def test_requests_transport_empty_error_status():
    transport = RequestsTransport(f"https://{API_HOST}")
    responses.add(responses.GET, f"https://{API_HOST}/premium/v1/tz.ashx", body=b"", status=503)

    with pytest.raises(WWOTransportError) as excinfo:
        transport.fetch("/premium/v1/tz.ashx", {"q": "Tokyo"})

    assert isinstance(excinfo.value.error, requests.exceptions.HTTPError)


@responses.activate
def test_requests_transport_connection_error():
    transport = RequestsTransport(f"http://{API_HOST}")
    responses.add(responses.GET, f"http://{API_HOST}/premium/v1/marine.ashx",
                  body=requests.exceptions.ConnectionError("connection refused"))

    with pytest.raises(WWOTransportError) as excinfo:
        transport.fetch("/premium/v1/marine.ashx", {"q": "Brest"})

    assert isinstance(excinfo.value.error, requests.exceptions.ConnectionError)
