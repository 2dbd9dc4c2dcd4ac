"""Tests for the command-line demonstration."""

from datetime import timedelta

from wwo import WWO
from wwo_config import Settings
from wwo_errors import WWORemoteError
from wwo_example import main, print_current_condition
from wwo_types import CurrentCondition, Local


class StubClient(WWO):
    """Client answering get_local from memory."""

    def __init__(self, report=None, error=None):
        super().__init__("stub", transport=object())
        self.report = report
        self.error = error
        self.requests = []

    def get_local(self, location, options=None):
        self.requests.append((location, options))
        if self.error is not None:
            raise self.error
        return self.report


def test_print_current_condition_skips_zero_fields(capsys):
    cc = CurrentCondition(time=timedelta(hours=14, minutes=5), temp=20, humidity=60,
                          wind_dir=90, wind_dir_compass="E")

    print_current_condition(cc)

    out = capsys.readouterr().out
    assert out.startswith("Current Conditions: at 14:05\n")
    assert "Temperature\t20°C\n" in out
    assert "Humidity\t60%\n" in out
    assert "Wind Direction\t90°E of N (E)\n" in out
    assert "Pressure" not in out
    assert "Feels Like" not in out


def test_main_prints_conditions(capsys):
    report = Local()
    report.current.temp = 12
    client = StubClient(report=report)

    assert main(["London"], client=client) == 0

    assert client.requests == [("London", {"fx": "no"})]
    assert "Temperature\t12°C" in capsys.readouterr().out


def test_main_reports_errors(capsys):
    client = StubClient(error=WWORemoteError("Unable to find any matching weather location", Local()))

    assert main(["Atlantis"], client=client) == 2

    assert "Error: Unable to find any matching weather location" in capsys.readouterr().err


def test_main_requires_api_key(monkeypatch, capsys):
    monkeypatch.setenv("WWO_API_KEY", "")
    monkeypatch.setattr("wwo_example.get_settings", Settings.from_env)

    assert main(["London"]) == 1

    assert "no API key" in capsys.readouterr().err
