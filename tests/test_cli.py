from __future__ import annotations

from typing import Any

import pytest
from conftest import FakeLookup

from sms_ubidots import cli


def test_run_query_prints_reply(example_values: dict[tuple[str, str], Any]) -> None:
    out = cli.run_query("Devices: kitchen Variables: temperature", FakeLookup(example_values))
    assert out == "Data requested:\n\nDevice: kitchen\nVariable: temperature = 29.45\n"


def test_run_query_reports_errors(example_values: dict[tuple[str, str], Any]) -> None:
    assert cli.run_query("Devices: kitchen", FakeLookup(example_values)) == (
        "error: Missing 'Variables:' list"
    )
    assert cli.run_query("Devices: garage Variables: temperature", FakeLookup(example_values)) == (
        "error: 404 - lookup of garage/temperature failed"
    )


def test_main_one_shot(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    example_values: dict[tuple[str, str], Any],
) -> None:
    monkeypatch.setenv("UBIDOTS_TOKEN", "BBFF-test-token")
    monkeypatch.setattr(cli, "UbidotsClient", lambda settings: FakeLookup(example_values))

    cli.main(["Devices: balcony Variables: humidity"])

    assert "Variable: humidity = 50.87" in capsys.readouterr().out


def test_main_interactive(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    example_values: dict[tuple[str, str], Any],
) -> None:
    inputs = iter(["", "Devices: kitchen Variables: humidity", "/quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
    monkeypatch.setattr(cli, "UbidotsClient", lambda settings: FakeLookup(example_values))

    cli.main([])

    assert "Variable: humidity = 55.72" in capsys.readouterr().out
