from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from conftest import FakeRegistryClient, children_json, entity_json
import enhetsoppslag
from enhetsoppslag import cli
from enhetsoppslag.constants import VERSION
from enhetsoppslag.integrations.brreg_models import BrregError, BrregErrorType, EntityKind

MAIN = EntityKind.MAIN_UNIT
SUB = EntityKind.SUB_UNIT


@pytest.fixture(autouse=True)
def _no_real_client(monkeypatch: pytest.MonkeyPatch) -> None:
    def _refuse(*_: object, **__: object) -> None:
        raise AssertionError("CLI-testene skal ikke bygge en ekte klient")

    monkeypatch.setattr(cli, "BrregClient", _refuse)
    monkeypatch.setattr(logging, "basicConfig", lambda **_: None)


def test_version_exits_before_lookup(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main(["--version"], client=fake_client) == 0

    assert capsys.readouterr().out.strip() == f"Versjon: {VERSION}"
    assert fake_client.calls == []


def test_found_prints_report_and_splits_arguments(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_client.add_entity("923609016", MAIN, 200, entity_json("923609016", "EQUINOR ASA"))
    fake_client.add_children(
        "923609016", 200, children_json(("973152351", "A"), ("912345678", "B"))
    )

    code = cli.main(["923", "609 016"], client=fake_client)

    captured = capsys.readouterr()
    assert code == 0
    assert "EQUINOR ASA" in captured.out
    assert "973152351 - A" in captured.out
    assert captured.err == ""


@pytest.mark.parametrize("argv", [["12345678"], ["1234567890"], ["12345678x"], ["983-544-622"]])
def test_malformed_orgnr_is_usage_error(
    argv: list[str],
    fake_client: FakeRegistryClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert cli.main(argv, client=fake_client, prog="enhetsoppslag") == 64

    captured = capsys.readouterr()
    assert "usage: enhetsoppslag" in captured.err
    assert "ni siffer" in captured.err
    assert fake_client.calls == []


def test_missing_argument_returns_usage_code(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main([], client=fake_client, prog="enhetsoppslag") == 64

    assert "usage: enhetsoppslag" in capsys.readouterr().err
    assert fake_client.calls == []


def test_help_returns_zero(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main(["-h"], client=fake_client, prog="enhetsoppslag") == 0

    assert "orgnr" in capsys.readouterr().out
    assert fake_client.calls == []


def test_not_found_exit_code(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_client.add_entity("999999999", MAIN, 404)
    fake_client.add_entity("999999999", SUB, 404)

    assert cli.main(["999999999"], client=fake_client) == 90
    assert "Fant ikke denne enheten i brreg" in capsys.readouterr().err


def test_removed_exit_code(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_client.add_entity(
        "910825538",
        MAIN,
        410,
        json.dumps({"organisasjonsnummer": "910825538", "slettedato": "2019-03-01"}),
    )

    assert cli.main(["910825538"], client=fake_client) == 91
    err = capsys.readouterr().err
    assert "Denne enheten er fjernet fra brreg" in err
    assert "2019-03-01" in err


def test_sub_unit_with_missing_parent_exits_with_error(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_client.add_entity("973152351", MAIN, 404)
    fake_client.add_entity(
        "973152351", SUB, 200, entity_json("973152351", "AVD", overordnetEnhet="923609016")
    )
    fake_client.add_entity("923609016", MAIN, 404)

    assert cli.main(["973152351"], client=fake_client) == 1

    err = capsys.readouterr().err
    assert err.startswith("Inkonsistent svar fra brreg")
    assert "Fant ikke denne enheten" not in err


def test_timeout_reports_communication_failure(
    fake_client: FakeRegistryClient, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_client.fail_entity(
        "923609016", MAIN, BrregError(BrregErrorType.NETWORK_ERROR, "tidsavbrudd")
    )

    assert cli.main(["923609016"], client=fake_client) == 1
    assert "Feil under kommunikasjon med brreg: tidsavbrudd" in capsys.readouterr().err


def test_default_client_is_built_from_settings(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    built: list[str] = []
    fake = FakeRegistryClient()
    fake.add_entity("999999999", MAIN, 404).add_entity("999999999", SUB, 404)

    class _ClientContext:
        def __init__(self, base_url: str) -> None:
            built.append(base_url)

        def __enter__(self) -> FakeRegistryClient:
            return fake

        def __exit__(self, *_: object) -> None:
            return None

    monkeypatch.setattr(cli, "BrregClient", _ClientContext)
    monkeypatch.setenv("ENHETSOPPSLAG_API_URL", "https://example.test/api")

    assert cli.main(["999 999 999"]) == 90
    assert built == ["https://example.test/api"]


def test_package_exposes_version() -> None:
    assert enhetsoppslag.__version__ == VERSION


def test_malformed_server_error_prints_only_the_final_message() -> None:
    script = textwrap.dedent(
        """
        import sys

        from enhetsoppslag import cli
        from enhetsoppslag.integrations.brreg_models import RawResponse


        class ServerErrorClient:
            def fetch_entity(self, orgnr, kind):
                return RawResponse(500, "<html>bad</html>")

            def fetch_children(self, parent_orgnr):
                raise AssertionError("uventet underenhetssøk")


        sys.exit(cli.main(["123456789"], client=ServerErrorClient()))
        """
    )
    env = dict(os.environ)
    env.pop("ENHETSOPPSLAG_LOG_LEVEL", None)
    env["PYTHONIOENCODING"] = "utf-8"
    project_root = Path(__file__).resolve().parent.parent

    result = subprocess.run(
        [sys.executable, "-c", script],
        cwd=project_root,
        env=env,
        capture_output=True,
        encoding="utf-8",
        timeout=60,
    )

    assert result.returncode == 1
    assert result.stdout == ""
    assert result.stderr.splitlines() == [
        "Trøbbel i tårnet hos brreg: Fikk en uleselig 500-feil fra brreg"
    ]
