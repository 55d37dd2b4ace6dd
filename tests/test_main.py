import asyncio
import io

import pytest

from pinhash import main as cli
from pinhash.config import Settings
from pinhash.utils.phc import HashParameters
from pinhash.utils.security import PinHasher


@pytest.fixture(autouse=True)
def cheap_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    settings = Settings(argon2_memory_cost=64, argon2_time_cost=1, argon2_parallelism=1, log_level="WARNING")
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    return settings


def _run(monkeypatch: pytest.MonkeyPatch, argv: list[str], stdin: str = "") -> int:
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return asyncio.run(cli.main(argv))


def test_hash_prints_encoded_hash(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(monkeypatch, ["--stdin", "hash"], stdin="1234\n")

    out = capsys.readouterr().out.strip()
    assert code == cli.EXIT_OK
    assert out.startswith("$argon2id$v=19$m=64,t=1,p=1$")
    assert PinHasher().verify("1234", out) is True


def test_verify_exit_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    encoded = PinHasher(HashParameters(memory_cost=64, time_cost=1)).hash("1234")

    assert _run(monkeypatch, ["--stdin", "verify", encoded], stdin="1234\n") == cli.EXIT_OK
    assert _run(monkeypatch, ["--stdin", "verify", encoded], stdin="0000\n") == cli.EXIT_NO


def test_verify_reads_pin_with_getpass(monkeypatch: pytest.MonkeyPatch) -> None:
    encoded = PinHasher(HashParameters(memory_cost=64, time_cost=1)).hash("1234")
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: "1234")

    assert _run(monkeypatch, ["verify", encoded]) == cli.EXIT_OK


def test_malformed_hash_reports_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(monkeypatch, ["--stdin", "verify", "not-a-valid-encoding"], stdin="pin-secret-value\n")

    assert code == cli.EXIT_ERROR
    err = capsys.readouterr().err
    assert any(line.startswith("error: ") for line in err.splitlines())
    assert "pin-secret-value" not in err


def test_needs_rehash(monkeypatch: pytest.MonkeyPatch) -> None:
    current = PinHasher(HashParameters(memory_cost=64, time_cost=1)).hash("1234")
    outdated = PinHasher(HashParameters(memory_cost=128, time_cost=1)).hash("1234")

    assert _run(monkeypatch, ["needs-rehash", current]) == cli.EXIT_NO
    assert _run(monkeypatch, ["needs-rehash", outdated]) == cli.EXIT_OK
