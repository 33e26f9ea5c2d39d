from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from bankmerge.adapters.base_registry import JsonRegistryStore
from bankmerge.app import MergeRunResult
from bankmerge.domain.reconciliation import RegistryDiff, RunStatus, RunSummary
from bankmerge.ui import cli as cli_module


def _fake_run(
    status: RunStatus, captured: dict[str, object]
) -> Callable[..., MergeRunResult]:
    def fake_run_merge(**kwargs: object) -> MergeRunResult:
        captured.update(kwargs)
        return MergeRunResult(status=status, summary=RunSummary(), diff=RegistryDiff(status=status))

    return fake_run_merge


def test_cli_changed_run_exits_normally(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "run_merge", _fake_run(RunStatus.CHANGED, captured))

    cli_module.main(
        [
            "--base",
            str(tmp_path / "bancos.json"),
            "--output-dir",
            str(tmp_path / "out"),
            "--skip",
            "SPI",
            "--skip",
            "PCR",
        ]
    )

    store = captured["store"]
    assert isinstance(store, JsonRegistryStore)
    assert store.config.path == tmp_path / "bancos.json"
    writer = captured["writer"]
    assert writer.output_dir == tmp_path / "out"  # type: ignore[attr-defined]
    acquirer = captured["acquirer"]
    sources = {feed.source.value for feed in acquirer.feeds}  # type: ignore[attr-defined]
    assert "SPI" not in sources
    assert "PCR" not in sources


def test_cli_base_url_and_no_changes_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "run_merge", _fake_run(RunStatus.NO_CHANGES, captured))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--base", "https://example.test/bancos.json"])

    assert excinfo.value.code == cli_module.EXIT_NO_CHANGES
    store = captured["store"]
    assert isinstance(store, JsonRegistryStore)
    assert store.config.path is None
    assert store.config.url == "https://example.test/bancos.json"


def test_cli_fatal_error_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_run(**_: object) -> MergeRunResult:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "run_merge", failing_run)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 1


def test_cli_rejects_unknown_feed() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--skip", "NOPE"])

    assert excinfo.value.code == 2


def test_cli_invalid_configuration_exits_with_two(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BANKMERGE_SPI_LOOKBACK_DAYS", "ten")
    monkeypatch.setattr(cli_module, "run_merge", _fake_run(RunStatus.CHANGED, {}))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2


def test_console_entry_point_loads_dotenv_from_working_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    base_path = tmp_path / "registry" / "bancos.json"
    (tmp_path / ".env").write_text(f"BANKMERGE_BASE_PATH={base_path}\n", encoding="utf-8")
    # restore the variable after the test even though .env sets it outside monkeypatch
    monkeypatch.setenv("BANKMERGE_BASE_PATH", "unset")
    monkeypatch.delenv("BANKMERGE_BASE_PATH")
    monkeypatch.chdir(tmp_path)
    handlers: list[object] = []
    monkeypatch.setattr(cli_module, "signal", lambda _sig, handler: handlers.append(handler))
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "run_merge", _fake_run(RunStatus.CHANGED, captured))

    cli_module.run([])

    store = captured["store"]
    assert isinstance(store, JsonRegistryStore)
    assert store.config.path == base_path
    assert handlers == [cli_module.sigint_handler]
