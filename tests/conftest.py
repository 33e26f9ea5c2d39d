from __future__ import annotations

import pytest

from tests.helpers.participants import FixedClock


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    for name in (
        "BANKMERGE_BASE_PATH",
        "BANKMERGE_BASE_URL",
        "BANKMERGE_OUTPUT_DIR",
        "BANKMERGE_CHANGELOG_PATH",
        "BANKMERGE_SPI_LOOKBACK_DAYS",
        "BANKMERGE_SPI_URL_TEMPLATE",
        "BANKMERGE_STR_URL",
        "BANKMERGE_HTTP_TIMEOUT",
        "BANKMERGE_HTTP_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BANKMERGE_DATA_DIR", str(tmp_path_factory.mktemp("data")))


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()
