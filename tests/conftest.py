from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.support.integrations import FakeIntegrationClient, make_integration

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _isolated_sentry_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SENTRY_AUTH_TOKEN",
        "SENTRY_BASE_URL",
        "SENTRY_TIMEOUT_SECONDS",
        "SENTRY_RATE_LIMIT_PER_SECOND",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def two_page_client() -> FakeIntegrationClient:
    """Page one holds X and Y (cursor ``c2``); page two holds Z and ends the listing."""

    return FakeIntegrationClient.from_pages(
        [
            make_integration("X", integration_id="1"),
            make_integration("Y", integration_id="2", config={"a": "1", "b": "2"}),
        ],
        [make_integration("Z", integration_id="3")],
    )


@pytest.fixture(scope="session")
def integration_list_payload() -> list[dict[str, object]]:
    path = DATA_DIR / "sentry" / "organization_integrations.json"
    with path.open() as handle:
        return json.load(handle)
