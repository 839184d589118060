from __future__ import annotations

import pytest

from sentryconf.domain.errors import PaginationError, RemoteError
from sentryconf.domain.reconciliation import fetch_all
from tests.support.integrations import FakeIntegrationClient, make_integration


def test_fetch_all_concatenates_pages_in_order(two_page_client: FakeIntegrationClient) -> None:
    items = fetch_all(two_page_client, "acme", "slack")

    assert [item.name for item in items] == ["X", "Y", "Z"]
    assert [call.cursor for call in two_page_client.list_calls] == ["", "c2"]


def test_fetch_all_passes_organization_and_provider_filter(
    two_page_client: FakeIntegrationClient,
) -> None:
    fetch_all(two_page_client, "acme", "github")

    assert {(call.organization, call.provider_key) for call in two_page_client.list_calls} == {
        ("acme", "github")
    }


def test_fetch_all_single_empty_page() -> None:
    client = FakeIntegrationClient.from_pages([])

    assert fetch_all(client, "acme", "slack") == []
    assert len(client.list_calls) == 1


def test_fetch_all_follows_long_chains() -> None:
    pages = [[make_integration(f"item-{index}")] for index in range(5)]
    client = FakeIntegrationClient.from_pages(*pages)

    items = fetch_all(client, "acme", "slack")

    assert [item.name for item in items] == [f"item-{index}" for index in range(5)]
    assert [call.cursor for call in client.list_calls] == ["", "c2", "c3", "c4", "c5"]


def test_fetch_all_fails_when_a_later_page_fails(two_page_client: FakeIntegrationClient) -> None:
    two_page_client.failing_cursors.add("c2")

    with pytest.raises(RemoteError, match="c2"):
        fetch_all(two_page_client, "acme", "slack")


def test_fetch_all_rejects_repeated_cursor() -> None:
    client = FakeIntegrationClient(
        pages={
            "": ([make_integration("A")], "loop"),
            "loop": ([make_integration("B")], "loop"),
        }
    )

    with pytest.raises(PaginationError) as excinfo:
        fetch_all(client, "acme", "slack")

    assert excinfo.value.cursor == "loop"
    assert len(client.list_calls) == 2


def test_fetch_all_rejects_cursor_cycle() -> None:
    client = FakeIntegrationClient(
        pages={
            "": ([make_integration("A")], "a"),
            "a": ([make_integration("B")], "b"),
            "b": ([make_integration("C")], "a"),
        }
    )

    with pytest.raises(PaginationError):
        fetch_all(client, "acme", "slack")
