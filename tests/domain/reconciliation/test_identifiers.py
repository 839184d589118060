from __future__ import annotations

import pytest

from sentryconf.domain.errors import MalformedIDError
from sentryconf.domain.reconciliation import (
    CompositeId,
    decode_composite_id,
    encode_composite_id,
)


def test_encode_joins_parts() -> None:
    assert encode_composite_id("acme", "slack", "24") == "acme/slack/24"


@pytest.mark.parametrize(
    ("organization", "provider_key", "internal_id"),
    [
        ("acme", "slack", "24"),
        ("my-org_2", "jira_server", "123456789"),
        ("a", "b", "c"),
    ],
)
def test_decode_reverses_encode(organization: str, provider_key: str, internal_id: str) -> None:
    encoded = encode_composite_id(organization, provider_key, internal_id)

    assert decode_composite_id(encoded) == CompositeId(organization, provider_key, internal_id)


@pytest.mark.parametrize("value", ["acme/slack", "acme/slack/24/extra", "acme//24", "", "acme"])
def test_decode_rejects_wrong_part_count(value: str) -> None:
    with pytest.raises(MalformedIDError):
        decode_composite_id(value)


def test_encode_rejects_separator_inside_part() -> None:
    with pytest.raises(MalformedIDError, match="provider_key"):
        encode_composite_id("acme", "sla/ck", "24")


def test_encode_rejects_empty_part() -> None:
    with pytest.raises(MalformedIDError, match="internal_id"):
        encode_composite_id("acme", "slack", "")


def test_malformed_id_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="Malformed"):
        decode_composite_id("nope")
