from __future__ import annotations

from sentryconf.domain.reconciliation import (
    DocumentState,
    DocumentStateCodec,
    MappingState,
    MappingStateCodec,
)
from sentryconf.domain.types import IntegrationIdentity


def test_document_codec_treats_blank_id_as_unknown() -> None:
    codec = DocumentStateCodec()
    state = DocumentState(
        organization="acme", provider_key="slack", name="A", config_data="{}", id=""
    )

    identity, integration_id = codec.decode_identity(state)

    assert identity == IntegrationIdentity("acme", "slack", "A")
    assert integration_id is None


def test_document_codec_carries_fragment_flag() -> None:
    codec = DocumentStateCodec()
    state = DocumentState(
        organization="acme",
        provider_key="slack",
        name="A",
        config_data="{}",
        is_fragment=True,
        id="24",
    )

    identity, integration_id = codec.decode_identity(state)

    assert identity.is_fragment is True
    assert integration_id == "24"
    assert codec.encode_identity(identity, "24") == "24"


def test_document_codec_fill_keeps_config_by_default() -> None:
    codec = DocumentStateCodec()
    state = DocumentState(
        organization="acme", provider_key="slack", name="A", config_data='{"x": "1"}'
    )
    identity, _ = codec.decode_identity(state)

    filled = codec.fill(state, state_id="24", identity=identity, integration_id="24")

    assert filled.id == "24"
    assert filled.config_data == '{"x": "1"}'


def test_mapping_codec_decodes_internal_id() -> None:
    codec = MappingStateCodec()
    state = MappingState(organization="acme", provider_key="slack", name="A", id="acme/slack/24")

    _, integration_id = codec.decode_identity(state)

    assert integration_id == "24"


def test_mapping_codec_ignores_id_for_other_provider() -> None:
    codec = MappingStateCodec()
    state = MappingState(organization="acme", provider_key="github", name="A", id="acme/slack/24")

    _, integration_id = codec.decode_identity(state)

    assert integration_id is None


def test_mapping_codec_encodes_composite_id_and_copies_document() -> None:
    codec = MappingStateCodec()
    state = MappingState(organization="acme", provider_key="slack", name="A")
    identity, _ = codec.decode_identity(state)
    document = {"channel": "#alerts"}

    encoded = codec.encode_document(document, state=state)

    assert codec.encode_identity(identity, "24") == "acme/slack/24"
    assert encoded == document
    assert encoded is not document
    assert MappingStateCodec.refresh_after_write is True
    assert DocumentStateCodec.refresh_after_write is False
