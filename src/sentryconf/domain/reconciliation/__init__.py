"""Reconciliation core for organization integration configurations.

Flow per invocation:
1) list every integration for the provider key, following cursors
2) keep the single integration whose name matches
3) project it into host state, or write the desired (optionally merged)
   document back to it
"""

from __future__ import annotations

from .documents import dump_document, load_document, merge_fragment
from .engine import Phase, Reconciler
from .identifiers import CompositeId, decode_composite_id, encode_composite_id
from .match import match_by_name
from .paginate import fetch_all
from .state import (
    DocumentState,
    DocumentStateCodec,
    MappingState,
    MappingStateCodec,
    StateCodec,
)

__all__ = [
    "CompositeId",
    "DocumentState",
    "DocumentStateCodec",
    "MappingState",
    "MappingStateCodec",
    "Phase",
    "Reconciler",
    "StateCodec",
    "decode_composite_id",
    "dump_document",
    "encode_composite_id",
    "fetch_all",
    "load_document",
    "match_by_name",
    "merge_fragment",
]
