# topmark:header:start
#
#   project      : Bark
#   file         : __init__.py
#   file_relpath : src/bark/envelope/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Partitioned envelope: footer generation, part codec and storage backends."""

from __future__ import annotations

from bark.envelope.codec import Part, decode_part, decode_parts, encode_document, encode_part
from bark.envelope.envelope import Envelope
from bark.envelope.footer import generate_footer, is_footer
from bark.envelope.storage import (
    DirectoryStorage,
    MemoryStorage,
    MimeStorage,
    PartStorage,
    TransferEncoding,
    open_storage,
)

__all__ = [
    "DirectoryStorage",
    "Envelope",
    "MemoryStorage",
    "MimeStorage",
    "Part",
    "PartStorage",
    "TransferEncoding",
    "decode_part",
    "decode_parts",
    "encode_document",
    "encode_part",
    "generate_footer",
    "is_footer",
    "open_storage",
]
