# topmark:header:start
#
#   project      : Bark
#   file         : envelope.py
#   file_relpath : src/bark/envelope/envelope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Envelope: a document persisted part by part in a `PartStorage`.

The envelope is the durable form of a document in store-and-forward mode. It is
mutable in a narrow way: `Envelope.replace_lines` rewrites the content of one
part and leaves every other part byte-identical, so successive per-style passes
cannot disturb each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bark.config.logging import get_logger
from bark.core.model import Document
from bark.envelope.codec import Part, decode_part, decode_parts, encode_document, encode_part
from bark.envelope.footer import generate_footer
from bark.envelope.storage import MemoryStorage
from bark.parsing.machine import parse_document

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable, Iterator

    from bark.config.logging import BarkLogger
    from bark.core.model import Block
    from bark.envelope.storage import PartStorage

logger: BarkLogger = get_logger(__name__)


class Envelope:
    """Part-structured encoding of a block sequence.

    Args:
        storage (PartStorage): Where the part texts live.
        footer (str | None): Footer used when the storage holds no part yet.
    """

    def __init__(self, storage: PartStorage, *, footer: str | None = None) -> None:
        self.storage = storage
        self._footer = footer

    # --- construction ---

    @classmethod
    def from_document(
        cls,
        document: Document,
        *,
        footer: str | None = None,
        rng: random.Random | None = None,
        storage: PartStorage | None = None,
    ) -> Envelope:
        """Encode ``document`` into ``storage`` (a new `MemoryStorage` if None).

        Nothing is committed if a content line collides with the footer.
        """
        footer = footer or generate_footer(rng)
        texts = encode_document(document, footer)
        target: PartStorage = storage if storage is not None else MemoryStorage()
        for index, text in enumerate(texts):
            target.write_part(index, text)
        target.commit()
        logger.debug("Packed %d block(s) with footer %s", len(texts), footer)
        return cls(target, footer=footer)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        rng: random.Random | None = None,
        storage: PartStorage | None = None,
    ) -> Envelope:
        """Parse Bark text and pack it, checking content against the new footer."""
        footer = generate_footer(rng)
        document = parse_document(text, footer=footer)
        return cls.from_document(document, footer=footer, storage=storage)

    # --- reading ---

    def __len__(self) -> int:
        return self.storage.part_count()

    @property
    def footer(self) -> str | None:
        """Footer shared by all parts (None for an empty envelope of unknown origin)."""
        if self.storage.part_count() > 0:
            return self.read_part(0).footer
        return self._footer

    def read_part(self, index: int) -> Part:
        """Decode part ``index``, checking its footer against part 0."""
        expected: str | None = None
        if index > 0:
            expected = decode_part(self.storage.read_part(0), part_index=0).footer
        return decode_part(
            self.storage.read_part(index), expected_footer=expected, part_index=index
        )

    def parts(self) -> Iterator[Part]:
        """Decode all parts in order, checking that they share one footer."""
        storage = self.storage
        yield from decode_parts(storage.read_part(index) for index in range(storage.part_count()))

    def blocks(self) -> Iterator[Block]:
        """Yield the blocks carried by the envelope, in order."""
        for part in self.parts():
            yield part.block

    def document(self) -> Document:
        """Decode the whole envelope into a `Document`."""
        return Document(blocks=tuple(self.blocks()))

    # --- writing ---

    def replace_lines(self, index: int, lines: Iterable[str], *, footer: str) -> bool:
        """Replace the content of part ``index``; connector and style are kept.

        Args:
            index (int): Part to rewrite.
            lines (Iterable[str]): New content lines.
            footer (str): The envelope footer.

        Returns:
            bool: True if the part changed and was rewritten.
        """
        part = decode_part(self.storage.read_part(index), expected_footer=footer, part_index=index)
        new_block = part.block.with_lines(lines)
        if new_block == part.block:
            return False
        self.storage.write_part(index, encode_part(new_block, footer))
        logger.trace("Rewrote part %d (%d line(s))", index, len(new_block.lines))
        return True

    def commit(self) -> None:
        """Persist pending writes to the underlying storage."""
        self.storage.commit()
