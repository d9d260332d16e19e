# topmark:header:start
#
#   project      : Bark
#   file         : storage.py
#   file_relpath : src/bark/envelope/storage.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Storage backends for envelope parts.

The envelope codec never touches the filesystem directly: it reads and writes
part texts through the small `PartStorage` protocol. Three backends are
provided:

- `MemoryStorage`: a list of part texts (tests, single-process runs).
- `DirectoryStorage`: one UTF-8 file per part in a directory.
- `MimeStorage`: a ``multipart/mixed`` MIME message with one ``text/plain``
  part per envelope part, quoted-printable (default) or base64 encoded.

File-backed storages write atomically (temporary file, then `os.replace`), so an
interrupted run leaves the last committed state in place.
"""

from __future__ import annotations

import os
import tempfile
from email import message_from_bytes
from email.charset import BASE64, QP, Charset
from email.message import Message
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from bark.config.logging import get_logger
from bark.constants import MIME_FROM, MIME_PARTS_HEADER, MIME_SUBJECT, MIME_TO
from bark.core.errors import ContainerError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bark.config.logging import BarkLogger

logger: BarkLogger = get_logger(__name__)

PART_FILE_PATTERN: str = "part-{index:05d}.txt"


class PartStorage(Protocol):
    """Minimal interface for envelope part persistence."""

    def part_count(self) -> int:
        """Return the number of stored parts."""
        ...

    def read_part(self, index: int) -> str:
        """Return the text of part ``index``."""
        ...

    def write_part(self, index: int, text: str) -> None:
        """Replace part ``index``, or append when ``index == part_count()``."""
        ...

    def commit(self) -> None:
        """Persist pending writes (no-op for storages that write through)."""
        ...


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temporary file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _check_index(index: int, count: int) -> None:
    if not 0 <= index <= count:
        raise IndexError(f"part index {index} out of range (0..{count})")


class MemoryStorage:
    """Envelope parts held in a Python list."""

    def __init__(self, parts: Iterable[str] = ()) -> None:
        self._parts: list[str] = list(parts)

    def part_count(self) -> int:
        """Return the number of stored parts."""
        return len(self._parts)

    def read_part(self, index: int) -> str:
        """Return the text of part ``index``."""
        return self._parts[index]

    def write_part(self, index: int, text: str) -> None:
        """Replace part ``index``, or append when ``index == part_count()``."""
        _check_index(index, len(self._parts))
        if index == len(self._parts):
            self._parts.append(text)
        else:
            self._parts[index] = text

    def commit(self) -> None:
        """Nothing to persist."""

    @property
    def parts(self) -> list[str]:
        """A copy of the stored part texts."""
        return list(self._parts)


class DirectoryStorage:
    """Envelope parts stored as ``part-NNNNN.txt`` files in a directory.

    Args:
        root (Path): Directory holding the part files; created on first write.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def _path(self, index: int) -> Path:
        return self.root / PART_FILE_PATTERN.format(index=index)

    def part_count(self) -> int:
        """Return the number of consecutive part files starting at index 0."""
        count = 0
        while self._path(count).is_file():
            count += 1
        return count

    def read_part(self, index: int) -> str:
        """Return the text of part ``index``."""
        path = self._path(index)
        if not path.is_file():
            raise IndexError(f"part index {index} out of range")
        return path.read_bytes().decode("utf-8")

    def write_part(self, index: int, text: str) -> None:
        """Atomically replace (or append) part ``index``."""
        _check_index(index, self.part_count())
        atomic_write_bytes(self._path(index), text.encode("utf-8"))

    def commit(self) -> None:
        """Writes go straight to disk."""

    def clear(self) -> None:
        """Remove all part files."""
        for index in reversed(range(self.part_count())):
            self._path(index).unlink()


class TransferEncoding(str, Enum):
    """MIME body encoding of envelope parts."""

    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"


def _mime_part(text: str, encoding: TransferEncoding) -> MIMEText:
    charset = Charset("utf-8")
    charset.body_encoding = BASE64 if encoding is TransferEncoding.BASE64 else QP
    return MIMEText(text, "plain", charset)  # type: ignore[arg-type]


def _is_placeholder(sub: Message) -> bool:
    return sub.get("Content-Type") is None and not str(sub.get_payload()).strip()


def _check_part_count(declared: str | None, actual: int) -> None:
    if declared is None:
        return
    try:
        count = int(declared)
    except ValueError:
        raise ContainerError(f"Invalid {MIME_PARTS_HEADER} header '{declared}'") from None
    if count != actual:
        raise ContainerError(f"MIME message declares {count} part(s) but carries {actual}")


class MimeStorage(MemoryStorage):
    """Envelope parts packed into one ``multipart/mixed`` MIME message.

    Parts are held in memory; `commit()` writes the whole message atomically to
    ``path`` (if set). Use `to_bytes()` to obtain the message without a path.

    Args:
        parts (Iterable[str]): Initial part texts.
        path (Path | None): Message file written by `commit()`.
        encoding (TransferEncoding): Body encoding of each part.
    """

    def __init__(
        self,
        parts: Iterable[str] = (),
        *,
        path: Path | None = None,
        encoding: TransferEncoding = TransferEncoding.QUOTED_PRINTABLE,
    ) -> None:
        super().__init__(parts)
        self.path = path
        self.encoding = encoding

    @classmethod
    def from_bytes(cls, data: bytes, *, path: Path | None = None) -> MimeStorage:
        """Parse a MIME message produced by `to_bytes()`.

        Raises:
            ContainerError: If the message is not ``multipart/mixed``, a part is
                not UTF-8 ``text/plain``, or the part count header disagrees
                with the parts carried.
        """
        msg = message_from_bytes(data)
        if msg.get_content_type() != "multipart/mixed":
            raise ContainerError("MIME message in wrong format")

        subparts = msg.get_payload() if msg.is_multipart() else []
        if len(subparts) == 1 and _is_placeholder(subparts[0]):
            # A multipart message without attachments still carries one empty body.
            subparts = []
        _check_part_count(msg.get(MIME_PARTS_HEADER), len(subparts))
        texts: list[str] = []
        encoding = TransferEncoding.QUOTED_PRINTABLE
        for index, sub in enumerate(subparts):
            if sub.get_content_type() != "text/plain":
                raise ContainerError("Wrong MIME part type", part_index=index)
            if str(sub.get("Content-Transfer-Encoding", "")).lower() == "base64":
                encoding = TransferEncoding.BASE64
            payload = sub.get_payload(decode=True)
            if not isinstance(payload, bytes):
                raise ContainerError("MIME part has no body", part_index=index)
            try:
                texts.append(payload.decode("utf-8"))
            except UnicodeDecodeError as exc:
                raise ContainerError(f"MIME part is not UTF-8: {exc}", part_index=index) from exc

        logger.debug("Read MIME envelope with %d part(s)", len(texts))
        return cls(texts, path=path, encoding=encoding)

    @classmethod
    def load(cls, path: Path) -> MimeStorage:
        """Read a MIME envelope from ``path``."""
        return cls.from_bytes(path.read_bytes(), path=path)

    def to_bytes(self) -> bytes:
        """Serialize all parts into a MIME message."""
        msg = MIMEMultipart("mixed")
        msg["From"] = MIME_FROM
        msg["To"] = MIME_TO
        msg["Subject"] = MIME_SUBJECT
        msg[MIME_PARTS_HEADER] = str(len(self._parts))
        for text in self._parts:
            msg.attach(_mime_part(text, self.encoding))
        return msg.as_bytes()

    def commit(self) -> None:
        """Write the message to ``path`` (no-op when there is no path)."""
        if self.path is None:
            return
        atomic_write_bytes(self.path, self.to_bytes())
        logger.debug("Wrote MIME envelope %s (%d part(s))", self.path, self.part_count())


def open_storage(path: Path) -> PartStorage:
    """Open an existing envelope: a directory of parts or a MIME message file."""
    if path.is_dir():
        return DirectoryStorage(path)
    return MimeStorage.load(path)
