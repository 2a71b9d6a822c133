"""Upload handler: stores uploaded files under a per-category directory with a size limit."""

import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from app.core.errors import PayloadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# Extensions are kept only when they look like an extension (no separators or spaces).
_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9_-]{1,16}$")


@dataclass(frozen=True)
class StoredFile:
    """Result of a stored upload: server-assigned name plus the client-supplied one."""

    filename: str
    original_name: str
    size: int


def unique_filename(original_name: str) -> str:
    """'<epoch ms>-<random 9 digits><ext>', keeping the original extension."""
    suffix = Path(original_name).suffix
    if not _SAFE_SUFFIX.match(suffix):
        suffix = ""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9):09d}{suffix}"


class FileStorage:
    """Writes uploads to <root>/<category>/<unique name>."""

    def __init__(self, root: Path, max_bytes: int) -> None:
        self.root = root
        self.max_bytes = max_bytes

    def category_dir(self, category: str) -> Path:
        return self.root / category

    def receive(
        self,
        category: str,
        stream: BinaryIO,
        original_name: str,
        declared_size: int | None = None,
    ) -> StoredFile:
        """
        Copy stream to a new file in the category directory.

        Raises PayloadTooLargeError once more than max_bytes are seen; the partial
        file is removed. OSError from the filesystem propagates unchanged.
        """
        if declared_size is not None and declared_size > self.max_bytes:
            self._reject(original_name, declared_size)

        directory = self.category_dir(category)
        directory.mkdir(parents=True, exist_ok=True)
        client_name = Path(original_name).name or "upload"
        filename = unique_filename(client_name)
        target = directory / filename

        written = 0
        try:
            with target.open("xb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        self._reject(client_name, written)
                    out.write(chunk)
        except BaseException:
            target.unlink(missing_ok=True)
            raise

        logger.info(
            "Stored upload category=%s filename=%s original=%r bytes=%s",
            category,
            filename,
            client_name,
            written,
        )
        return StoredFile(filename=filename, original_name=client_name, size=written)

    def remove(self, category: str, filename: str) -> bool:
        """Delete a stored file; return False if it was already gone."""
        # Stored names never contain separators; refuse anything that would escape the directory.
        if Path(filename).name != filename:
            logger.warning("Refusing to remove suspicious filename %r", filename)
            return False
        path = self.category_dir(category) / filename
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Removed stored file %s", path)
        return True

    def _reject(self, original_name: str, size: int) -> None:
        logger.warning(
            "Rejected upload %r: %s bytes exceeds limit of %s", original_name, size, self.max_bytes
        )
        raise PayloadTooLargeError(
            f"File size must not exceed {self.max_bytes // (1024 * 1024)} MB."
            if self.max_bytes >= 1024 * 1024
            else f"File size must not exceed {self.max_bytes} bytes."
        )
