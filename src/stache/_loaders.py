"""Template source loaders.

A loader fetches the raw bytes of a template by identifier and enforces the
maximum source size. Parsing never sees oversized input.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from stache.exceptions import OversizedSourceError, SourceNotFoundError, SourceReadError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

DEFAULT_MAX_SOURCE_BYTES = 1024 * 1024


class TemplateLoader(Protocol):
    """Fetches template source bytes by identifier."""

    def load(self, identifier: str) -> bytes:
        """Return the raw source of `identifier`.

        Raises:
            SourceNotFoundError: If no source exists for the identifier.
            SourceReadError: If the source exists but cannot be read.
            OversizedSourceError: If the source exceeds the size ceiling.
        """
        ...


def _check_size(identifier: str, data: bytes, max_size: int) -> bytes:
    if len(data) > max_size:
        msg = f"template source exceeds maximum size of {max_size} bytes"
        raise OversizedSourceError(msg, limit=max_size, identifier=identifier)
    return data


class FileSystemLoader:
    """Loads templates from files under one or more directories.

    Directories are searched in order; the first existing file wins. An
    identifier is a path relative to a search directory, with `extension`
    appended. Identifiers that resolve outside every search directory are
    treated as missing.

    Attributes:
        search_path: Directories to search, highest precedence first.
        max_size: Maximum source size in bytes.
        extension: Suffix appended to identifiers, such as ``".mustache"``.
    """

    __slots__ = ("extension", "max_size", "search_path")

    def __init__(
        self,
        search_path: Path | str | Sequence[Path | str] = ".",
        *,
        max_size: int = DEFAULT_MAX_SOURCE_BYTES,
        extension: str = "",
    ) -> None:
        if isinstance(search_path, (str, Path)):
            search_path = [search_path]
        self.search_path: tuple[Path, ...] = tuple(Path(p) for p in search_path)
        self.max_size: int = max_size
        self.extension: str = extension

    def find(self, identifier: str) -> Path | None:
        """Return the file that backs `identifier`, or None if there is none."""
        for base in self.search_path:
            root = base.resolve()
            candidate = (root / f"{identifier}{self.extension}").resolve()
            if candidate.is_relative_to(root) and candidate.is_file():
                return candidate
        return None

    def load(self, identifier: str) -> bytes:
        path = self.find(identifier)
        if path is None:
            raise SourceNotFoundError(identifier=identifier)

        try:
            with path.open("rb") as f:
                data = f.read(self.max_size + 1)
        except OSError as e:
            msg = f"could not read template source: {e}"
            raise SourceReadError(msg, identifier=identifier, cause=e) from e

        return _check_size(identifier, data, self.max_size)


class DictLoader:
    """Loads templates from an in-memory mapping of identifier to source.

    Text sources are encoded as UTF-8 before the size check.
    """

    __slots__ = ("max_size", "sources")

    def __init__(
        self,
        sources: Mapping[str, str | bytes],
        *,
        max_size: int = DEFAULT_MAX_SOURCE_BYTES,
    ) -> None:
        self.sources: dict[str, str | bytes] = dict(sources)
        self.max_size: int = max_size

    def load(self, identifier: str) -> bytes:
        try:
            source = self.sources[identifier]
        except KeyError:
            raise SourceNotFoundError(identifier=identifier) from None

        data = source.encode("utf-8") if isinstance(source, str) else bytes(source)
        return _check_size(identifier, data, self.max_size)
