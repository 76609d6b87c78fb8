"""Collects context files and queries from disk for the compiler."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from plc.errors import InvalidInputError
from plc.ingest.parser import ParserRegistry

logger = logging.getLogger(__name__)

_SKIP_DIRS = frozenset({".git", "node_modules"})


class ContextLoader:
    """Turns file and directory paths into one raw context string.

    Each file is prefixed with an HTML comment naming its source so that the
    provenance survives into the compiled prompt.
    """

    def __init__(self, parser_registry: ParserRegistry | None = None) -> None:
        self._parsers = parser_registry or ParserRegistry()

    def discover(self, path: str | Path) -> list[Path]:
        """List context files under ``path``; a file path is returned as-is."""

        root = Path(path)
        if root.is_file():
            return [root]

        found: list[Path] = []
        for child in sorted(root.iterdir()):
            if child.is_dir():
                if child.name in _SKIP_DIRS:
                    continue
                found.extend(self.discover(child))
            elif self._parsers.supports(child):
                found.append(child)
        return found

    def load(self, paths: str | Iterable[str | Path], cwd: str | Path | None = None) -> str:
        """Load and concatenate every context file reachable from ``paths``.

        ``paths`` may be a comma-separated string. Relative paths resolve
        against ``cwd``; paths that do not exist are skipped.
        """

        base = Path(cwd) if cwd is not None else Path.cwd()
        if isinstance(paths, str):
            entries = [part.strip() for part in paths.split(",") if part.strip()]
        else:
            entries = [str(part) for part in paths]

        files: list[Path] = []
        for entry in entries:
            target = (base / entry).resolve()
            if not target.exists():
                logger.warning("Context path not found, skipping: %s", entry)
                continue
            files.extend(self.discover(target))

        logger.debug("Loading %d context file(s)", len(files))
        resolved_base = base.resolve()
        return "\n".join(
            f"\n\n<!-- source: {os.path.relpath(path, resolved_base)} -->\n" + self._read(path)
            for path in files
        )

    def _read(self, path: Path) -> str:
        # Explicitly named files are accepted whatever their extension.
        if self._parsers.supports(path):
            return self._parsers.parse_path(path)
        return path.read_text(encoding="utf-8")


def load_query(raw: str | None) -> str:
    """Return the query text; ``@path`` reads it from a UTF-8 file."""

    if not raw:
        raise InvalidInputError("query")
    if raw.startswith("@"):
        return Path(raw[1:]).read_text(encoding="utf-8")
    return raw
