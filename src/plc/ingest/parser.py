"""Readers for the context document formats the compiler accepts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class Parser(ABC):
    """Base parser interface used by the context loader."""

    extensions: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, path: Path) -> str:
        """Return the document text to feed into the compiler."""


class TextParser(Parser):
    """Parser for plain text documents."""

    extensions = (".txt",)

    def parse(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class MarkdownParser(Parser):
    """Parser for markdown and editor rule (``.mdc``) documents."""

    extensions = (".md", ".mdc", ".markdown")

    def parse(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class ParserRegistry:
    """Maps file extension to parser implementation."""

    def __init__(self, parsers: list[Parser] | None = None) -> None:
        self._parsers: dict[str, Parser] = {}
        for parser in parsers or [TextParser(), MarkdownParser()]:
            self.register(parser)

    def register(self, parser: Parser) -> None:
        for extension in parser.extensions:
            self._parsers[extension.lower()] = parser

    def supports(self, path: str | Path) -> bool:
        return Path(path).suffix.lower() in self._parsers

    def parse_path(self, path: str | Path) -> str:
        file_path = Path(path)
        parser = self._parsers.get(file_path.suffix.lower())
        if parser is None:
            raise ValueError(f"No parser registered for extension: {file_path.suffix}")
        return parser.parse(file_path)
