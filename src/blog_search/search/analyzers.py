"""Analyzer utilities for post search.

Analyzers turn raw field values and query text into tokens that keep their
character offsets, so hits can be reported back as spans inside the
original value. The tokenizer/filter split mirrors Whoosh's composable
design without pulling in the dependency.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


@dataclass(frozen=True)
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens.

    Underscores are treated as separators so ``use_state`` and ``useState``
    both surface their parts.
    """

    def __init__(self, pattern: str = r"[^\W_]+", flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = 2) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        # normalize positions post-filtering
        return [token.copy_with(position=idx) for idx, token in enumerate(stream)]


class StandardAnalyzer:
    """Default analyzer: word tokens, lowercased, short fragments removed."""

    def __init__(self, *, min_length: int = 2) -> None:
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), [LowercaseFilter(), MinLengthFilter(min_length)])

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text)


class KeywordAnalyzer:
    """Analyzer that treats the entire (lowercased) input as a single token."""

    def __init__(self, *, min_length: int = 2) -> None:
        self.min_length = min_length

    def __call__(self, text: str) -> list[Token]:
        stripped = text.strip()
        if len(stripped) < self.min_length:
            return []
        start = text.index(stripped)
        return [Token(text=stripped.lower(), position=0, start_char=start, end_char=start + len(stripped))]


_ANALYZER_FACTORIES: dict[str, Callable[[int], Analyzer]] = {
    "default": lambda min_length: StandardAnalyzer(min_length=min_length),
    "standard": lambda min_length: StandardAnalyzer(min_length=min_length),
    "keyword": lambda min_length: KeywordAnalyzer(min_length=min_length),
}


def get_analyzer(name: str | None, *, min_length: int = 2) -> Analyzer:
    """Return analyzer by name, defaulting to the standard analyzer."""

    if name is None:
        return _ANALYZER_FACTORIES["default"](min_length)
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized](min_length)
