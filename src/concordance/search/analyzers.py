"""Line analysis for the concordance: normalization, tokenization, stop words.

The pipeline mirrors a composable tokenizer/filter design: a raw line is
normalized once, split into case-preserving tokens, and a stop filter reduces
those tokens to the content words that anchor context windows.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import re


# Anything that is neither a Unicode letter/digit nor whitespace. ``\w`` also
# matches "_" so it is listed explicitly.
_PUNCTUATION_RE = re.compile(r"[^\w\s]|_", re.UNICODE)
_WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)


@dataclass(frozen=True, slots=True)
class AnalyzedLine:
    """A normalized line and the ordered tokens split from it."""

    normalized: str
    tokens: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.tokens)


def normalize_line(raw: str) -> str:
    """Strip punctuation and collapse whitespace, preserving case."""
    without_punctuation = _PUNCTUATION_RE.sub("", raw)
    return _WHITESPACE_RE.sub(" ", without_punctuation).strip()


def tokenize(normalized: str) -> tuple[str, ...]:
    """Split a normalized line on whitespace."""
    return tuple(normalized.split())


def analyze_line(raw: str) -> AnalyzedLine:
    normalized = normalize_line(raw)
    return AnalyzedLine(normalized=normalized, tokens=tokenize(normalized))


class StopWordSet:
    """Immutable set of lowercase stop words."""

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words = frozenset(word.strip().lower() for word in words if word.strip())

    @classmethod
    def empty(cls) -> StopWordSet:
        return cls()

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __bool__(self) -> bool:
        return bool(self._words)

    def __iter__(self):
        return iter(sorted(self._words))

    def __repr__(self) -> str:
        return f"StopWordSet({len(self._words)} words)"


def filter_content_words(tokens: Sequence[str], stopwords: StopWordSet) -> list[str]:
    """Return tokens whose lowercase form is not a stop word.

    Order and repetitions are preserved; an empty stop-word set returns the
    tokens unchanged.
    """
    if not stopwords:
        return list(tokens)
    return [token for token in tokens if token not in stopwords]
