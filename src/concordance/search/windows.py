"""Cyclic context-window construction.

A line's tokens live in one immutable ``TokenRing``; a rotation is a
``RotatedView`` (ring plus offset) read with wrap-around, so building windows
never copies the token list until the context string is joined.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenRing:
    """The tokens of one line, addressable modulo their length."""

    tokens: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index % len(self.tokens)]

    def occurrences(self, word: str) -> Iterator[int]:
        """Yield every index holding ``word`` (exact, case-sensitive)."""
        for index, token in enumerate(self.tokens):
            if token == word:
                yield index

    def rotate(self, offset: int) -> RotatedView:
        return RotatedView(self, offset)


@dataclass(frozen=True, slots=True)
class RotatedView:
    """The ring read from ``offset`` around to ``offset - 1``."""

    ring: TokenRing
    offset: int

    def __len__(self) -> int:
        return len(self.ring)

    def __iter__(self) -> Iterator[str]:
        for i in range(len(self.ring)):
            yield self.ring[self.offset + i]

    def text(self) -> str:
        return " ".join(self)


@dataclass(frozen=True, slots=True)
class WindowDraft:
    """A context window before it is bound to a line and document."""

    position: int
    word: str
    content: str


def build_windows(tokens: Sequence[str], content_words: Sequence[str]) -> list[WindowDraft]:
    """Emit one rotated window per occurrence of each content word.

    Content words are processed in order and repeated words are NOT
    deduplicated: a word listed twice yields its full set of rotations twice,
    each with its own position.
    """
    ring = TokenRing(tuple(tokens))
    if not ring.tokens:
        return []

    drafts: list[WindowDraft] = []
    for word in content_words:
        anchor = word.lower()
        for index in ring.occurrences(word):
            drafts.append(
                WindowDraft(
                    position=len(drafts) + 1,
                    word=anchor,
                    content=ring.rotate(index).text(),
                )
            )
    return drafts
