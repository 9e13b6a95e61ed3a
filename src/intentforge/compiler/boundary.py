"""Boundary token extraction around a text fragment."""

from __future__ import annotations

from dataclasses import dataclass

ESCAPED_QUESTION_MARK = "\\?"


@dataclass(frozen=True)
class Boundaries:
    """Tokens surrounding a fragment occurrence.

    Attributes:
        left: Last token before the fragment, None at the sentence start.
        right: First token after the fragment, None at the sentence end.
    """

    left: str | None
    right: str | None

    @property
    def is_whole_sentence(self) -> bool:
        return self.left is None and self.right is None


def extract_boundaries(sentence: str, fragment: str) -> Boundaries:
    """Find the tokens immediately left and right of ``fragment``.

    Only the first occurrence of ``fragment`` is considered. A bare ``?``
    on the right is escaped to ``\\?`` so that the engine's boundary
    matcher does not read it as a quantifier.

    Args:
        sentence: Original training sentence.
        fragment: Literal substring occurring in ``sentence``.

    Returns:
        Boundaries with the surrounding tokens.

    Raises:
        ValueError: If ``fragment`` does not occur in ``sentence``.
    """
    start = sentence.index(fragment)
    end = start + len(fragment)

    left = None
    if start != 0:
        left_tokens = sentence[:start].split()
        left = left_tokens[-1] if left_tokens else None

    right = None
    if end != len(sentence):
        right_tokens = sentence[end:].split()
        right = right_tokens[0] if right_tokens else None
        if right == "?":
            right = ESCAPED_QUESTION_MARK

    return Boundaries(left=left, right=right)
