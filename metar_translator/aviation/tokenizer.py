from __future__ import annotations

from typing import Iterable, List, Optional


def tokenize(report: Optional[str]) -> List[str]:
    """Split a raw report into whitespace-delimited tokens, preserving order."""
    return (report or "").split()


def join_tokens(tokens: Iterable[str]) -> str:
    return " ".join(tokens)
