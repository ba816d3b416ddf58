from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..logging_config import get_logger
from .classifier import ClassifiedSegment, classify_tokens
from .decoders import decode
from .tables import DEFAULT_LANGUAGE, get_phrasebook
from .tokenizer import tokenize

logger = get_logger(__name__)

NEWLINE_SEPARATOR = "\n"
HTML_SEPARATOR = "<br>"


class ReportDecodeError(RuntimeError):
    """Unexpected failure while classifying or decoding a report."""


@dataclass(frozen=True)
class DecodedSegment:
    segment: ClassifiedSegment
    text: Optional[str] = None  # None when the fragment is dropped

    def as_dict(self) -> dict:
        return {
            "index": self.segment.index,
            "token": self.segment.token,
            "category": self.segment.category.value,
            "text": self.text,
        }


def decode_report(report: Optional[str], *, language: str = DEFAULT_LANGUAGE) -> List[DecodedSegment]:
    """Classify and decode every token of ``report`` in input order.

    Returns one entry per token, including those whose fragment is dropped.
    Raises ``ValueError`` for an unsupported language and
    ``ReportDecodeError`` when decoding fails unexpectedly.
    """
    book = get_phrasebook(language)
    tokens = tokenize(report)
    try:
        return [DecodedSegment(segment=s, text=decode(s, book)) for s in classify_tokens(tokens)]
    except Exception as exc:
        raise ReportDecodeError(f"Failed to decode report: {exc}") from exc


def translate_report(
    report: Optional[str],
    *,
    language: str = DEFAULT_LANGUAGE,
    separator: str = NEWLINE_SEPARATOR,
) -> str:
    """Translate a raw METAR/TAF report into plain-language sentences.

    Empty input yields the phrasebook's prompt message; any unexpected
    decoding failure yields its fixed failure message. Nothing is raised
    except ``ValueError`` for an unsupported language.
    """
    book = get_phrasebook(language)
    if not tokenize(report):
        return book.empty_input

    try:
        decoded = decode_report(report, language=book.language)
    except ReportDecodeError:
        logger.exception("Report translation failed", report=report, language=book.language)
        return book.failure

    fragments = [d.text for d in decoded if d.text]
    logger.debug(
        "Report translated",
        tokens=len(decoded),
        fragments=len(fragments),
        dropped=len(decoded) - len(fragments),
        language=book.language,
    )
    return separator.join(fragments)
