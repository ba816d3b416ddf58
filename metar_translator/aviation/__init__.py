"""Aviation report translation (deterministic METAR/TAF token decoding)."""

from .classifier import Category, ClassifiedSegment, classify, classify_tokens
from .decoders import decode
from .report import (
    HTML_SEPARATOR,
    NEWLINE_SEPARATOR,
    DecodedSegment,
    ReportDecodeError,
    decode_report,
    translate_report,
)
from .tables import PHRASEBOOKS, Phrasebook, get_phrasebook
from .tokenizer import join_tokens, tokenize

__all__ = [
    "Category",
    "ClassifiedSegment",
    "DecodedSegment",
    "HTML_SEPARATOR",
    "NEWLINE_SEPARATOR",
    "PHRASEBOOKS",
    "Phrasebook",
    "ReportDecodeError",
    "classify",
    "classify_tokens",
    "decode",
    "decode_report",
    "get_phrasebook",
    "join_tokens",
    "tokenize",
    "translate_report",
]
