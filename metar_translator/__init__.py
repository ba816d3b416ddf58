"""Plain-language translation of METAR/TAF aviation weather reports."""

from .aviation import DecodedSegment, decode_report, translate_report

__all__ = ["DecodedSegment", "decode_report", "translate_report"]

__version__ = "0.1.0"
