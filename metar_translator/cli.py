"""Command-line front end: translate a report given as arguments or on stdin."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, TextIO

import yaml

from .aviation import HTML_SEPARATOR, PHRASEBOOKS, ReportDecodeError, decode_report, translate_report
from .config import load_settings
from .logging_config import configure_logging


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="metar-translate",
        description="Translate a METAR/TAF report into plain-language sentences.",
    )
    parser.add_argument("report", nargs="*", help="Report groups; read from stdin when omitted")
    parser.add_argument("--config", default=None, help="Path to translator YAML config")
    parser.add_argument("--language", choices=sorted(PHRASEBOOKS), default=None, help="Output language")
    sep = parser.add_mutually_exclusive_group()
    sep.add_argument("--separator", default=None, help="Fragment separator (\\n accepted)")
    sep.add_argument("--html", action="store_true", help=f"Join fragments with {HTML_SEPARATOR}")
    parser.add_argument("--json", action="store_true", help="Print per-token classification as JSON")
    parser.add_argument("--log-level", default=None, help="Log level (default INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None, *, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    args = parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        settings = load_settings(
            args.config,
            language=args.language,
            separator=HTML_SEPARATOR if args.html else args.separator,
            log_level=args.log_level,
        )
        configure_logging(settings.log_level, settings.log_format)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    report = " ".join(args.report) if args.report else stdin.read()

    if args.json:
        try:
            segments = decode_report(report, language=settings.language)
        except ReportDecodeError as exc:
            print(f"Failed to decode report: {exc}", file=sys.stderr)
            return 1
        json.dump([s.as_dict() for s in segments], stdout, ensure_ascii=False, indent=2)
        stdout.write("\n")
        return 0

    stdout.write(translate_report(report, language=settings.language, separator=settings.separator))
    stdout.write("\n")
    return 0
