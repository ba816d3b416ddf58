from __future__ import annotations

import argparse
import sys
from typing import Any, BinaryIO, Dict, Optional

from metar_translator import __version__
from metar_translator.aviation import PHRASEBOOKS, ReportDecodeError, decode_report, translate_report
from metar_translator.config import TranslatorSettings, load_settings
from metar_translator.config.settings import unescape_separator
from metar_translator.logging_config import configure_logging, get_logger
from metar_translator.mcp.errors import MCPProtocolError
from metar_translator.mcp.stdio_framing import encode_message, iter_messages

logger = get_logger(__name__)

PROTOCOL_VERSION = "2024-11-05"
TOOL_NAME = "translate_report"

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
TOOL_FAILED = -32000


class InvalidParams(ValueError):
    pass


def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": int(code), "message": str(message)}}


def _result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _tools_list() -> Dict[str, Any]:
    return {
        "tools": [
            {
                "name": TOOL_NAME,
                "description": "Translate a raw METAR or TAF report (e.g. 'LFPG 171720Z 24015G25KT 9999 -RA BKN020CB 12/08 Q1013') into plain-language sentences, one per report group.",
                "inputSchema": {
                    "type": "object",
                    "additionalProperties": False,
                    "properties": {
                        "report": {"type": "string", "description": "Raw METAR/TAF text, groups separated by spaces."},
                        "language": {"type": "string", "enum": sorted(PHRASEBOOKS), "description": "Output language (default from server config)."},
                        "separator": {"type": "string", "description": "Fragment separator, e.g. '\\n' or '<br>'."},
                    },
                    "required": ["report"],
                },
            }
        ]
    }


def _handle_translate(*, settings: TranslatorSettings, arguments: Dict[str, Any]) -> Dict[str, Any]:
    report = arguments.get("report")
    if report is not None and not isinstance(report, str):
        raise InvalidParams("'report' must be a string")

    language = arguments.get("language") or settings.language
    if language not in PHRASEBOOKS:
        raise InvalidParams(f"Unsupported language: {language!r}")
    separator = arguments.get("separator")
    separator = unescape_separator(separator) if isinstance(separator, str) and separator else settings.separator

    text = translate_report(report, language=language, separator=separator)
    try:
        segments = [d.as_dict() for d in decode_report(report, language=language)]
    except ReportDecodeError:
        # translate_report has already logged the failure and returned the fixed message.
        segments = []

    return {
        "content": [{"type": "text", "text": text}],
        "structured": {
            "text": text,
            "language": language,
            "segments": segments,
        },
    }


def handle_message(msg: Any, settings: TranslatorSettings) -> Optional[Dict[str, Any]]:
    """Return the JSON-RPC response for one message, or None for notifications."""
    if not isinstance(msg, dict) or "method" not in msg:
        return None
    method = msg.get("method")
    req_id = msg.get("id")
    params = msg.get("params") if isinstance(msg.get("params"), dict) else {}

    try:
        if method == "initialize":
            response = _result(
                req_id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": "metar_translator", "version": __version__},
                },
            )
        elif method == "tools/list":
            response = _result(req_id, _tools_list())
        elif method == "tools/call":
            name = (params.get("name") or "").strip()
            arguments = params.get("arguments") if isinstance(params.get("arguments"), dict) else {}
            if name != TOOL_NAME:
                response = _error(req_id, METHOD_NOT_FOUND, f"Unknown tool: {name}")
            else:
                response = _result(req_id, _handle_translate(settings=settings, arguments=arguments))
        else:
            response = _error(req_id, METHOD_NOT_FOUND, f"Method not found: {method}")
    except InvalidParams as exc:
        response = _error(req_id, INVALID_PARAMS, str(exc))
    except Exception as exc:
        logger.exception("Request failed", method=method)
        response = _error(req_id, TOOL_FAILED, str(exc))

    # Notifications (no id) never get a response.
    if req_id is None:
        return None
    return response


def serve(stdin: BinaryIO, stdout: BinaryIO, settings: TranslatorSettings) -> int:
    logger.info("Translator server started", language=settings.language)
    try:
        for msg in iter_messages(stdin):
            response = handle_message(msg, settings)
            if response is not None:
                stdout.write(encode_message(response))
                stdout.flush()
    except MCPProtocolError as exc:
        logger.error("Protocol error; shutting down", error=str(exc))
        return 1
    logger.info("Translator server stopped (stdin closed)")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="METAR/TAF translator tool server (stdio, JSON-RPC).")
    parser.add_argument("--config", help="Path to translator YAML config", default=None)
    parser.add_argument("--language", choices=sorted(PHRASEBOOKS), default=None, help="Default output language")
    parser.add_argument("--log-level", default=None, help="Log level (default INFO)")
    args = parser.parse_args(argv)

    settings = load_settings(args.config, language=args.language, log_level=args.log_level)
    configure_logging(settings.log_level, settings.log_format)
    return serve(sys.stdin.buffer, sys.stdout.buffer, settings)


if __name__ == "__main__":
    raise SystemExit(main())
