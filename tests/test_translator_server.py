from __future__ import annotations

import io

import pytest

from metar_translator.config import TranslatorSettings
from metar_translator.mcp.stdio_framing import encode_message, iter_messages
from metar_translator.mcp_servers import translator_server
from metar_translator.mcp_servers.translator_server import handle_message, serve


SETTINGS = TranslatorSettings()


def _call(arguments, req_id=7, settings=SETTINGS):
    return handle_message(
        {"jsonrpc": "2.0", "id": req_id, "method": "tools/call", "params": {"name": "translate_report", "arguments": arguments}},
        settings,
    )


@pytest.mark.unit
def test_initialize_and_tools_list() -> None:
    init = handle_message({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}, SETTINGS)
    assert init["result"]["serverInfo"]["name"] == "metar_translator"

    tools = handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}, SETTINGS)
    (tool,) = tools["result"]["tools"]
    assert tool["name"] == "translate_report"
    assert tool["inputSchema"]["required"] == ["report"]


@pytest.mark.unit
def test_translate_report_tool_returns_text_and_segments() -> None:
    resp = _call({"report": "LFPG VRB05KT ZZ"})
    result = resp["result"]
    assert result["content"] == [{"type": "text", "text": "Station: LFPG\nWind: variable wind at 5 knots."}]
    segments = result["structured"]["segments"]
    assert [s["category"] for s in segments] == ["station", "wind", "weather_phenomenon"]
    assert segments[2]["text"] is None


@pytest.mark.unit
def test_translate_report_tool_arguments_override_settings() -> None:
    resp = _call({"report": "LFPG Q1013", "language": "fr", "separator": "<br>"})
    assert resp["result"]["structured"]["text"] == "Station: LFPG<br>Pression atmosphérique: 1013 hPa."


@pytest.mark.unit
def test_translate_report_tool_empty_report() -> None:
    resp = _call({"report": ""})
    assert resp["result"]["structured"]["text"] == "Please provide a METAR or TAF report."
    assert resp["result"]["structured"]["segments"] == []


@pytest.mark.unit
def test_invalid_params_and_unknown_methods() -> None:
    assert _call({"report": 42})["error"]["code"] == -32602
    assert _call({"report": "LFPG", "language": "de"})["error"]["code"] == -32602

    unknown_tool = handle_message(
        {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "get_atis", "arguments": {}}}, SETTINGS
    )
    assert unknown_tool["error"]["code"] == -32601

    unknown_method = handle_message({"jsonrpc": "2.0", "id": 4, "method": "resources/list"}, SETTINGS)
    assert unknown_method["error"]["code"] == -32601


@pytest.mark.unit
def test_unexpected_tool_failure_becomes_jsonrpc_error(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(translator_server, "translate_report", boom)
    assert _call({"report": "LFPG"})["error"] == {"code": -32000, "message": "boom"}


@pytest.mark.unit
def test_notifications_get_no_response() -> None:
    assert handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"}, SETTINGS) is None
    assert handle_message(["not", "a", "dict"], SETTINGS) is None


@pytest.mark.unit
def test_serve_round_trip() -> None:
    stdin = io.BytesIO(
        encode_message({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
        + encode_message({"jsonrpc": "2.0", "method": "notifications/initialized"})
        + encode_message(
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "translate_report", "arguments": {"report": "EGLL M05/M10"}},
            }
        )
    )
    stdout = io.BytesIO()
    assert serve(stdin, stdout, SETTINGS) == 0

    responses = list(iter_messages(io.BytesIO(stdout.getvalue())))
    assert [r["id"] for r in responses] == [1, 2]
    assert responses[1]["result"]["content"][0]["text"] == "Station: EGLL\nTemperature: -5°C, Dew point: -10°C."


@pytest.mark.unit
def test_serve_stops_on_protocol_error() -> None:
    stdout = io.BytesIO()
    assert serve(io.BytesIO(b"Content-Length: nope\r\n\r\n{}"), stdout, SETTINGS) == 1
    assert stdout.getvalue() == b""
