"""Tests for response decoding and display."""

from __future__ import annotations

import json

import httpx

from gapispec.client.response import extract_response_data, format_api_response
from gapispec.output import OutputFormat, OutputManager, set_output


class TestExtractResponseData:
    def test_json(self) -> None:
        response = httpx.Response(200, json={"kind": "youtube#video"})
        assert extract_response_data(response) == {"kind": "youtube#video"}

    def test_json_list(self) -> None:
        response = httpx.Response(200, json=[1, 2, 3])
        assert extract_response_data(response) == [1, 2, 3]

    def test_text(self) -> None:
        response = httpx.Response(200, text="<html>not json</html>")
        assert extract_response_data(response) == "<html>not json</html>"

    def test_empty(self) -> None:
        assert extract_response_data(httpx.Response(204)) is None


class TestFormatApiResponse:
    def test_json_payload_to_stdout(self, capsys) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        format_api_response({"items": [{"id": "a"}]})
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"items": [{"id": "a"}]}
        assert captured.err == ""

    def test_empty_payload_goes_to_stderr(self, capsys) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        format_api_response(None)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "(empty response)" in captured.err
