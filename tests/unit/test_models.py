"""Tests for wire models and stream event parsing."""

import pytest

from easyrag_sdk import (
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    QueryResponse,
    SearchFilter,
    UploadResponse,
    parse_stream_event,
)

UPLOAD_PAYLOAD = {
    "success": True,
    "message": "Uploaded 1 file",
    "files": [
        {
            "customerId": "cus_1",
            "datasetId": "my-dataset",
            "fileId": "f_1",
            "filePath": "cus_1/my-dataset/f_1.mp3",
            "originalName": "talk.mp3",
            "mimeType": "audio/mpeg",
            "size": 2048,
            "loaderId": "audio",
            "created": "2024-05-01T10:00:00.000Z",
            "extension": ".mp3",
            "transcriptionText": "hello there",
            "transcriptionSrt": [
                {"id": "1", "startTime": "00:00:00,000", "endTime": "00:00:01,500", "text": "hello there"}
            ],
            "extraMeta": {"speaker": "ana"},
            "futureField": {"nested": [1, 2]},
        }
    ],
    "billed": {"fileCount": 1, "uploadUnits": 3},
}


class TestWireModels:
    def test_snake_case_access(self):
        response = UploadResponse.model_validate(UPLOAD_PAYLOAD)
        stored = response.files[0]

        assert stored.file_id == "f_1"
        assert stored.original_name == "talk.mp3"
        assert stored.transcription_srt[0].start_time == "00:00:00,000"
        assert stored.extra_meta == {"speaker": "ana"}
        assert stored.permanent_url is None
        assert response.billed.upload_units == 3

    def test_to_wire_returns_received_payload(self):
        response = UploadResponse.model_validate(UPLOAD_PAYLOAD)
        assert response.to_wire() == UPLOAD_PAYLOAD

    def test_query_result_shortcut(self):
        response = QueryResponse.model_validate(
            {"success": True, "data": {"result": "42", "sources": [{"pageContent": "x", "metadata": {}}]}}
        )
        assert response.result == "42"
        assert response.data.sources[0].page_content == "x"

    def test_search_filter_wire_form(self):
        assert SearchFilter.equals("year", 2024).to_wire() == {"key": "year", "match": {"value": 2024}}
        assert SearchFilter.equals("active", True).to_wire() == {"key": "active", "match": {"value": True}}


class TestParseStreamEvent:
    def test_delta(self):
        event = parse_stream_event({"delta": "Hel"})
        assert isinstance(event, DeltaEvent)
        assert event.delta == "Hel"
        assert not event.is_terminal

    def test_done(self):
        event = parse_stream_event({"done": True})
        assert isinstance(event, DoneEvent)
        assert event.is_terminal
        assert event.to_wire() == {"done": True}

    def test_error(self):
        event = parse_stream_event({"error": "LLM unavailable"})
        assert isinstance(event, ErrorEvent)
        assert event.error == "LLM unavailable"
        assert event.is_terminal

    def test_error_takes_precedence(self):
        assert isinstance(parse_stream_event({"delta": "x", "error": "boom"}), ErrorEvent)

    def test_server_type_field_does_not_break_parsing(self):
        event = parse_stream_event({"type": "chunk", "delta": "x"})
        assert isinstance(event, DeltaEvent)

    @pytest.mark.parametrize(
        "payload",
        [{}, {"done": False}, {"delta": 3}, {"sources": []}, [1, 2], "text", None],
    )
    def test_unrecognised_payloads(self, payload):
        assert parse_stream_event(payload) is None
