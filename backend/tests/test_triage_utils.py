import pytest

from health_guide.triage import encode_data_uri, extract_json_from_text, parse_data_uri


def test_extract_json_from_markdown_block():
    text = 'Here you go:\n```json\n{"riskLevel": "Green"}\n```'
    assert extract_json_from_text(text) == '{"riskLevel": "Green"}'


def test_extract_json_from_surrounding_prose():
    assert extract_json_from_text('Result: {"a": 1} done') == '{"a": 1}'


def test_parse_data_uri_decodes_payload():
    part = parse_data_uri(encode_data_uri(b"image-bytes", "image/jpeg"))

    assert part.mime_type == "image/jpeg"
    assert part.data == b"image-bytes"


def test_encode_data_uri_defaults_mime_type():
    assert encode_data_uri(b"x", None).startswith("data:application/octet-stream;base64,")


@pytest.mark.parametrize(
    "uri",
    [
        "https://example.com/rash.png",
        "data:image/png,not-base64-flagged",
        "data:image/png;base64,%%%",
        "data:image/png;base64,",
    ],
)
def test_parse_data_uri_rejects_invalid_input(uri):
    with pytest.raises(ValueError):
        parse_data_uri(uri)
