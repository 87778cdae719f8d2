"""Utility functions for parsing model responses and photo payloads."""
import base64
import binascii
import re

from ..services.llm.base import MediaPart

_DATA_URI_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[\w.+-]+=[^;,]*)*)(?P<b64>;base64)?,(?P<data>.*)$",
    re.DOTALL,
)


def extract_json_from_text(text: str) -> str:
    """
    Extracts JSON string from text, processing markdown blocks and finding the first/last brace.
    """
    cleaned = text.strip()

    # Remove markdown code blocks
    if "```" in cleaned:
        pattern = r"```(?:json)?\s*(\{.*?\})\s*```"
        match = re.search(pattern, cleaned, re.DOTALL)
        if match:
            return match.group(1)

    # Fallback: Find first { and last }
    start = cleaned.find("{")
    end = cleaned.rfind("}")

    if start != -1 and end != -1 and end > start:
        return cleaned[start:end + 1]

    return cleaned


def parse_data_uri(uri: str) -> MediaPart:
    """Decode a base64 ``data:`` URI into a media part for the model."""
    match = _DATA_URI_PATTERN.match(uri.strip())
    if match is None or not match.group("b64"):
        raise ValueError("Photo must be a base64 data URI")
    mime_type = match.group("mime") or "application/octet-stream"
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as err:
        raise ValueError(f"Photo data URI has invalid base64 payload: {err}") from err
    if not data:
        raise ValueError("Photo data URI has an empty base64 payload")
    return MediaPart(mime_type=mime_type, data=data)


def encode_data_uri(data: bytes, mime_type: str | None) -> str:
    """Encode raw upload bytes as a base64 ``data:`` URI."""
    resolved = mime_type or "application/octet-stream"
    return f"data:{resolved};base64,{base64.b64encode(data).decode('ascii')}"
