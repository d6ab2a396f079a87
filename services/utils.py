import base64, binascii, json, re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

DEFAULT_MIME_TYPE = "image/jpeg"

_FENCE_START = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```\s*$")
_DATA_URI = re.compile(r"^data:([\w.+-]+/[\w.+-]+);base64,(.*)$", re.DOTALL)


class ImagePayloadError(ValueError):
    """Raised when an image payload is empty or is not valid base64."""


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE


def strip_code_fences(text: str) -> str:
    text = _FENCE_START.sub("", text or "")
    return _FENCE_END.sub("", text).strip()


def _balanced_object_end(text: str, start: int) -> Optional[int]:
    """Index of the `}` closing the object opened at `start`, ignoring braces in strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the first balanced JSON object embedded in `text`, or None."""
    if not text:
        return None
    for m in re.finditer(r"\{", text):
        end = _balanced_object_end(text, m.start())
        if end is None:
            continue
        try:
            obj = json.loads(text[m.start():end + 1])
        except (ValueError, RecursionError):
            continue
        if isinstance(obj, dict):
            return obj
    return None


def decode_image_payload(payload: Union[str, bytes, None], mime_type: Optional[str] = None) -> ImagePayload:
    """Turn a data URI, bare base64 string or raw bytes into image bytes plus MIME type."""
    if isinstance(payload, (bytes, bytearray)):
        if not payload:
            raise ImagePayloadError("image payload is empty")
        return ImagePayload(bytes(payload), mime_type or DEFAULT_MIME_TYPE)

    if not payload or not payload.strip():
        raise ImagePayloadError("image payload is empty")

    payload = payload.strip()
    m = _DATA_URI.match(payload)
    if m:
        mime_type, b64 = m.group(1), m.group(2)
    else:
        # strip a non-base64 data URI header like the browser FileReader emits
        b64 = payload.split(",")[-1]
    b64 = "".join(b64.split())
    if not b64:
        raise ImagePayloadError("image payload is empty")

    b64 += "=" * (-len(b64) % 4)
    try:
        data = base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImagePayloadError(f"invalid base64 image payload: {e}") from e
    if not data:
        raise ImagePayloadError("image payload is empty")
    return ImagePayload(data, mime_type or DEFAULT_MIME_TYPE)


def to_data_uri(image: ImagePayload) -> str:
    return f"data:{image.mime_type};base64,{base64.b64encode(image.data).decode('ascii')}"
