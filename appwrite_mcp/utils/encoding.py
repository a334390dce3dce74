import base64
import binascii
from enum import Enum
from typing import Any

from ..errors import InvalidArgumentsError


def decode_base64(text: str, tool_name: str, field: str) -> bytes:
    """Decode a base64 tool argument, rejecting malformed input."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentsError(tool_name, f"'{field}' is not valid base64 ({e})")


def encode_base64(data: Any) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(bytes(data)).decode("ascii")


def image_result(data: Any, description: str) -> dict:
    """Wrap raw image bytes returned by the avatars service."""
    return {
        "type": "image",
        "description": description,
        "data": encode_base64(data),
    }


def to_jsonable(obj: Any) -> Any:
    """``json.dumps`` default hook for values the SDK may hand back."""
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return encode_base64(obj)
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
