# sevasetu/session/media.py
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass


@dataclass(frozen=True)
class DataUri:
    mime_type: str
    data: bytes


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_uri(uri: str) -> DataUri:
    """
    Split a base64 `data:` URI into MIME type and raw bytes.

    Raises ValueError for anything that is not a base64 data URI.
    """
    if not uri.startswith("data:") or "," not in uri:
        raise ValueError("Not a data URI")

    header, payload = uri[5:].split(",", 1)
    params = header.split(";")
    if "base64" not in params[1:]:
        raise ValueError("Only base64 data URIs are supported")

    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return DataUri(mime_type=params[0] or "application/octet-stream", data=data)
