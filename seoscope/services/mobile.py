"""Mobile-friendliness heuristics.

Two modes are supported:

- ``header``: a response header named ``viewport`` must contain
  ``width=device-width``. This inspects transport metadata rather than the
  document and is kept for compatibility with existing scores.
- ``document``: the parsed ``<meta name="viewport">`` content must contain
  ``width=device-width``.
"""
from typing import Mapping

HEADER_MODE = "header"
DOCUMENT_MODE = "document"
MODES = (HEADER_MODE, DOCUMENT_MODE)

_DEVICE_WIDTH = "width=device-width"


def _has_device_width(value: str) -> bool:
    return _DEVICE_WIDTH in (value or "").lower()


def mobile_friendly_from_headers(headers: Mapping[str, str]) -> bool:
    # Header names are case-insensitive in HTTP.
    for key, value in (headers or {}).items():
        if key.lower() == "viewport":
            return _has_device_width(value)
    return False


def mobile_friendly_from_viewport(viewport_content: str) -> bool:
    return _has_device_width(viewport_content)


def is_mobile_friendly(mode: str, headers: Mapping[str, str], viewport_content: str = "") -> bool:
    if mode == HEADER_MODE:
        return mobile_friendly_from_headers(headers)
    if mode == DOCUMENT_MODE:
        return mobile_friendly_from_viewport(viewport_content)
    raise ValueError(f"Unknown mobile check mode: {mode!r}")
