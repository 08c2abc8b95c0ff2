import pytest

from seoscope.services import mobile


def test_header_mode_requires_viewport_header():
    assert mobile.is_mobile_friendly("header", {"viewport": "width=device-width, initial-scale=1"})
    assert mobile.is_mobile_friendly("header", {"Viewport": "WIDTH=DEVICE-WIDTH"})
    assert not mobile.is_mobile_friendly("header", {"viewport": "width=1024"})
    assert not mobile.is_mobile_friendly("header", {})


def test_header_mode_ignores_document_viewport():
    assert not mobile.is_mobile_friendly("header", {}, "width=device-width, initial-scale=1")


def test_document_mode_reads_meta_viewport():
    assert mobile.is_mobile_friendly("document", {}, "width=device-width, initial-scale=1")
    assert not mobile.is_mobile_friendly("document", {"viewport": "width=device-width"}, "")


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        mobile.is_mobile_friendly("guess", {})
