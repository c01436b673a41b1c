import base64

import pytest

from barangay.core.errors import ValidationError
from barangay.services.qr_service import DATA_URL_PREFIX, QRService


def test_issue_payload_holds_only_identity():
    payload, _ = QRService.issue("alice")
    assert payload == {"identity": "alice"}


def test_issue_image_is_inline_png():
    _, image = QRService.issue("alice")
    assert image.startswith(DATA_URL_PREFIX)
    png = base64.b64decode(image[len(DATA_URL_PREFIX):])
    assert png[:8] == b"\x89PNG\r\n\x1a\n"


def test_payload_serialization_is_deterministic():
    first, _ = QRService.issue("alice")
    second, _ = QRService.issue("alice")
    assert QRService.serialize(first) == QRService.serialize(second) == '{"identity":"alice"}'


def test_decode_accepts_object_and_json_text():
    assert QRService.decode({"identity": "alice"}) == "alice"
    assert QRService.decode('{"identity":"alice"}') == "alice"


@pytest.mark.parametrize("bad", [None, "not json", "[]", {}, {"identity": ""}, {"identity": 42}, {"username": "alice"}])
def test_decode_rejects_payloads_without_identity(bad):
    with pytest.raises(ValidationError):
        QRService.decode(bad)


def test_render_ascii_produces_terminal_text():
    art = QRService.render_ascii("http://127.0.0.1:5000")
    assert len(art.splitlines()) > 10
    assert any(block in art for block in "▀▄█")
