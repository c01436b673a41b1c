import base64
import io
import json

import qrcode

from barangay.core.errors import ValidationError

"""QRService: Issues and reads the scannable login tokens bound to an account identity"""

DATA_URL_PREFIX = "data:image/png;base64,"


class QRService:
    @staticmethod
    def build_payload(identity: str) -> dict:
        # The token payload carries the identity and nothing else
        return {"identity": identity}

    @staticmethod
    def serialize(payload: dict) -> str:
        """
        Serializes the payload deterministically, so the same identity
        always yields the same QR content
        """
        return json.dumps(payload, separators=(",", ":"), sort_keys=True)

    @staticmethod
    def _matrix(data_str: str, border: int) -> qrcode.QRCode:
        # Smallest version that fits, low error correction
        qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_L, border=border)
        qr.add_data(data_str)
        qr.make(fit=True)
        return qr

    @staticmethod
    def create_qr_image(data_str: str) -> str:
        """
        Renders data_str as a PNG and returns it as an inline data URL
        """
        png = io.BytesIO()
        QRService._matrix(data_str, border=4).make_image().save(png, format="PNG")
        return DATA_URL_PREFIX + base64.b64encode(png.getvalue()).decode()

    @staticmethod
    def issue(identity: str) -> tuple[dict, str]:
        payload = QRService.build_payload(identity)
        image = QRService.create_qr_image(QRService.serialize(payload))
        return payload, image

    @staticmethod
    def decode(token_payload: dict | str) -> str:
        """
        Extracts the identity from a scanned token payload, given either as
        the decoded object or as its raw JSON text
        """
        if isinstance(token_payload, str):
            try:
                token_payload = json.loads(token_payload)
            except json.JSONDecodeError:
                raise ValidationError("Token payload is not valid JSON")

        if not isinstance(token_payload, dict):
            raise ValidationError("Token payload must be an object")

        identity = token_payload.get("identity")
        if not isinstance(identity, str) or not identity:
            raise ValidationError("Token payload has no identity")
        return identity

    @staticmethod
    def render_ascii(text: str) -> str:
        """
        Renders text as a QR code made of terminal characters
        """
        out = io.StringIO()
        QRService._matrix(text, border=1).print_ascii(out=out, invert=True)
        return out.getvalue()
