"""
QR code generation service
"""

import io
import qrcode

from app.core.config import settings

class QRService:
    """Service for generating the RSVP QR code printed on invitations"""

    @staticmethod
    def get_qr_url() -> str:
        """Get the URL that the QR code will redirect to"""
        return settings.RSVP_URL

    @staticmethod
    def generate_invitation_qr(format: str = 'PNG') -> bytes:
        """Generate QR code pointing guests to the RSVP page"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.get_qr_url())
        qr.make(fit=True)

        # Create QR code image
        img = qr.make_image(fill_color="black", back_color="white")

        # Convert to bytes
        buffer = io.BytesIO()
        img.save(buffer, format=format)

        return buffer.getvalue()
