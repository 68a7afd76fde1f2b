"""Terminal rendering of connection URIs as QR codes."""

import logging
import sys
from typing import TextIO

import qrcode

logger = logging.getLogger(__name__)


def build_qr(uri: str) -> qrcode.QRCode:
    """Build a QR code holding the connection URI."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=1,
        border=2,
    )
    qr.add_data(uri)
    qr.make(fit=True)
    return qr


def render_terminal_qr(uri: str, out: TextIO | None = None) -> None:
    """Print a scannable QR code for ``uri`` followed by the raw link."""
    out = out or sys.stdout
    out.write("\nScan this QR code with your wallet to connect:\n")
    out.write("=" * 50 + "\n")
    build_qr(uri).print_ascii(out=out, invert=True)
    out.write("=" * 50 + "\n")
    out.write(f"Or open this link: {uri}\n\n")
    out.flush()


def display_uri(uri: str, renderer) -> bool:
    """Render ``uri`` with ``renderer``.

    A renderer failure never aborts pairing; the URI is still delivered
    through the ``qr_ready`` event.

    Returns:
        True if the renderer completed.
    """
    try:
        renderer(uri)
    except Exception as e:
        logger.warning("QR rendering failed, use the qr_ready URI instead: %s", e)
        return False
    return True
