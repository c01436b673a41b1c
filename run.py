import socket

import uvicorn

from barangay.core.config import settings
from barangay.services.qr_service import QRService


def get_lan_ip() -> str:
    """
    Address of the interface that routes outward. A UDP connect sends no
    packets, it only picks the route.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            sock.connect(("8.8.8.8", 80))
            return sock.getsockname()[0]
        except OSError:
            return "127.0.0.1"


def main():
    lan_ip = get_lan_ip()
    port = settings.PORT

    url = f"http://{lan_ip}:{port}"
    print("\n" + "=" * 60)
    print("🚀 SERVER STARTING")
    print(f"📡 LAN URL:  {url}")
    print(f"🏠 Local:    http://127.0.0.1:{port}")
    print("-" * 60)
    print("📱 Scan this QR code to open the application on a mobile device:")
    print(QRService.render_ascii(url))
    print("=" * 60 + "\n")

    uvicorn.run(
        "barangay.main:app",
        host="0.0.0.0",
        port=port,
    )


if __name__ == "__main__":
    main()
