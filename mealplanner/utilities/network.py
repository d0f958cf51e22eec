"""Network helper used by the uvicorn entry point.

Finds the LAN address of this machine so the startup banner can tell the
frontend developer where the API is reachable from other devices.
"""
import socket


def get_local_ip() -> str:
    """Return a non-loopback local IP address if possible, otherwise '127.0.0.1'.

    Connecting a UDP socket sends nothing; it only makes the OS choose the
    outgoing interface.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("10.255.255.255", 1))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip
