from __future__ import annotations

"""
Network Infrastructure Layer.

Resolves the address of the current host once per process. The value
is rendered in the `serverIp` log field.
"""

import functools
import logging
import socket

logger = logging.getLogger(__name__)

LOOPBACK_ADDRESS = "127.0.0.1"
# Connecting a UDP socket sends no packet; it only selects the outbound interface
_PROBE_TARGET = ("10.255.255.255", 1)


@functools.lru_cache(maxsize=1)
def get_server_ip() -> str:
    """
    Return the primary IPv4 address of this host.

    Falls back to the hostname lookup and finally to the loopback
    address when the host has no routable interface.

    Returns:
        str: Dotted-quad IPv4 address.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(_PROBE_TARGET)
            address = s.getsockname()[0]
            if address and not address.startswith("0."):
                return address
    except OSError as e:
        logger.debug(f"Outbound interface probe failed: {e}")

    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as e:
        logger.debug(f"Hostname lookup failed: {e}. Using loopback address.")
        return LOOPBACK_ADDRESS
