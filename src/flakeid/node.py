"""Default node identity derived from the host's network addresses."""

import ipaddress
import logging
import socket

import psutil

logger = logging.getLogger(__name__)


def machine_id() -> tuple[int, int]:
    """Return a (group_id, worker_id) pair for this host.

    Uses the third and fourth octets of the first non-loopback IPv4
    address found on any interface. Falls back to (0, 0) when the
    interfaces cannot be read or none carries a usable address.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, psutil.Error) as e:
        logger.debug("Could not enumerate network interfaces: %s", e)
        return 0, 0

    for name, addrs in interfaces.items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            try:
                ip = ipaddress.IPv4Address(addr.address)
            except ValueError:
                continue
            if ip.is_loopback:
                continue
            octets = ip.packed
            logger.debug("Node identity taken from %s (%s)", name, ip)
            return octets[2], octets[3]

    logger.debug("No non-loopback IPv4 address found, using node identity (0, 0)")
    return 0, 0
