"""Turns a "host:port" target into the endpoint probes connect to."""

import logging
import socket

from tcping.errors import ResolutionError, format_error
from tcping.models import Endpoint

logger = logging.getLogger(__name__)

INVALID_TARGET = "Invalid argument. Expected format: 'host:port' (i.e. 'google.com:80')."


def split_target(target: str) -> tuple[str, int]:
    """Split "host:port" (or "[v6addr]:port") into host and port.

    Raises:
        ResolutionError: target is not in host:port form or the port is invalid
    """
    target = target.strip()
    host, sep, port_str = target.rpartition(":")
    if not sep or not host:
        raise ResolutionError(INVALID_TARGET)

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        # Bare IPv6 literal without brackets is ambiguous
        raise ResolutionError(INVALID_TARGET)

    if not host or not port_str.isdigit():
        raise ResolutionError(INVALID_TARGET)

    port = int(port_str)
    if not 0 < port < 65536:
        raise ResolutionError(INVALID_TARGET)

    return host, port


def resolve(target: str) -> Endpoint:
    """Resolve target and keep the first address returned.

    Args:
        target: "host:port" string, e.g. "example.com:443"

    Returns:
        Endpoint for the first resolved address

    Raises:
        ResolutionError: malformed target, lookup failure or no addresses
    """
    host, port = split_target(target)

    try:
        infos = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror as e:
        logger.debug("Resolution failed: target=%s, error=%s", target, e)
        raise ResolutionError(format_error(e.strerror or e)) from e
    except UnicodeError as e:
        raise ResolutionError(INVALID_TARGET) from e

    if not infos:
        raise ResolutionError(f"No addresses found for {host}.")

    family, _socktype, _proto, _canonname, sockaddr = infos[0]
    if family == socket.AF_INET6:
        host, port, flowinfo, scope_id = sockaddr[:4]
        endpoint = Endpoint(host=host, port=port, family=family, flowinfo=flowinfo, scope_id=scope_id)
    else:
        endpoint = Endpoint(host=sockaddr[0], port=sockaddr[1], family=family)
    logger.debug("Resolved %s -> %s (%d addresses)", target, endpoint, len(infos))
    return endpoint
