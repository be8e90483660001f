"""Remote address string parser.

Accepted grammar:

    [protocol://][username@]address[:port][:remote_path]

- `protocol` is one of sftp, scp, ftp, ftps; the caller's default applies
  when omitted.
- `username` is everything before the last "@".
- `address` may be an IPv6 literal wrapped in brackets, e.g. "[::1]".
- `port` is only recognised when the segment after the address is all
  digits; anything else is taken as the remote path.
"""

from __future__ import annotations

import re

from .params import ConnectionParams, FileTransferProtocol


class AddressParseError(ValueError):
    """Raised when a remote address string cannot be parsed."""


_PROTOCOL_RE = re.compile(r"^([A-Za-z0-9]+)://(.*)$")
_IPV6_RE = re.compile(r"^\[([^\]]+)\](.*)$")
_PORT_RE = re.compile(r"^[0-9]{1,5}$")


def _split_protocol(
    text: str, default_protocol: FileTransferProtocol
) -> tuple[FileTransferProtocol, str]:
    m = _PROTOCOL_RE.match(text)
    if not m:
        return default_protocol, text
    try:
        protocol = FileTransferProtocol.from_name(m.group(1))
    except ValueError as e:
        raise AddressParseError(str(e)) from None
    return protocol, m.group(2)


def _split_address(host_part: str) -> tuple[str, str | None]:
    """Split "address[:rest]" into (address, rest), honouring IPv6 brackets."""
    m = _IPV6_RE.match(host_part)
    if m:
        address, tail = m.group(1), m.group(2)
        if not tail:
            return address, None
        if not tail.startswith(":"):
            raise AddressParseError(f"Unexpected characters after IPv6 address: '{tail}'")
        return address, tail[1:]
    if ":" in host_part:
        address, rest = host_part.split(":", 1)
        return address, rest
    return host_part, None


def _split_port(rest: str | None) -> tuple[int | None, str | None]:
    """Split "[port][:remote_path]" into (port, remote_path)."""
    if rest is None:
        return None, None
    head, sep, tail = rest.partition(":")
    if not _PORT_RE.match(head):
        # Not a port: the whole segment is the remote path
        return None, rest or None
    port = int(head)
    if port > 65535:
        raise AddressParseError(f"Port must be in range [0-65535], got {port}")
    return port, (tail or None) if sep else None


def parse_address(
    text: str,
    default_protocol: FileTransferProtocol = FileTransferProtocol.SFTP,
) -> ConnectionParams:
    """Parse a remote address string into connection parameters.

    Args:
        text: e.g. "scp://alice@example.com:2222:/srv/www".
        default_protocol: Protocol used when the string has no "proto://" prefix.

    Returns:
        The parsed ConnectionParams.

    Raises:
        AddressParseError: If the string is empty, names an unknown protocol,
            has no address or carries an out-of-range port.
    """
    text = text.strip()
    if not text:
        raise AddressParseError("Address is empty")

    protocol, rest = _split_protocol(text, default_protocol)

    username: str | None = None
    at_idx = rest.rfind("@")
    if at_idx != -1:
        username = rest[:at_idx] or None
        rest = rest[at_idx + 1 :]

    address, tail = _split_address(rest)
    if not address:
        raise AddressParseError(f"Missing address in '{text}'")
    port, remote_path = _split_port(tail)

    return ConnectionParams(
        protocol=protocol,
        address=address,
        port=port if port is not None else protocol.default_port,
        username=username,
        remote_path=remote_path,
    )
