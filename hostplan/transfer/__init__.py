"""Connection parameters and the remote address parser."""

from .address import AddressParseError, parse_address
from .params import ConnectionParams, FileTransferProtocol

__all__ = [
    "AddressParseError",
    "ConnectionParams",
    "FileTransferProtocol",
    "parse_address",
]
