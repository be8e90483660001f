"""Connection parameters produced by the address parser and the SSH-config adapter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FileTransferProtocol(str, Enum):
    SFTP = "sftp"
    SCP = "scp"
    FTP = "ftp"
    FTPS = "ftps"

    @property
    def default_port(self) -> int:
        """Return the well-known port for the protocol."""
        if self in (FileTransferProtocol.FTP, FileTransferProtocol.FTPS):
            return 21
        return 22

    @classmethod
    def from_name(cls, name: str) -> "FileTransferProtocol":
        """Return the protocol for a case-insensitive name.

        Raises:
            ValueError: If the name is not a supported protocol.
        """
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown protocol '{name}'") from None


@dataclass(frozen=True)
class ConnectionParams:
    protocol: FileTransferProtocol
    address: str
    port: int
    username: str | None = None
    remote_path: str | None = None

    @property
    def user_host(self) -> str:
        return f"{self.username}@{self.address}" if self.username else self.address
