"""The platform peer-messaging primitive wrapped by the transport adapter."""

from __future__ import annotations

from typing import Protocol
from pathlib import Path

from .delegate import LinkDelegate


class PeerLink(Protocol):
    """Three delivery primitives plus connectivity state.

    - ``send_message``: best effort, only while reachable; raises
      ``TransportError`` otherwise. Completion means "handed over", not
      "received".
    - ``transfer_user_info``: queued, delivered once the peer is reachable.
    - ``transfer_file``: side channel for large bodies. The link reads the
      file before returning, so the caller may delete it afterwards.
    """

    @property
    def reachable(self) -> bool: ...

    @property
    def paired(self) -> bool: ...

    @property
    def app_installed(self) -> bool: ...

    async def activate(self, delegate: LinkDelegate) -> None: ...

    async def send_message(self, data: bytes) -> None: ...

    async def transfer_user_info(self, data: bytes) -> None: ...

    async def transfer_file(self, path: Path) -> None: ...

    async def close(self) -> None: ...


__all__ = ["PeerLink"]
