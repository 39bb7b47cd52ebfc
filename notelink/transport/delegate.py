"""Callbacks a peer link invokes on its owner."""

from __future__ import annotations

from typing import Protocol
from pathlib import Path


class LinkDelegate(Protocol):
    """Receiver side of a ``PeerLink``.

    Callbacks are synchronous. ``on_file`` receives a path that is only
    guaranteed to exist until the callback returns; implementations must read
    the body before returning.
    """

    def on_activation(self, error: str | None) -> None: ...

    def on_message(self, data: bytes) -> None: ...

    def on_user_info(self, data: bytes) -> None: ...

    def on_file(self, path: Path) -> None: ...

    def on_reachability_changed(self, reachable: bool) -> None: ...

    def on_pairing_changed(self, paired: bool, app_installed: bool) -> None: ...


__all__ = ["LinkDelegate"]
