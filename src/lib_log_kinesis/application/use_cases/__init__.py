"""Application use cases executed by the hook."""

from __future__ import annotations

from .dispatch import DiagnosticHook, dispatch_sync, spawn_dispatch

__all__ = ["DiagnosticHook", "dispatch_sync", "spawn_dispatch"]
