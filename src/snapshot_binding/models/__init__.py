"""Data models for Snapshot Binding."""

from .binding import Accessor, Binding, MISSING, Slot

__all__ = ["Accessor", "Binding", "MISSING", "Slot"]
