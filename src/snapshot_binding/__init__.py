"""
Snapshot Binding - Bidirectional binding of store JSON trees.

Maps the dynamically-typed trees of a realtime key-value document store
onto statically declared object graphs, and serializes them back.
"""

from .bindable import BindableObject, BindableSnapshot, Registrar
from .config import BindingConfig
from .models import MISSING
from .parser import SnapshotParser
from .serializer import SnapshotSerializer
from .snapshot_mapper import SnapshotMapper
from .types import BindingFailure, CheckResult, DataSnapshot, FailureReason

__version__ = "1.0.0"
__all__ = [
    "BindableObject",
    "BindableSnapshot",
    "Registrar",
    "BindingConfig",
    "MISSING",
    "SnapshotParser",
    "SnapshotSerializer",
    "SnapshotMapper",
    "BindingFailure",
    "CheckResult",
    "DataSnapshot",
    "FailureReason",
]
