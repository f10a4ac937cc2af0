"""Core type definitions for Snapshot Binding."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, Union


class BindingKind(Enum):
    """Enumeration of supported binding kinds."""
    FIELD = "field"
    OBJECT = "object"
    LIST = "list"
    DICTIONARY = "dictionary"


class TargetKind(Enum):
    """Whether a bindable type captures its enclosing key."""
    SNAPSHOT = "snapshot"
    OBJECT = "object"


class ValueKind(Enum):
    """Enumeration of value kinds found in a store tree."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    NODE = "node"
    SEQUENCE = "sequence"


class FailureReason(Enum):
    """Enumeration of binding failure reasons."""
    UNBOUND_KEY = "unbound_key"
    TYPE_MISMATCH = "type_mismatch"
    MALFORMED_NODE = "malformed_node"
    MISSING_IDENTITY = "missing_identity"
    KEY_COLLISION = "key_collision"


class BindingFailure(Exception):
    """Raised when a key/value pair cannot be bound or serialized."""

    def __init__(self, key: str, cause: str,
                 reason: FailureReason = FailureReason.UNBOUND_KEY):
        super().__init__(cause)
        self.key = key
        self.cause = cause
        self.reason = reason

    @classmethod
    def unbound(cls, key: str) -> 'BindingFailure':
        return cls(key, f"no binding found for key '{key}'", FailureReason.UNBOUND_KEY)


@dataclass(frozen=True)
class DataSnapshot:
    """A key and its fully materialized value, as read from the store."""
    key: str
    value: Any = None


@dataclass
class CheckResult:
    """Result of checking a tree against a bindable type."""
    success: bool
    target: str
    object_count: int = 0
    errors: List[str] = field(default_factory=list)
    failed_key: Optional[str] = None


# Abstract base classes for interfaces

class ParserInterface(ABC):
    """Abstract interface for snapshot parsers."""

    @abstractmethod
    def parse(self, snapshot: DataSnapshot, cls: Type[Any]) -> Any:
        """Parse a single snapshot into an instance of cls."""
        pass

    @abstractmethod
    def parse_as_list(self, snapshot: Union[DataSnapshot, Mapping[str, Any]],
                      cls: Type[Any]) -> List[Any]:
        """Parse a tree of nodes into a list of cls instances."""
        pass


class SerializerInterface(ABC):
    """Abstract interface for snapshot serializers."""

    @abstractmethod
    def serialize(self, obj: Any) -> Dict[str, Any]:
        """Serialize a bindable instance into a plain tree."""
        pass
