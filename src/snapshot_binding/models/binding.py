"""Binding descriptor model implementation."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from ..types import BindingKind


class _Missing:
    """Marker for values that were never bound."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Accessor:
    """
    Reads and writes one attribute of a bindable instance.

    Only attributes stored on the instance itself count as bound, so
    class-level defaults read back as MISSING.
    """

    attribute: str

    def __post_init__(self):
        if not self.attribute:
            raise ValueError("attribute cannot be empty")

    def get(self, target: Any) -> Any:
        return vars(target).get(self.attribute, MISSING)

    def set(self, target: Any, value: Any) -> None:
        setattr(target, self.attribute, value)

    def clear(self, target: Any) -> None:
        if self.attribute in vars(target):
            delattr(target, self.attribute)

    def bind(self, target: Any) -> 'Slot':
        """Bind this accessor to one target instance."""
        return Slot(target, self)


@dataclass(frozen=True)
class Slot:
    """An accessor bound to a target instance."""

    target: Any
    accessor: Accessor

    def get(self) -> Any:
        return self.accessor.get(self.target)

    def set(self, value: Any) -> None:
        self.accessor.set(self.target, value)

    def clear(self) -> None:
        self.accessor.clear(self.target)


@dataclass(frozen=True)
class Binding:
    """
    A declared association between a literal key name and a binding kind.

    Field bindings may carry a value_type check, a mapper converting the
    raw value and a to_value function reversing it. Object and list
    bindings carry the nested target_type. Dictionary bindings carry the
    key_type and value_type every absorbed pair must match.
    """

    name: str
    kind: BindingKind
    accessor: Accessor
    value_type: Any = object
    mapper: Optional[Callable[[Any], Any]] = None
    to_value: Optional[Callable[[Any], Any]] = None
    target_type: Optional[type] = None
    key_type: Any = str

    def __post_init__(self):
        """Validate binding after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not self.name:
            raise ValueError("name cannot be empty")

        if self.kind in (BindingKind.OBJECT, BindingKind.LIST) and self.target_type is None:
            raise ValueError(f"{self.kind.value} binding '{self.name}' requires a target_type")

        if self.kind != BindingKind.FIELD and (self.mapper or self.to_value):
            raise ValueError("mapper and to_value are only supported on field bindings")

    def slot(self, target: Any) -> Slot:
        return self.accessor.bind(target)

    def describe(self) -> Dict[str, Any]:
        """Get a summary of the binding for diagnostics."""
        summary = {
            "name": self.name,
            "kind": self.kind.value,
            "attribute": self.accessor.attribute,
        }
        if self.target_type is not None:
            summary["targetType"] = self.target_type.__name__
        if self.kind == BindingKind.DICTIONARY:
            summary["keyType"] = _type_name(self.key_type)
            summary["valueType"] = _type_name(self.value_type)
        return summary


def _type_name(spec: Any) -> str:
    if isinstance(spec, tuple):
        return " | ".join(_type_name(item) for item in spec)
    return getattr(spec, "__name__", repr(spec))
