"""Bindable base classes and the binding registrar."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Type
from .models.binding import Accessor, Binding
from .types import BindingKind, TargetKind


class Registrar:
    """
    Collects the binding declarations of one bindable type.

    Each bind_* method records a Binding descriptor in declaration order
    and returns the registrar so declarations can be chained.
    """

    def __init__(self, owner: Type[Any]):
        self.owner = owner
        self._bindings: List[Binding] = []

    @property
    def bindings(self) -> List[Binding]:
        return list(self._bindings)

    def bind_field(self, name: str, attribute: Optional[str] = None,
                   value_type: Any = object,
                   mapper: Optional[Callable[[Any], Any]] = None,
                   to_value: Optional[Callable[[Any], Any]] = None) -> 'Registrar':
        """
        Bind a primitive value to an attribute.

        Args:
            name: Key name in the tree node
            attribute: Attribute name on the target (defaults to name)
            value_type: Type or tuple of types the raw value must match
            mapper: Optional conversion applied to the raw value
            to_value: Optional conversion applied when serializing
        """
        return self._add(Binding(
            name=name,
            kind=BindingKind.FIELD,
            accessor=Accessor(attribute or name),
            value_type=value_type,
            mapper=mapper,
            to_value=to_value,
        ))

    def bind_object(self, name: str, target_type: Type['BindableObject'],
                    attribute: Optional[str] = None) -> 'Registrar':
        """Bind a nested node to a bindable object; the node's key is discarded."""
        if not is_bindable(target_type):
            raise TypeError(f"object binding '{name}' requires a BindableObject subclass, "
                            f"got {target_type!r}")
        return self._add(Binding(
            name=name,
            kind=BindingKind.OBJECT,
            accessor=Accessor(attribute or name),
            target_type=target_type,
        ))

    def bind_list(self, name: str, target_type: Type['BindableSnapshot'],
                  attribute: Optional[str] = None) -> 'Registrar':
        """Bind a tree of nodes to a list of snapshots keyed by their sub-keys."""
        if not (is_bindable(target_type) and issubclass(target_type, BindableSnapshot)):
            raise TypeError(f"list binding '{name}' requires a BindableSnapshot subclass, "
                            f"got {target_type!r}")
        return self._add(Binding(
            name=name,
            kind=BindingKind.LIST,
            accessor=Accessor(attribute or name),
            target_type=target_type,
        ))

    def bind_dictionary(self, name: str, key_type: Any = str, value_type: Any = object,
                        attribute: Optional[str] = None) -> 'Registrar':
        """
        Bind every otherwise unclaimed pair into a dictionary.

        The name only identifies the dictionary; pairs are matched by the
        type of their key and value instead. A bindable value_type parses
        each absorbed node into that type.
        """
        return self._add(Binding(
            name=name,
            kind=BindingKind.DICTIONARY,
            accessor=Accessor(attribute or name),
            key_type=key_type,
            value_type=value_type,
        ))

    def _add(self, binding: Binding) -> 'Registrar':
        if any(existing.name == binding.name for existing in self._bindings):
            raise ValueError(f"duplicate binding '{binding.name}' on {self.owner.__name__}")
        self._bindings.append(binding)
        return self


class BindableObject(ABC):
    """
    Base class for types populated from a tree node.

    Subclasses must be constructible without arguments and declare their
    bindings in declare_bindings. The node's enclosing key is discarded.
    """

    target_kind = TargetKind.OBJECT

    @classmethod
    @abstractmethod
    def declare_bindings(cls, registrar: Registrar) -> None:
        """Register the bindings of this type."""
        pass

    @classmethod
    def bindings(cls) -> List[Binding]:
        """Get the declared bindings of this type, in declaration order."""
        cached = cls.__dict__.get("_declared_bindings")
        if cached is None:
            registrar = Registrar(cls)
            cls.declare_bindings(registrar)
            cached = registrar.bindings
            cls._declared_bindings = cached
        return list(cached)

    @classmethod
    def effective_bindings(cls, identity_field: str) -> List[Binding]:
        return cls.bindings()

    def bound_values(self) -> Dict[str, Any]:
        """Get the attributes that currently hold a bound value."""
        return dict(vars(self))

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.bound_values() == other.bound_values()

    __hash__ = None

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.bound_values().items())
        return f"{type(self).__name__}({fields})"


class BindableSnapshot(BindableObject):
    """
    Base class for types that capture their enclosing key.

    The key is stored on the id attribute, bound under the configured
    identity field name.
    """

    target_kind = TargetKind.SNAPSHOT
    identity_accessor = Accessor("id")

    id: Optional[str] = None

    @classmethod
    def effective_bindings(cls, identity_field: str) -> List[Binding]:
        declared = cls.bindings()
        for binding in declared:
            if binding.name == identity_field:
                if binding.kind != BindingKind.FIELD:
                    raise ValueError(f"identity binding '{identity_field}' on {cls.__name__} "
                                     f"must be a field binding")
                return declared

        identity = Binding(name=identity_field, kind=BindingKind.FIELD,
                           accessor=cls.identity_accessor, value_type=str)
        return [identity] + declared

    @classmethod
    def identity_binding(cls, identity_field: str) -> Binding:
        return next(binding for binding in cls.effective_bindings(identity_field)
                    if binding.name == identity_field)


def is_bindable(target_type: Any) -> bool:
    """Check if a type can be parsed from a tree node."""
    return isinstance(target_type, type) and issubclass(target_type, BindableObject)
