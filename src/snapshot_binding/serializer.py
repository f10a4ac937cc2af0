"""Snapshot serializer re-emitting bindable objects as plain trees."""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional
from .bindable import BindableObject, BindableSnapshot
from .config import BindingConfig
from .models.binding import Binding, MISSING
from .types import BindingFailure, BindingKind, FailureReason, SerializerInterface, TargetKind


class SnapshotSerializer(SerializerInterface):
    """
    Serializes bindable objects back into trees suitable for the store.

    Walks the same binding declarations the parser uses. Values that were
    never bound are omitted; dictionary entries are flattened into the
    node that owns the dictionary.
    """

    def __init__(self, config: Optional[BindingConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the snapshot serializer.

        Args:
            config: Optional BindingConfig (must match the parser's)
            logger: Optional logger instance
        """
        self.config = config or BindingConfig()
        self.logger = logger or logging.getLogger(__name__)

    def serialize(self, obj: BindableObject) -> Dict[str, Any]:
        """
        Serialize a bindable instance into a plain tree node.

        Args:
            obj: Bindable instance to serialize

        Returns:
            Dictionary of key/value pairs

        Raises:
            BindingFailure: If a list element has no identity or a
                dictionary key collides with a declared name
            TypeError: If obj is not bindable
        """
        if not isinstance(obj, BindableObject):
            raise TypeError(f"Cannot serialize {type(obj).__name__}: not a BindableObject")

        node: Dict[str, Any] = {}
        bindings = type(obj).effective_bindings(self.config.identity_field)
        dictionaries = []

        for binding in bindings:
            if binding.kind == BindingKind.DICTIONARY:
                dictionaries.append(binding)
                continue
            if self._is_identity(binding, obj) and not self.config.include_identity:
                continue

            value = binding.accessor.get(obj)
            if value is MISSING:
                continue

            if value is None:
                node[binding.name] = None
            elif binding.kind == BindingKind.FIELD:
                node[binding.name] = self._field_value(binding, value)
            elif binding.kind == BindingKind.OBJECT:
                node[binding.name] = self.serialize(value)
            else:
                node[binding.name] = self.serialize_list(value, name=binding.name)

        # Dictionary entries land beside the declared names they absorbed
        for binding in dictionaries:
            entries = binding.accessor.get(obj)
            if not entries:
                continue
            for key, value in entries.items():
                key = str(key)
                if key in node:
                    raise BindingFailure(
                        key,
                        f"dictionary '{binding.name}' entry '{key}' collides with an emitted key",
                        FailureReason.KEY_COLLISION,
                    )
                node[key] = self.serialize(value) if isinstance(value, BindableObject) else value

        return node

    def serialize_list(self, items: Iterable[BindableSnapshot], name: str = "list") -> Dict[str, Any]:
        """
        Serialize snapshots into a tree of nodes keyed by their identity.

        Raises:
            BindingFailure: If an element has no identity
        """
        tree: Dict[str, Any] = {}
        for item in items:
            identity = item.identity_binding(self.config.identity_field).accessor.get(item)
            if identity is MISSING or identity is None:
                raise BindingFailure(
                    name,
                    f"list '{name}' contains a {type(item).__name__} without an identity",
                    FailureReason.MISSING_IDENTITY,
                )
            tree[str(identity)] = self.serialize(item)

        self.logger.debug(f"Serialized {len(tree)} entries of list '{name}'")
        return tree

    def _is_identity(self, binding: Binding, obj: BindableObject) -> bool:
        return (obj.target_kind == TargetKind.SNAPSHOT
                and binding.name == self.config.identity_field)

    def _field_value(self, binding: Binding, value: Any) -> Any:
        if binding.to_value is not None:
            return binding.to_value(value)
        if isinstance(value, Enum):
            return value.value
        return value
