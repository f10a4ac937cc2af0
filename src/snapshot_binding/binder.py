"""Binding session for a single key/value pair."""

from typing import TYPE_CHECKING, Any, Callable, Optional, Type
from .bindable import BindableSnapshot, is_bindable
from .models.binding import Slot
from .types import BindingFailure, FailureReason
from .values import describe_value, is_compatible, is_node

if TYPE_CHECKING:
    from .parser import SnapshotParser


class Binder:
    """
    Lets a target type claim one key/value pair of a tree node.

    Exactly one claim can succeed per session. Nested parse failures are
    recorded as the session error without wrapping, so the error always
    names the deepest offending key.
    """

    def __init__(self, key: str, value: Any, parser: 'SnapshotParser'):
        self.key = key
        self.value = value
        self.parser = parser
        self.claimed = False
        self.error: Optional[BindingFailure] = None

    def claim_field(self, name: str, slot: Slot,
                    mapper: Optional[Callable[[Any], Any]] = None,
                    value_type: Any = object) -> bool:
        """
        Claim the pair for a primitive field.

        A value the mapper rejects, or one that fails the value_type
        check, leaves the slot absent. This is not an error.
        """
        if self.claimed or name != self.key:
            return False

        if mapper is not None:
            try:
                mapped = mapper(self.value)
            except Exception:
                mapped = None
            if mapped is None and self.value is not None:
                slot.clear()
            else:
                slot.set(mapped)
        elif self.value is None or is_compatible(self.value, value_type):
            slot.set(self.value)
        else:
            slot.clear()

        self.claimed = True
        return True

    def claim_object(self, name: str, slot: Slot, object_type: Type[Any]) -> bool:
        """
        Claim the pair for a nested object, parsing the value recursively.

        JSON null is stored as an explicit None; any other non-node value
        is a malformed node.
        """
        if self.claimed or name != self.key:
            return False

        if self.value is None:
            slot.set(None)
            self.claimed = True
            return True

        if not is_node(self.value):
            self.error = BindingFailure(
                self.key,
                f"expected a node for object '{name}', got {describe_value(self.value)}",
                FailureReason.MALFORMED_NODE,
            )
            return False

        try:
            slot.set(self.parser.parse_object(self.value, object_type))
        except BindingFailure as e:
            self.error = e
            return False

        self.claimed = True
        return True

    def claim_list(self, name: str, slot: Slot, item_type: Type[BindableSnapshot]) -> bool:
        """Claim the pair for a list of snapshots keyed by their sub-keys."""
        if self.claimed or name != self.key:
            return False

        try:
            slot.set(self.parser.parse_list(self.value, item_type, name=name))
        except BindingFailure as e:
            self.error = e
            return False

        self.claimed = True
        return True

    def claim_dictionary(self, name: str, slot: Slot,
                         key_type: Any = str, value_type: Any = object) -> bool:
        """
        Claim the pair for a catch-all dictionary.

        The pair matches on the type of its key and value rather than its
        name. Entries accumulate across pairs of the same node.
        """
        if self.claimed:
            return False

        if not is_compatible(self.key, key_type):
            self.error = self._mismatch(name)
            return False

        if is_bindable(value_type):
            if not is_node(self.value):
                self.error = self._mismatch(name)
                return False
            try:
                entry = self._parse_entry(value_type)
            except BindingFailure as e:
                self.error = e
                return False
        elif is_compatible(self.value, value_type):
            entry = self.value
        else:
            self.error = self._mismatch(name)
            return False

        dictionary = slot.get()
        if not isinstance(dictionary, dict):
            dictionary = {}
            slot.set(dictionary)
        dictionary[self.key] = entry

        self.error = None
        self.claimed = True
        return True

    def check_for_error(self) -> None:
        """
        Raise the session error if the pair was not claimed.

        Raises:
            BindingFailure: The recorded error, or an unbound key error
        """
        if self.claimed:
            return
        if self.error is not None:
            raise self.error
        raise BindingFailure.unbound(self.key)

    def _parse_entry(self, value_type: Type[Any]) -> Any:
        if issubclass(value_type, BindableSnapshot):
            return self.parser.parse_node(self.key, self.value, value_type)
        return self.parser.parse_object(self.value, value_type)

    def _mismatch(self, name: str) -> BindingFailure:
        return BindingFailure(
            self.key,
            f"unable to bind key '{self.key}' ({describe_value(self.value)}) into the dictionary named: {name}",
            FailureReason.TYPE_MISMATCH,
        )
