"""Node walker driving one binding session per key/value pair."""

import logging
from typing import TYPE_CHECKING, Any, List, Mapping, Optional
from .binder import Binder
from .models.binding import Binding
from .types import BindingKind

if TYPE_CHECKING:
    from .parser import SnapshotParser


class NodeWalker:
    """
    Binds the pairs of a tree node to a target's declared bindings.

    Named bindings are offered each pair first, in declaration order.
    Dictionary bindings only see pairs no named binding claimed or
    rejected. The first failing pair aborts the whole node.
    """

    def __init__(self, parser: 'SnapshotParser', logger: Optional[logging.Logger] = None):
        self.parser = parser
        self.logger = logger or logging.getLogger(__name__)

    def bind_node(self, target: Any, node: Mapping[str, Any], bindings: List[Binding]) -> None:
        """
        Bind every pair of a node to the target.

        Args:
            target: Freshly constructed bindable instance
            node: Tree node to walk
            bindings: Effective bindings of the target's type

        Raises:
            BindingFailure: If any pair cannot be bound
        """
        for key, value in node.items():
            self.bind_pair(target, str(key), value, bindings)

    def bind_pair(self, target: Any, key: str, value: Any, bindings: List[Binding]) -> Binder:
        """
        Run one binding session for a key/value pair.

        Returns:
            The claimed Binder session

        Raises:
            BindingFailure: If the pair was not claimed
        """
        binder = Binder(key, value, self.parser)

        for binding in bindings:
            if binding.kind == BindingKind.DICTIONARY:
                continue
            if self._offer(binder, binding, target) or binder.error is not None:
                break

        if not binder.claimed and binder.error is None:
            for binding in bindings:
                if binding.kind == BindingKind.DICTIONARY and self._offer(binder, binding, target):
                    break

        if not binder.claimed:
            self.logger.debug(f"Key '{key}' was not claimed by {type(target).__name__}")
        binder.check_for_error()
        return binder

    def _offer(self, binder: Binder, binding: Binding, target: Any) -> bool:
        slot = binding.slot(target)

        if binding.kind == BindingKind.FIELD:
            return binder.claim_field(binding.name, slot, binding.mapper, binding.value_type)
        elif binding.kind == BindingKind.OBJECT:
            return binder.claim_object(binding.name, slot, binding.target_type)
        elif binding.kind == BindingKind.LIST:
            return binder.claim_list(binding.name, slot, binding.target_type)
        else:
            return binder.claim_dictionary(binding.name, slot, binding.key_type, binding.value_type)
