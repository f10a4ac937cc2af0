"""Snapshot parser binding store trees onto bindable types."""

import logging
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union
from .bindable import BindableObject, BindableSnapshot, is_bindable
from .config import BindingConfig
from .types import BindingFailure, DataSnapshot, FailureReason, ParserInterface
from .values import describe_value, is_node, iter_entries
from .walker import NodeWalker


T = TypeVar("T", bound=BindableObject)
S = TypeVar("S", bound=BindableSnapshot)


class SnapshotParser(ParserInterface):
    """
    Parses store snapshots into bindable objects.

    Every key of every node has to be claimed by a binding declared on
    the target type, or by a dictionary binding, otherwise the parse
    fails with a BindingFailure naming the key. No partially bound
    object is ever returned.
    """

    def __init__(self, config: Optional[BindingConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the snapshot parser.

        Args:
            config: Optional BindingConfig (defaults to identity field "id")
            logger: Optional logger instance
        """
        self.config = config or BindingConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.walker = NodeWalker(self, self.logger)

    @property
    def identity_field(self) -> str:
        return self.config.identity_field

    def parse(self, snapshot: DataSnapshot, cls: Type[S]) -> S:
        """
        Parse a snapshot into an instance of cls.

        Args:
            snapshot: Key and node read from the store
            cls: BindableSnapshot subclass to populate

        Returns:
            Fully bound instance of cls

        Raises:
            BindingFailure: If any key in the tree cannot be bound
        """
        obj = self.parse_node(snapshot.key, snapshot.value, cls)
        self.logger.info(f"Parsed snapshot '{snapshot.key}' as {cls.__name__}")
        return obj

    def parse_as_list(self, snapshot: Union[DataSnapshot, Mapping[str, Any]],
                      cls: Type[S]) -> List[S]:
        """
        Parse a tree of nodes into a list of cls instances.

        Args:
            snapshot: Snapshot whose value is a tree of nodes, or the tree itself
            cls: BindableSnapshot subclass for every entry

        Returns:
            List of instances, in the tree's iteration order

        Raises:
            BindingFailure: If any entry cannot be bound
        """
        tree = snapshot.value if isinstance(snapshot, DataSnapshot) else snapshot
        name = snapshot.key if isinstance(snapshot, DataSnapshot) else cls.__name__
        result = self.parse_list(tree, cls, name=name)
        self.logger.info(f"Parsed {len(result)} {cls.__name__} entries from '{name}'")
        return result

    def parse_node(self, key: str, node: Any, cls: Type[S]) -> S:
        """
        Parse a keyed node into an instance of cls.

        The key is bound under the identity field before the node's own
        pairs. A value that is not a node binds as an empty node.
        """
        self._check_target(cls, snapshot=True)
        obj = cls()
        bindings = cls.effective_bindings(self.identity_field)

        self.walker.bind_pair(obj, self.identity_field, key, bindings)
        if is_node(node):
            self.walker.bind_node(obj, node, bindings)

        self.logger.debug(f"Bound {cls.__name__} '{key}'")
        return obj

    def parse_object(self, node: Any, cls: Type[T]) -> T:
        """Parse a node into an instance of cls, without an identity.

        A value that is not a node binds as an empty node.
        """
        self._check_target(cls)
        obj = cls()
        if is_node(node):
            self.walker.bind_node(obj, node, cls.effective_bindings(self.identity_field))

        self.logger.debug(f"Bound {cls.__name__} object")
        return obj

    def parse_list(self, tree: Any, cls: Type[S], name: str = "list") -> List[S]:
        """
        Parse every entry of a tree of nodes as a snapshot keyed by its sub-key.

        Entries that are not nodes are skipped, or fail when strict_lists
        is set. Binding failures inside an entry always propagate.
        """
        if not (is_node(tree) or isinstance(tree, list)):
            if self.config.strict_lists and tree is not None:
                raise BindingFailure(name, f"expected a tree of nodes for list '{name}', "
                                           f"got {describe_value(tree)}",
                                     FailureReason.MALFORMED_NODE)
            return []

        result = []
        for sub_key, sub_node in iter_entries(tree):
            if not is_node(sub_node):
                if self.config.strict_lists:
                    raise BindingFailure(sub_key, f"expected a node for list entry '{sub_key}' "
                                                  f"in '{name}', got {describe_value(sub_node)}",
                                         FailureReason.MALFORMED_NODE)
                self.logger.warning(f"Skipping non-node entry '{sub_key}' in list '{name}'")
                continue
            result.append(self.parse_node(sub_key, sub_node, cls))
        return result

    def _check_target(self, cls: Any, snapshot: bool = False) -> None:
        if not is_bindable(cls):
            raise TypeError(f"{cls!r} is not a BindableObject subclass")
        if snapshot and not issubclass(cls, BindableSnapshot):
            raise TypeError(f"{cls.__name__} has no identity; use parse_object instead")
