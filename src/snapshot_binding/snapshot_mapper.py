"""Main Snapshot Binding facade."""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, Union
from .bindable import BindableObject, BindableSnapshot
from .config import BindingConfig
from .parser import SnapshotParser
from .serializer import SnapshotSerializer
from .types import BindingFailure, CheckResult, DataSnapshot


class SnapshotMapper:
    """
    Bidirectional mapping between store trees and bindable objects.

    Composes a parser and a serializer sharing one BindingConfig, and
    adds JSON helpers for trees exported from the store.
    """

    def __init__(self, config: Optional[BindingConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the snapshot mapper.

        Args:
            config: Optional BindingConfig shared by parser and serializer
            logger: Optional logger instance
        """
        self.config = config or BindingConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.parser = SnapshotParser(self.config, self.logger)
        self.serializer = SnapshotSerializer(self.config, self.logger)

    def parse(self, snapshot: DataSnapshot, cls: Type[BindableSnapshot]) -> BindableSnapshot:
        return self.parser.parse(snapshot, cls)

    def parse_as_list(self, snapshot: Union[DataSnapshot, Mapping[str, Any]],
                      cls: Type[BindableSnapshot]) -> List[BindableSnapshot]:
        return self.parser.parse_as_list(snapshot, cls)

    def serialize(self, obj: BindableObject) -> Dict[str, Any]:
        return self.serializer.serialize(obj)

    def loads(self, json_string: str, key: str, cls: Type[BindableSnapshot],
              as_list: bool = False) -> Any:
        """
        Parse a JSON export of a store location.

        Args:
            json_string: JSON text of the location's value
            key: Key of the location
            cls: BindableSnapshot subclass to populate
            as_list: Parse the value as a tree of snapshots

        Returns:
            Instance of cls, or a list of them when as_list is set

        Raises:
            ValueError: If the JSON text is invalid
            BindingFailure: If binding fails anywhere in the tree
        """
        try:
            value = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}")

        snapshot = DataSnapshot(key, value)
        if as_list:
            return self.parse_as_list(snapshot, cls)
        return self.parse(snapshot, cls)

    def dumps(self, obj: Union[BindableObject, List[BindableSnapshot]], indent: Optional[int] = 2) -> str:
        """Serialize an object, or a list of snapshots, to JSON text."""
        if isinstance(obj, list):
            tree = self.serializer.serialize_list(obj)
        else:
            tree = self.serialize(obj)
        return json.dumps(tree, indent=indent, ensure_ascii=False)

    def check(self, snapshot: DataSnapshot, cls: Type[BindableSnapshot],
              as_list: bool = False) -> CheckResult:
        """
        Check that a snapshot binds completely to cls.

        Returns:
            CheckResult with the failing key and cause, if any
        """
        try:
            if as_list:
                count = len(self.parse_as_list(snapshot, cls))
            else:
                self.parse(snapshot, cls)
                count = 1
        except BindingFailure as e:
            self.logger.error(f"Binding {cls.__name__} failed at key '{e.key}': {e.cause}")
            return CheckResult(
                success=False,
                target=cls.__name__,
                errors=[f"{e.reason.value}: {e.cause}"],
                failed_key=e.key,
            )

        return CheckResult(success=True, target=cls.__name__, object_count=count)
