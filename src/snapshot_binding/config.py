"""Configuration for parsing and serializing snapshots."""

from dataclasses import dataclass
from typing import Any, Dict


DEFAULT_IDENTITY_FIELD = "id"


@dataclass(frozen=True)
class BindingConfig:
    """
    Options shared by the parser and the serializer.

    identity_field names the key a snapshot's enclosing key is bound to.
    strict_lists makes non-node list entries fail instead of being skipped.
    include_identity controls whether serialized snapshots carry their
    identity inside the node.
    """

    identity_field: str = DEFAULT_IDENTITY_FIELD
    strict_lists: bool = False
    include_identity: bool = True

    def __post_init__(self):
        """Validate config after initialization."""
        if not isinstance(self.identity_field, str) or not self.identity_field:
            raise ValueError("identity_field must be a non-empty string")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identityField": self.identity_field,
            "strictLists": self.strict_lists,
            "includeIdentity": self.include_identity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BindingConfig':
        """
        Create BindingConfig from dictionary representation.

        Args:
            data: Dictionary using the keys produced by to_dict

        Returns:
            BindingConfig instance
        """
        unknown = set(data) - {"identityField", "strictLists", "includeIdentity"}
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        return cls(
            identity_field=data.get("identityField", DEFAULT_IDENTITY_FIELD),
            strict_lists=bool(data.get("strictLists", False)),
            include_identity=bool(data.get("includeIdentity", True)),
        )
