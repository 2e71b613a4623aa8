"""Service provider / identity provider metadata synchronization.

The metadata registry pushes its full set of connections to the hub; the
hub replaces its stored roles with the pushed set and reports what changed.

Push payload (``connections`` part):
    {
        "1": {"name": "https://sp.example.org", "type": "saml20-sp", "metadata": {...}},
        "2": {"name": "https://idp.example.org", "type": "saml20-idp"}
    }
"""
from __future__ import annotations
import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

logger = logging.getLogger(__name__)

ROLE_TYPES = ("saml20-sp", "saml20-idp")


@dataclass(frozen=True)
class ServiceRole:
    """One connection as stored by the hub."""
    entity_id: str
    role_type: str
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    allow_all_entities: bool = True

    @property
    def key(self) -> Tuple[str, str]:
        return (self.entity_id, self.role_type)


@dataclass
class SynchronizationResult:
    """Outcome of a metadata push."""
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    success: bool = True

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "created": self.created,
            "updated": self.updated,
            "removed": self.removed,
        }


def assemble_roles(connections: Mapping[str, Any]) -> List[ServiceRole]:
    """Build service roles from pushed connections.

    Args:
        connections: Connection objects keyed by registry id

    Returns:
        Roles in push order

    Raises:
        ValueError: If a connection is malformed or an entity is pushed twice
    """
    if not isinstance(connections, Mapping):
        raise ValueError("connections must be an object")

    roles: List[ServiceRole] = []
    seen = set()
    for connection_id, connection in connections.items():
        if not isinstance(connection, Mapping):
            raise ValueError(f"Connection {connection_id} must be an object")

        entity_id = connection.get("name")
        if not isinstance(entity_id, str) or not entity_id.strip():
            raise ValueError(f"Connection {connection_id} is missing its entity id ('name')")

        role_type = connection.get("type")
        if role_type not in ROLE_TYPES:
            raise ValueError(
                f"Connection {connection_id} has unsupported type {role_type!r}; "
                f"expected one of {', '.join(ROLE_TYPES)}"
            )

        metadata = connection.get("metadata")
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, Mapping):
            raise ValueError(f"Connection {connection_id} metadata must be an object")

        role = ServiceRole(
            entity_id=entity_id.strip(),
            role_type=role_type,
            metadata=dict(metadata),
            allow_all_entities=bool(connection.get("allow_all_entities", True)),
        )
        if role.key in seen:
            raise ValueError(f"Entity {role.entity_id} ({role_type}) pushed more than once")
        seen.add(role.key)
        roles.append(role)

    return roles


class InMemoryMetadataRepository:
    """Role store replaced wholesale on every push."""

    def __init__(self):
        self._roles: Dict[Tuple[str, str], ServiceRole] = {}
        self._lock = threading.Lock()

    def find_all(self) -> List[ServiceRole]:
        with self._lock:
            return list(self._roles.values())

    def synchronize(self, roles: List[ServiceRole]) -> SynchronizationResult:
        """Replace the stored roles with ``roles``.

        A role is "updated" when an entity with the same id and type exists
        and any of its stored data differs; unchanged roles are not reported.
        """
        result = SynchronizationResult()
        incoming = {role.key: role for role in roles}

        with self._lock:
            for key, role in incoming.items():
                current = self._roles.get(key)
                if current is None:
                    result.created.append(role.entity_id)
                elif (current.metadata, current.allow_all_entities) != (role.metadata, role.allow_all_entities):
                    result.updated.append(role.entity_id)

            for key, role in self._roles.items():
                if key not in incoming:
                    result.removed.append(role.entity_id)

            self._roles = {key: copy.deepcopy(role) for key, role in incoming.items()}

        logger.info(
            "Metadata synchronized: %d created, %d updated, %d removed",
            len(result.created), len(result.updated), len(result.removed),
        )
        return result
