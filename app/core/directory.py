"""Read-only directory and group sources.

The hub reads people from a user registry (keyed by directory attribute
names) and groups from a group store (keyed by Grouper attribute names).
Both are consumed through the small protocols below; ``YamlDirectory``
implements them on top of a YAML document:

    people:
      urn:collab:person:example.org:jane:
        displayname: Jane Doe
        mail: [jane@example.org, j@example.org]
        givenname: Jane
    groups:
      research:
        displayExtension: Research
        members: [urn:collab:person:example.org:jane]

Records are returned as copies, so callers can never mutate the store.
"""
from __future__ import annotations
import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

import yaml

from .exceptions import DirectoryLoadError

logger = logging.getLogger(__name__)

PERSON_ID_ATTRIBUTE = "collabpersonid"
GROUP_ID_ATTRIBUTE = "name"
MEMBERS_KEY = "members"


class DirectorySource(Protocol):
    """Supplies person records keyed by directory attribute names."""

    def find_person(self, uid: str, attributes: Optional[Iterable[str]] = None) -> Optional[dict]:
        ...


class GroupSource(Protocol):
    """Supplies group records keyed by Grouper attribute names."""

    def find_group(self, name: str, attributes: Optional[Iterable[str]] = None) -> Optional[dict]:
        ...

    def groups_for_member(self, uid: str) -> List[dict]:
        ...

    def group_members(self, name: str) -> List[str]:
        ...


def _select(record: Dict[str, Any], attributes: Optional[Iterable[str]]) -> dict:
    """Copy a record, keeping only the requested attributes (all when None)."""
    if attributes is None:
        return copy.deepcopy(record)
    wanted = set(attributes)
    return {key: copy.deepcopy(value) for key, value in record.items() if key in wanted}


def _entry(attrs: Any, label: str) -> dict:
    """Copy a person/group entry; an empty entry (None) has no attributes."""
    if attrs is None:
        return {}
    if not isinstance(attrs, dict):
        raise DirectoryLoadError(f"{label} must be a mapping of attributes, got {type(attrs).__name__}")
    return dict(attrs)


class YamlDirectory:
    """In-memory people and group store loaded from YAML."""

    def __init__(self, people: Optional[Dict[str, dict]] = None, groups: Optional[Dict[str, dict]] = None):
        self._people: Dict[str, dict] = {}
        self._groups: Dict[str, dict] = {}
        self._members: Dict[str, List[str]] = {}

        for uid, attrs in (people or {}).items():
            uid = str(uid)
            record = _entry(attrs, f"Person '{uid}'")
            record[PERSON_ID_ATTRIBUTE] = uid
            self._people[uid] = record

        for name, attrs in (groups or {}).items():
            name = str(name)
            record = _entry(attrs, f"Group '{name}'")
            members = record.pop(MEMBERS_KEY, None) or []
            if not isinstance(members, list):
                raise DirectoryLoadError(f"Members of group '{name}' must be a list")
            record[GROUP_ID_ATTRIBUTE] = name
            self._groups[name] = record
            self._members[name] = [str(member) for member in members]

    @classmethod
    def from_file(cls, path: str | Path) -> "YamlDirectory":
        """Load a directory from a YAML file.

        Raises:
            DirectoryLoadError: If the file is missing, unreadable or malformed
        """
        path = Path(path)
        try:
            document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except OSError as exc:
            raise DirectoryLoadError(f"Cannot read directory data {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise DirectoryLoadError(f"Invalid YAML in {path}: {exc}") from exc

        if not isinstance(document, dict):
            raise DirectoryLoadError(f"Directory data {path} must be a mapping")

        people = document.get("people") or {}
        groups = document.get("groups") or {}
        if not isinstance(people, dict) or not isinstance(groups, dict):
            raise DirectoryLoadError(f"'people' and 'groups' in {path} must be mappings")

        directory = cls(people=people, groups=groups)
        logger.info(
            "Loaded directory from %s (%d people, %d groups)",
            path, len(directory._people), len(directory._groups),
        )
        return directory

    def __len__(self) -> int:
        return len(self._people)

    def find_person(self, uid: str, attributes: Optional[Iterable[str]] = None) -> Optional[dict]:
        record = self._people.get(uid)
        if record is None:
            return None
        return _select(record, attributes)

    def find_group(self, name: str, attributes: Optional[Iterable[str]] = None) -> Optional[dict]:
        record = self._groups.get(name)
        if record is None:
            return None
        return _select(record, attributes)

    def groups_for_member(self, uid: str) -> List[dict]:
        return [
            copy.deepcopy(self._groups[name])
            for name, members in self._members.items()
            if uid in members
        ]

    def group_members(self, name: str) -> List[str]:
        return list(self._members.get(name, []))
