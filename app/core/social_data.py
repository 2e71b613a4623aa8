"""
Social Data Service — people and groups in OpenSocial vocabulary

This module serves directory and group records to API consumers, translated
into social field names by ``FieldMapper``.

Architecture:
    Social API (/social/rest/*) ──> social_data.py ──> FieldMapper
                                          │
                                          └──> DirectorySource / GroupSource

Requested social fields are projected to directory attributes before the
lookup, so the source only hands out what the caller asked for.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from app.core.directory import DirectorySource, GroupSource
from app.core.exceptions import GroupNotFoundError, PersonNotFoundError
from app.core.field_mapper import FieldMapper

logger = logging.getLogger(__name__)


class SocialDataService:
    """Looks up people and groups and returns them as social records."""

    def __init__(self, directory: DirectorySource, groups: Optional[GroupSource] = None):
        """Initialize the service.

        Args:
            directory: Person record source
            groups: Group record source (defaults to ``directory``)
        """
        self.directory = directory
        self.groups = groups if groups is not None else directory

    def get_person(self, uid: str, fields: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """Return one person as a social record.

        Args:
            uid: Person identifier (collabpersonid)
            fields: Social fields of interest (empty or None for all)

        Raises:
            PersonNotFoundError: If the directory has no such person
        """
        attributes = None
        if fields:
            attributes = FieldMapper.social_to_ldap_attributes(fields)

        logger.debug("Looking up person %s (attributes=%s)", uid, attributes or "all")
        record = self.directory.find_person(uid, attributes)
        if record is None:
            logger.info("Person %s not found in directory", uid)
            raise PersonNotFoundError(uid)

        return FieldMapper.ldap_to_social_data(record, fields)

    def get_people(self, uids: Sequence[str], fields: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        """Return the known people among ``uids``; unknown ones are skipped."""
        people = []
        for uid in uids:
            try:
                people.append(self.get_person(uid, fields))
            except PersonNotFoundError:
                continue
        return people

    def get_group(self, name: str, fields: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """Return one group as a social record.

        Raises:
            GroupNotFoundError: If the group store has no such group
        """
        attributes = FieldMapper.social_to_grouper_attributes(fields) if fields else None

        record = self.groups.find_group(name, attributes)
        if record is None:
            logger.info("Group %s not found", name)
            raise GroupNotFoundError(name)

        group = FieldMapper.grouper_to_social_data(record)
        if fields:
            group = {key: value for key, value in group.items() if key in fields}
        return group

    def get_groups_for_person(self, uid: str) -> List[Dict[str, Any]]:
        """Return the groups ``uid`` is a member of.

        Raises:
            PersonNotFoundError: If the directory has no such person
        """
        if self.directory.find_person(uid, []) is None:
            raise PersonNotFoundError(uid)

        return [FieldMapper.grouper_to_social_data(group) for group in self.groups.groups_for_member(uid)]

    def get_group_members(self, name: str, fields: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        """Return the members of a group as social records.

        Raises:
            GroupNotFoundError: If the group store has no such group
        """
        if self.groups.find_group(name, []) is None:
            raise GroupNotFoundError(name)

        members = self.groups.group_members(name)
        logger.debug("Group %s has %d members", name, len(members))
        return self.get_people(members, fields)
