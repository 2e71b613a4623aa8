"""Directory ↔ social ↔ group attribute name translations.

This module translates attribute names and records between the three
vocabularies the hub deals with:

    directory : LDAP user registry keys (``collabpersonid``, ``mail`` ...)
    social    : OpenSocial field names served to API consumers
    group     : Grouper group attributes (``name``, ``displayExtension``)

Usage:
    # Social field names → directory attributes (for attribute selection)
    attrs = FieldMapper.social_to_ldap_attributes(["id", "emails"])

    # Directory record → social record
    person = FieldMapper.ldap_to_social_data(ldap_record, ["displayName"])

    # Group record → social record
    group = FieldMapper.grouper_to_social_data(grouper_record)

The mapper is case sensitive and holds nothing but the constant tables
below, so every call is safe to run concurrently.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.core.validators import validate_attribute_names, validate_record


# Directory keys to social field names. A directory key may feed several
# social fields (displayname backs both displayName and nickname).
LDAP_TO_SOCIAL: Mapping[str, Any] = MappingProxyType({
    "collabpersonid": "id",
    "displayname": ("displayName", "nickname"),
    "mail": "emails",
    "givenname": "name",
})

# Social field names to directory keys. Strictly one-to-one.
SOCIAL_TO_LDAP: Mapping[str, str] = MappingProxyType({
    "id": "collabpersonid",
    "nickname": "displayname",
    "displayName": "displayname",
    "emails": "mail",
    "name": "givenname",
})

SOCIAL_TO_GROUPER: Mapping[str, str] = MappingProxyType({
    "id": "name",
    "title": "displayExtension",
})

GROUPER_TO_SOCIAL: Mapping[str, str] = MappingProxyType({
    "name": "id",
    "displayExtension": "title",
})

# Social fields that are allowed to carry multiple values.
MULTI_VALUE_ATTRIBUTES = frozenset({"emails"})


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class FieldMapper:
    """Translates names and records between directory, social and group schemas."""

    @staticmethod
    def social_to_ldap_attributes(social_attrs: Sequence[str]) -> List[str]:
        """Convert social field names to directory attribute names.

        Names without a directory counterpart are kept as-is, so custom
        attributes stored in the user registry can still be requested.
        Duplicates are removed, keeping the first occurrence.

        Args:
            social_attrs: Ordered social field names

        Returns:
            Ordered, deduplicated directory attribute names

        Example:
            >>> FieldMapper.social_to_ldap_attributes(["id", "id", "customField"])
            ['collabpersonid', 'customField']
        """
        validate_attribute_names(social_attrs)

        result: List[str] = []
        for social_attr in social_attrs:
            ldap_attr = SOCIAL_TO_LDAP.get(social_attr, social_attr)
            if ldap_attr not in result:
                result.append(ldap_attr)
        return result

    @staticmethod
    def ldap_to_social_data(
        data: Mapping[str, Any],
        social_attrs: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """Convert a directory record to a social record.

        The output may hold more keys than the input, since one directory
        key can back several social fields. Values are packed according to
        the multiplicity of the social field they end up in.

        When ``social_attrs`` is non-empty only those fields are returned.
        Requested fields without a directory counterpart, or whose directory
        attribute is missing from ``data``, are left out: that is data the
        caller is not allowed to see. Without ``social_attrs`` every mapped
        directory key is translated and unmapped keys are dropped.

        Args:
            data: Record keyed by directory attribute names
            social_attrs: Social fields of interest (empty or None for all)

        Returns:
            Record keyed by social field names

        Example:
            >>> FieldMapper.ldap_to_social_data({"mail": "jane@example.org"})
            {'emails': ['jane@example.org']}
        """
        validate_record(data)
        if social_attrs:
            validate_attribute_names(social_attrs)

        result: Dict[str, Any] = {}

        if social_attrs:
            for social_attr in social_attrs:
                ldap_attr = SOCIAL_TO_LDAP.get(social_attr)
                if ldap_attr is None or data.get(ldap_attr) is None:
                    continue
                packed = FieldMapper.pack(data[ldap_attr], social_attr)
                if packed is not None:
                    result[social_attr] = packed
            return result

        for ldap_attr, value in data.items():
            targets = LDAP_TO_SOCIAL.get(ldap_attr)
            if targets is None or value is None:
                continue
            if isinstance(targets, str):
                targets = (targets,)
            for social_attr in targets:
                packed = FieldMapper.pack(value, social_attr)
                if packed is not None:
                    result[social_attr] = packed
        return result

    @staticmethod
    def grouper_to_social_data(group: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert a Grouper group record to a social record.

        Group attributes are single valued, values are copied unchanged.
        Keys without a mapping are ignored.

        Example:
            >>> FieldMapper.grouper_to_social_data({"name": "g1", "extra": "x"})
            {'id': 'g1'}
        """
        validate_record(group)

        return {
            GROUPER_TO_SOCIAL[grouper_attr]: value
            for grouper_attr, value in group.items()
            if grouper_attr in GROUPER_TO_SOCIAL
        }

    @staticmethod
    def social_to_grouper_attributes(social_attrs: Sequence[str]) -> List[str]:
        """Convert social field names to Grouper attribute names.

        Unlike the directory projection, names without a Grouper counterpart
        are dropped: the group store has no custom attributes.
        """
        validate_attribute_names(social_attrs)

        result: List[str] = []
        for social_attr in social_attrs:
            grouper_attr = SOCIAL_TO_GROUPER.get(social_attr)
            if grouper_attr is not None and grouper_attr not in result:
                result.append(grouper_attr)
        return result

    @staticmethod
    def pack(value: Any, social_attr: str) -> Any:
        """Shape ``value`` to the multiplicity of ``social_attr``.

        Multi-valued fields always get a sequence: scalars are wrapped in a
        one-element list, sequences are returned unchanged. Single-valued
        fields always get a scalar: sequences are reduced to their first
        element, scalars are returned unchanged.

        Returns None when there is no value to store: ``value`` is None, or
        an empty sequence has to be reduced to a scalar.
        """
        if value is None:
            return None

        if social_attr in MULTI_VALUE_ATTRIBUTES:
            return value if _is_sequence(value) else [value]

        if _is_sequence(value):
            return value[0] if value else None
        return value
