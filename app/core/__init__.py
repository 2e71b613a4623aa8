"""Core Business Logic Module

This module provides the attribute translation and lookup logic of the
hub, independent of HTTP frameworks.

Architecture:
    - Pure Python (no Flask dependencies in core logic)
    - Testable without HTTP mocking
    - Reusable across interfaces (social API, metadata push, scripts)

Module Structure:
    - field_mapper.py : directory ↔ social ↔ group name/record translations
    - validators.py   : Input validation (records, attribute names, fields)
    - directory.py    : Directory/group source protocols + YAML-backed store
    - social_data.py  : People and group lookups in social vocabulary
    - metadata.py     : Metadata push assembly and synchronization
    - exceptions.py   : Lookup errors

Usage Pattern:
    Import explicitly when needed:
        from app.core.field_mapper import FieldMapper
        from app.core.social_data import SocialDataService
        from app.core.directory import YamlDirectory

Public APIs:
    Translations (app.core.field_mapper):
        - FieldMapper.social_to_ldap_attributes()
        - FieldMapper.ldap_to_social_data()
        - FieldMapper.grouper_to_social_data()
        - FieldMapper.social_to_grouper_attributes()
        - FieldMapper.pack()

    Lookups (app.core.social_data):
        - SocialDataService.get_person() / get_people()
        - SocialDataService.get_group() / get_groups_for_person()
        - SocialDataService.get_group_members()

    Metadata (app.core.metadata):
        - assemble_roles()
        - InMemoryMetadataRepository.synchronize()
"""
