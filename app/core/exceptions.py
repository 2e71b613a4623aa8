"""Exceptions raised by the social data layer."""


class SocialDataError(Exception):
    """Base exception for directory and group lookups."""
    pass


class PersonNotFoundError(SocialDataError):
    """Person lookup failed - uid does not exist in the directory."""

    def __init__(self, uid: str):
        self.uid = uid
        super().__init__(f"Person '{uid}' not found")


class GroupNotFoundError(SocialDataError):
    """Group lookup failed - name does not exist in the group store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Group '{name}' not found")


class DirectoryLoadError(SocialDataError):
    """Directory data could not be read or has an unexpected structure."""
    pass
