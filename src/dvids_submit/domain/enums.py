"""Enumerated attribute values."""

from enum import StrEnum


class Branch(StrEnum):
    """US armed forces branches."""

    ARMY = "army"
    NAVY = "navy"
    AIR_FORCE = "air-force"
    MARINES = "marines"
    COAST_GUARD = "coast-guard"
    SPACE_FORCE = "space-force"
    JOINT = "joint"
    CIVILIAN = "civilian"

    @property
    def display_name(self) -> str:
        """Human-readable branch name."""
        return _display_name(self.value)


class PhotoStatus(StrEnum):
    """Processing status of a photo."""

    UPLOADED = "uploaded"
    PENDING_PROCESSING = "pending-processing"
    NEEDS_APPROVAL = "needs-approval"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    @property
    def display_name(self) -> str:
        return _display_name(self.value)


class GraphicStatus(StrEnum):
    """Processing status of a graphic."""

    UPLOADED = "uploaded"
    PENDING_PROCESSING = "pending-processing"
    NEEDS_APPROVAL = "needs-approval"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    @property
    def display_name(self) -> str:
        return _display_name(self.value)


class PublicationIssueStatus(StrEnum):
    """Processing status of a publication issue. Issues are never archived."""

    UPLOADED = "uploaded"
    PENDING_PROCESSING = "pending-processing"
    NEEDS_APPROVAL = "needs-approval"
    PUBLISHED = "published"

    @property
    def display_name(self) -> str:
        return _display_name(self.value)


def _display_name(value: str) -> str:
    """Turn a kebab-case wire value into title case words."""
    return " ".join(word.capitalize() for word in value.split("-"))
