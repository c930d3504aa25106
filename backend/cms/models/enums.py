from enum import Enum, IntEnum


class ProgramType(IntEnum):
    PODCAST = 1
    DOCUMENTARY = 2
    INTERVIEW = 3
    TUTORIAL = 4
    NEWS = 5


class Language(IntEnum):
    ARABIC = 1
    ENGLISH = 2
    FRENCH = 3
    SPANISH = 4


class ProgramStatus(IntEnum):
    DRAFT = 1
    UNDER_REVIEW = 2
    PUBLISHED = 3
    ARCHIVED = 4
    REJECTED = 5


# Status filter value meaning "do not filter on status" (editorial callers only)
ALL_STATUSES = 0


class SortKey(str, Enum):
    """Fields a program search can be ordered by."""

    TITLE = "title"
    PUBLISHED_DATE = "publisheddate"
    VIEW_COUNT = "viewcount"
    RATING = "rating"
    DURATION = "duration"
    CREATED_AT = "createdat"

    @classmethod
    def parse(cls, value: str | None) -> "SortKey":
        """Match case-insensitively; anything unrecognised sorts by creation time."""
        if not value:
            return cls.CREATED_AT
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.CREATED_AT


def display_name(member: Enum) -> str:
    """PascalCase label for an enum member, e.g. UNDER_REVIEW -> UnderReview."""
    return "".join(part.capitalize() for part in member.name.split("_"))
