"""Value objects for the classification domain."""

from collections import Counter
from enum import Enum

from git_reporter.git.domain.entities import Commit


class Category(str, Enum):
    """Intent of a commit. Declaration order is the report order."""

    FEATURE = "feature"
    FIX = "fix"
    DOCS = "docs"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Capitalized display label."""
        return self.value.capitalize()


# Only categories with at least one commit are present, in Category order
ClassificationResult = dict[Category, tuple[Commit, ...]]

# Lower-cased word -> occurrences across the working set
KeywordFrequency = Counter[str]
