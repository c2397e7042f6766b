"""Heuristic classification of commits by intent."""

import re
from collections import Counter
from collections.abc import Iterable, Sequence

from git_reporter.classification.domain.value_objects import (
    Category,
    ClassificationResult,
    KeywordFrequency,
)
from git_reporter.git.domain.entities import Commit

# Conventional prefix -> category, checked with startswith on the lowered message
PREFIX_CATEGORIES: tuple[tuple[str, Category], ...] = (
    ("feat", Category.FEATURE),
    ("fix", Category.FIX),
    ("docs", Category.DOCS),
    ("refactor", Category.REFACTOR),
    ("test", Category.TEST),
    ("chore", Category.CHORE),
)

# Substring keywords, in priority order
KEYWORD_CATEGORIES: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.FEATURE, ("implement", "add", "new", "feature")),
    (Category.FIX, ("fix", "bug", "issue", "error")),
    (Category.DOCS, ("document", "readme", "comment")),
    (Category.REFACTOR, ("refactor", "restructure", "improve", "clean")),
    (Category.TEST, ("test", "spec", "assert")),
    (Category.CHORE, ("config", "version", "upgrade", "bump", "merge")),
)

FEATURE_WORDS: tuple[str, ...] = ("implement", "add", "new", "feature")
BUG_FIX_WORDS: tuple[str, ...] = ("bug", "issue", "error", "problem", "resolve")

STOPWORDS: frozenset[str] = frozenset(
    {"the", "a", "an", "and", "in", "on", "at", "to", "for", "with", "by",
     "from", "into", "this", "that"}
)
MIN_KEYWORD_LENGTH = 4

_CONVENTIONAL_PREFIX = re.compile(
    r"^(feat|fix|docs|refactor|test|chore)(\(.*?\))?(?!\w):?\s*", re.IGNORECASE
)
_FEATURE_PREFIX = re.compile(r"^feat(\(.*?\))?(?!\w):?\s*", re.IGNORECASE)
_FIX_PREFIX = re.compile(r"^fix(\(.*?\))?(?!\w):?\s*", re.IGNORECASE)
_NON_WORD = re.compile(r"[^\w\s]")


def capitalize_first_letter(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def clean_message(message: str) -> str:
    """Strip a conventional commit prefix such as "feat(ui):"."""
    return _CONVENTIONAL_PREFIX.sub("", message, count=1).strip()


class ClassificationService:
    """Assigns commits to categories and extracts recurring keywords."""

    def categorize(self, commit: Commit) -> Category:
        """
        Pick the single category of a commit.

        A conventional prefix decides first; otherwise the first keyword group
        found anywhere in the message wins.

        Args:
            commit: Commit to categorize

        Returns:
            The commit's category, OTHER when nothing matches
        """
        message = commit.message.lower()
        for prefix, category in PREFIX_CATEGORIES:
            if message.startswith(prefix):
                return category
        for category, words in KEYWORD_CATEGORIES:
            if any(word in message for word in words):
                return category
        return Category.OTHER

    def classify(self, commits: Iterable[Commit]) -> ClassificationResult:
        """
        Group commits by category.

        Args:
            commits: Commits to classify

        Returns:
            Mapping of category to its commits in input order; empty categories
            are left out
        """
        groups: dict[Category, list[Commit]] = {category: [] for category in Category}
        for commit in commits:
            groups[self.categorize(commit)].append(commit)
        return {category: tuple(items) for category, items in groups.items() if items}

    def extract_keywords(self, commits: Iterable[Commit]) -> KeywordFrequency:
        """
        Count meaningful words across commit messages.

        Args:
            commits: Commits whose messages are scanned

        Returns:
            Counter of lower-cased words longer than three characters that are
            not stopwords
        """
        keywords: KeywordFrequency = Counter()
        for commit in commits:
            words = _NON_WORD.sub(" ", commit.message.lower()).split()
            keywords.update(
                word for word in words
                if len(word) >= MIN_KEYWORD_LENGTH and word not in STOPWORDS
            )
        return keywords

    def top_keywords(self, commits: Iterable[Commit], limit: int = 5) -> list[tuple[str, int]]:
        """Most frequent keywords, ties kept in first-seen order."""
        return self.extract_keywords(commits).most_common(limit)

    def identify_features(self, commits: Sequence[Commit]) -> list[str]:
        """
        Describe feature work in one line per commit.

        Args:
            commits: Commits to scan

        Returns:
            Capitalized descriptions with "feat:", "add" and "implement"
            prefixes removed
        """
        features: list[str] = []
        for commit in commits:
            message = commit.message.lower()
            if not (message.startswith("feat") or any(w in message for w in FEATURE_WORDS)):
                continue
            feature = _FEATURE_PREFIX.sub("", commit.message, count=1)
            feature = re.sub(r"^add\b\s*", "", feature, count=1, flags=re.IGNORECASE)
            feature = re.sub(r"^implement\b\s*", "", feature, count=1, flags=re.IGNORECASE)
            feature = capitalize_first_letter(feature.strip())
            if feature:
                features.append(feature)
        return features

    def identify_bug_fixes(self, commits: Sequence[Commit]) -> list[str]:
        """
        Describe bug fixes in one line per commit.

        Args:
            commits: Commits to scan

        Returns:
            Capitalized descriptions with "fix:" and "fixed" prefixes removed
        """
        fixes: list[str] = []
        for commit in commits:
            message = commit.message.lower()
            if not (message.startswith("fix") or any(w in message for w in BUG_FIX_WORDS)):
                continue
            fix = _FIX_PREFIX.sub("", commit.message, count=1)
            fix = re.sub(r"^fixed\b\s*", "", fix, count=1, flags=re.IGNORECASE)
            fix = capitalize_first_letter(fix.strip())
            if fix:
                fixes.append(fix)
        return fixes
