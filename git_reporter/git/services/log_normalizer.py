"""Normalization of raw git log records into Commit entities."""

import json
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from dateutil import parser as date_parser

from git_reporter.core.logging import get_logger
from git_reporter.git.domain.entities import Commit
from git_reporter.git.domain.errors import ParseError
from git_reporter.git.domain.value_objects import RawLogRecord

logger = get_logger(__name__)

MISSING_HASH = "[No hash]"
MISSING_MESSAGE = "[No message]"
MISSING_AUTHOR = "Unknown"

# Tried in order; the primary field is sometimes empty when the message
# contains characters that break structured log output.
MESSAGE_FIELDS: tuple[str, ...] = ("message", "subject", "body")


class LogNormalizer:
    """Turns loosely-shaped git log records into immutable Commit entities."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        """
        Initialize LogNormalizer.

        Args:
            clock: Returns the current local time, used when a date is unusable
        """
        self._clock = clock

    def normalize(self, records: Iterable[RawLogRecord]) -> tuple[Commit, ...]:
        """
        Normalize a batch of raw records.

        A record that cannot be normalized is logged and skipped; the rest of
        the batch is still returned.

        Args:
            records: Raw records as returned by the repository layer

        Returns:
            Commits in the same order as the input records
        """
        commits: list[Commit] = []
        skipped = 0
        for index, record in enumerate(records):
            try:
                commits.append(self.normalize_record(record))
            except ParseError as e:
                skipped += 1
                logger.warning("commit_record_skipped", index=index, error=str(e))

        logger.debug("commit_records_normalized", commits=len(commits), skipped=skipped)
        return tuple(commits)

    def normalize_record(self, record: RawLogRecord) -> Commit:
        """
        Normalize a single raw record.

        Args:
            record: Raw record

        Returns:
            Commit with every required field populated

        Raises:
            ParseError: If the record cannot be read at all
        """
        if not isinstance(record, Mapping):
            raise ParseError(f"Expected a mapping, got {type(record).__name__}")

        try:
            commit_date = self._parse_date(record.get("date"))

            embedded = self._decode_embedded_json(record.get("body"))
            if embedded is not None:
                return Commit(
                    hash=_text(embedded.get("hash")) or _text(record.get("hash")) or MISSING_HASH,
                    date=commit_date,
                    message=_text(embedded.get("message")) or MISSING_MESSAGE,
                    author=(
                        _text(embedded.get("author"))
                        or _text(record.get("author_name"))
                        or MISSING_AUTHOR
                    ),
                )

            commit_hash = _text(record.get("hash")) or MISSING_HASH
            message = self._extract_message(record)
            if message == MISSING_MESSAGE:
                logger.info("missing_commit_message", hash=commit_hash)

            author = (
                _text(record.get("author_name"))
                or _text(record.get("author"))
                or MISSING_AUTHOR
            )
        except (TypeError, ValueError, AttributeError, OverflowError) as e:
            raise ParseError(f"Malformed log record: {e}") from e

        return Commit(hash=commit_hash, date=commit_date, message=message, author=author)

    @staticmethod
    def _extract_message(record: RawLogRecord) -> str:
        for key in MESSAGE_FIELDS:
            value = _text(record.get(key))
            if value:
                return value
        return MISSING_MESSAGE

    def _parse_date(self, value: Any) -> datetime:
        """Parse a commit date leniently, substituting now when unusable."""
        if isinstance(value, datetime):
            parsed: datetime | None = value
        else:
            parsed = None
            text = _text(value)
            if text:
                try:
                    parsed = date_parser.parse(text)
                except (ValueError, OverflowError) as e:
                    logger.debug("commit_date_unparseable", value=text, error=str(e))

        if parsed is not None and parsed.tzinfo is not None:
            # Convert to local wall-clock time for day bucketing
            try:
                parsed = parsed.astimezone().replace(tzinfo=None)
            except (ValueError, OverflowError) as e:
                logger.debug("commit_date_unconvertible", value=str(value), error=str(e))
                parsed = None

        if parsed is None:
            fallback = self._clock()
            logger.warning(
                "invalid_commit_date", value=str(value), substituted=fallback.isoformat()
            )
            return fallback
        return parsed

    @staticmethod
    def _decode_embedded_json(body: Any) -> Mapping[str, Any] | None:
        """Decode a JSON object that a custom log format left in the body."""
        if not isinstance(body, str):
            return None
        stripped = body.strip()
        if not stripped.startswith("{") or '"message"' not in stripped:
            return None
        try:
            decoded = json.loads(stripped)
        except json.JSONDecodeError as e:
            logger.debug("embedded_json_invalid", error=str(e))
            return None
        return decoded if isinstance(decoded, Mapping) else None


def _text(value: Any) -> str:
    """Return a stripped string for scalar values, empty for None."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(f"Unexpected field type {type(value).__name__}")
