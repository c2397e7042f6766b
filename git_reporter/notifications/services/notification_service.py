"""Service for orchestrating user-visible notices."""

from git_reporter.core.logging import get_logger
from git_reporter.notifications.domain.value_objects import Notice, NoticeLevel
from git_reporter.notifications.repositories.interfaces import NotifierRepository

logger = get_logger(__name__)


class NotificationService:
    """Service for orchestrating notification operations."""

    def __init__(self, notifier: NotifierRepository) -> None:
        """Initialize the notification service.

        Args:
            notifier: Repository that delivers notices to the user
        """
        self._notifier = notifier

    def info(self, text: str) -> None:
        self._send(Notice(level=NoticeLevel.INFO, text=text))

    def warning(self, text: str) -> None:
        self._send(Notice(level=NoticeLevel.WARNING, text=text))

    def error(self, text: str) -> None:
        self._send(Notice(level=NoticeLevel.ERROR, text=text))

    def _send(self, notice: Notice) -> None:
        logger.debug("notice_sent", level=notice.level.value, text=notice.text)
        self._notifier.send(notice)
