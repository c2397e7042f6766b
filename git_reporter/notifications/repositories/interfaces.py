"""Repository interfaces for delivering notices."""

from abc import ABC, abstractmethod

from git_reporter.notifications.domain.value_objects import Notice


class NotifierRepository(ABC):
    """Interface for showing notices to the user."""

    @abstractmethod
    def send(self, notice: Notice) -> None:
        """
        Deliver a notice.

        Args:
            notice: The notice to show
        """
        ...
