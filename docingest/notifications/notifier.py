from abc import ABC, abstractmethod

from docingest.logging.logger import Log


class BaseNotifier(ABC):
    """Contract for the user-notification sink. Fire and forget."""

    @abstractmethod
    def notify_success(self, message: str) -> None: ...

    @abstractmethod
    def notify_error(self, message: str) -> None: ...

    @abstractmethod
    def notify_warning(self, message: str) -> None: ...


class LogNotifier(BaseNotifier):
    """Sends notifications to the application log; for headless use."""

    def notify_success(self, message: str) -> None:
        Log.info(f"[notify] {message}")

    def notify_error(self, message: str) -> None:
        Log.error(f"[notify] {message}")

    def notify_warning(self, message: str) -> None:
        Log.warning(f"[notify] {message}")
