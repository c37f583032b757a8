"""Notifications emitted after a state change has been committed."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from src.logger_config import get_logger


@dataclass(frozen=True, slots=True)
class Admitted:
    participant: str
    event_id: int
    event_name: str


@dataclass(frozen=True, slots=True)
class Minted:
    recipient: str
    token_id: int


@dataclass(frozen=True, slots=True)
class Withdrawn:
    recipient: str
    amount: int


Notification = Admitted | Minted | Withdrawn


class NotificationSink(ABC):
    @abstractmethod
    def emit(self, notification: Notification) -> None: ...


class LoggingNotificationSink(NotificationSink):
    """Default sink: writes every notification to the application log."""

    def __init__(self) -> None:
        self.logger = get_logger('notifications')

    def emit(self, notification: Notification) -> None:
        self.logger.info(f'{type(notification).__name__}: {notification}')


@dataclass
class InMemoryNotificationSink(NotificationSink):
    """Keeps notifications in order, for tests and demos."""

    notifications: list[Notification] = field(default_factory=list)

    def emit(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def of_type(self, kind: type) -> list[Notification]:
        return [n for n in self.notifications if isinstance(n, kind)]
