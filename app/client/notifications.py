from pydantic import BaseModel
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    title: str
    description: Optional[str] = None
    variant: str = "default"  # default | destructive


class Notifier:
    """Collects toast-style notifications raised by the views"""

    def __init__(self, on_notify: Optional[Callable[[Notification], None]] = None):
        self.history: List[Notification] = []
        self._on_notify = on_notify

    def notify(self, title: str, description: Optional[str] = None, variant: str = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)
        if self._on_notify is not None:
            self._on_notify(notification)
        return notification

    def error(self, title: str, description: Optional[str] = None) -> Notification:
        return self.notify(title, description, variant="destructive")

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
