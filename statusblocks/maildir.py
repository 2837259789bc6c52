"""Block counting messages in one or more maildir inboxes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .base import Block, State, UpdateRequest, Widget


def _count_entries(directory: Path) -> int:
    try:
        return sum(1 for _ in directory.iterdir())
    except OSError:
        return 0


class MailType(enum.Enum):
    """Which messages of a maildir are counted."""

    NEW = "new"
    CUR = "cur"
    ALL = "all"

    def count(self, path: Path | str) -> int:
        """Number of messages of this kind in the maildir at ``path``."""
        root = Path(path)
        if self is MailType.NEW:
            return _count_entries(root / "new")
        if self is MailType.CUR:
            return _count_entries(root / "cur")
        return _count_entries(root / "new") + _count_entries(root / "cur")


def mail_state(count: int, warning: int, critical: int) -> State:
    """Widget state for a message count and its thresholds."""
    if count >= critical:
        return State.CRITICAL
    if count >= warning:
        return State.WARNING
    return State.IDLE


@dataclass
class MaildirConfig:
    interval: float = 5.0
    inboxes: list[str] = field(default_factory=list)
    threshold_warning: int = 1
    threshold_critical: int = 10
    display_type: MailType = MailType.NEW
    icon: bool = True


class Maildir(Block):
    """Shows the number of messages across the configured inboxes."""

    def __init__(
        self,
        config: Optional[MaildirConfig] = None,
        request_update: Optional[UpdateRequest] = None,
    ) -> None:
        super().__init__(request_update)
        config = config or MaildirConfig()
        self.update_interval = config.interval
        self.inboxes = list(config.inboxes)
        self.threshold_warning = config.threshold_warning
        self.threshold_critical = config.threshold_critical
        self.display_type = config.display_type
        self.text = Widget(text="", icon="mail" if config.icon else None)

    def update(self) -> Optional[float]:
        total = sum(self.display_type.count(inbox) for inbox in self.inboxes)
        self.text.state = mail_state(total, self.threshold_warning, self.threshold_critical)
        self.text.text = str(total)
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.text]