import enum
import logging
from typing import Optional

from batch_playground.utility.logging.utility import SUCCESS


class Severity(enum.Enum):
    PROGRESS = logging.INFO
    SUCCESS = SUCCESS
    NOTICE = logging.WARNING
    FAILURE = logging.ERROR

    def __str__(self):
        return self.name


def report(severity: Severity, message: str, logger: Optional[logging.Logger] = None):
    """Log a provisioning status line at the level the severity maps to."""
    (logger or logging.getLogger()).log(severity.value, message)
