from enum import Enum


class ReportKind(str, Enum):
    """Report types produced from the ledger files."""

    BALANCE = "balance"
    YEARLY = "yearly"
    STATEMENT = "statement"


class ReportStatus(str, Enum):
    """Report request lifecycle: pending -> processing -> completed | error."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (ReportStatus.COMPLETED, ReportStatus.ERROR)
