from ledgerreports.domain.enums.report import ReportKind, ReportStatus

__all__ = ["ReportKind", "ReportStatus"]
