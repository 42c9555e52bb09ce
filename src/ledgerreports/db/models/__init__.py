from ledgerreports.db.models.report import ReportRequest

__all__ = ["ReportRequest"]
