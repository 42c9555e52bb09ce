from ledgerreports.db.repos.report_repo import ReportRepo

__all__ = ["ReportRepo"]
