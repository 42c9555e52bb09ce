from dependency_injector import containers, providers

from ledgerreports.config import Settings
from ledgerreports.db.session import build_engine, build_session_factory
from ledgerreports.report.processor import ReportProcessor
from ledgerreports.report.scheduler import ReportScheduler
from ledgerreports.report.service import ReportService
from ledgerreports.report.store import ReportRequestStore


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["ledgerreports.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    report_store = providers.Singleton(
        ReportRequestStore,
        session_factory=session_factory,
    )

    report_processor = providers.Singleton(
        ReportProcessor,
        store=report_store,
        ledger_dir=settings.provided.ledger_dir,
        output_dir=settings.provided.output_dir,
    )

    report_scheduler = providers.Singleton(
        ReportScheduler,
        store=report_store,
        processor=report_processor,
        interval_seconds=settings.provided.poll_interval_seconds,
        batch_size=settings.provided.poll_batch_size,
    )

    report_service = providers.Factory(
        ReportService,
        store=report_store,
    )
