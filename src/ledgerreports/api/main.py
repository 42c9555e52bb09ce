import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

from ledgerreports.api.reports import router as reports_router
from ledgerreports.container import Container

logger = logging.getLogger("ledgerreports.api")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    settings = container.settings()

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = container.report_scheduler()
        scheduler.start()
    yield
    if scheduler is not None:
        await scheduler.stop()
    engine = container.engine()
    await engine.dispose()


app = FastAPI(title="Ledger Reports", version=VERSION, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(reports_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION}
