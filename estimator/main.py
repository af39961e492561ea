from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from estimator.core.errors import NotFoundError, ValidationError
from estimator.core.logging import configure_logging
from estimator.models import dupa_template, project, project_boq  # noqa: F401
from estimator.routers.dupa_templates import router as dupa_templates_router
from estimator.routers.equipment import router as equipment_router
from estimator.routers.labor_rates import router as labor_rates_router
from estimator.routers.material_prices import router as material_prices_router
from estimator.routers.materials import router as materials_router
from estimator.routers.pay_items import router as pay_items_router
from estimator.routers.project_boq import router as project_boq_router
from estimator.routers.projects import router as projects_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    title="DPWH Construction Cost Estimator",
    lifespan=lifespan,
)


@app.middleware("http")
async def catch_unhandled_exceptions(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled exception", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


app.include_router(labor_rates_router)
app.include_router(equipment_router)
# /master/materials/prices must be matched before /master/materials/{material_id}
app.include_router(material_prices_router)
app.include_router(materials_router)
app.include_router(pay_items_router)
app.include_router(dupa_templates_router)
app.include_router(projects_router)
app.include_router(project_boq_router)


@app.get("/")
def root():
    return {"status": "DPWH Construction Cost Estimator running"}


@app.get("/health")
def health():
    return {
        "status": "ok",
        "version": "1.0.0",
    }
