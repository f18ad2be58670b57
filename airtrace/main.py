# path: airtrace-api/airtrace/main.py

from concurrent.futures import ProcessPoolExecutor
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from airtrace.api.routes.aqi import router as aqi_router
from airtrace.api.routes.routes import router as routes_router
from airtrace.config import get_settings
from airtrace.services.aqicn_client import AQICNClient
from airtrace.services.routing_client import OSRMRoutingClient

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.settings = settings
    app.state.routing_client = OSRMRoutingClient(settings)
    app.state.sensor_client = AQICNClient(settings)
    app.state.scoring_executor = None
    if settings.scoring_workers > 1:
        app.state.scoring_executor = ProcessPoolExecutor(max_workers=settings.scoring_workers)
        logger.info("Route scoring pool started with %d workers", settings.scoring_workers)
    yield
    if app.state.scoring_executor is not None:
        app.state.scoring_executor.shutdown(wait=True)
        logger.info("Route scoring pool stopped")


app = FastAPI(
    title="airtrace-api",
    description="Scores driving routes by estimated air-quality exposure",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes_router)
app.include_router(aqi_router)


@app.get("/health")
def health():
    return {"status": "ok"}
