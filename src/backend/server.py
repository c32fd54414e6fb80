"""
Kinematics Engine Backend Server

FastAPI server exposing the kinematic solvers over HTTP+JSON.
Provides endpoints for IK/FK solves, trajectory profiling, motion intent
compression, the chain catalog, health and stats.
"""

import math
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from kinematics_engine import __version__
from kinematics_engine.core.config import load_engine_config, resolve_config_dir
from kinematics_engine.core.exceptions import ChainNotFoundError
from kinematics_engine.core.logging import configure_logging, get_logger, request_context
from backend.kinematics_service import KinematicsService

# Determine project root for config paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = resolve_config_dir(PROJECT_ROOT / "config")

config = load_engine_config(CONFIG_DIR)

configure_logging(config.logging)
logger = get_logger(__name__)

API_PREFIX = "/api/v1/kinematics"

# ---------------------------------------------------------------------------
# Pydantic request/response models
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    uptime_secs: int
    total_solves: int


class StatsResponse(BaseModel):
    total_ik_solves: int
    total_fk_solves: int
    total_compressions: int
    total_trajectories: int


class ChainInfo(BaseModel):
    id: str
    name: str
    description: str
    dof: int
    joint_type: str


# -- IK models --

class IkConstraints(BaseModel):
    max_iterations: Optional[int] = Field(default=None, ge=0)
    tolerance: Optional[float] = None


class IkRequest(BaseModel):
    chain_id: Optional[str] = None  # accepted for catalog clients, not used
    target_position: List[float] = Field(min_length=3, max_length=3)
    target_orientation: Optional[List[float]] = Field(default=None, min_length=4, max_length=4)
    joint_count: Optional[int] = Field(default=None, ge=0)
    constraints: Optional[IkConstraints] = None


class IkResponse(BaseModel):
    solution_id: str
    joint_angles: List[float]
    iterations: int
    converged: bool
    error_distance: float
    elapsed_us: int


# -- FK models --

class FkRequest(BaseModel):
    chain_id: Optional[str] = None
    joint_angles: List[float]
    link_lengths: Optional[List[float]] = None


class FkResponse(BaseModel):
    end_effector_position: List[float]
    end_effector_orientation: List[float]
    joint_positions: List[List[float]]
    elapsed_us: int


# -- Intent models --

class MotionSampleModel(BaseModel):
    timestamp_ms: int = Field(ge=0)
    position: List[float] = Field(min_length=3, max_length=3)
    velocity: Optional[List[float]] = Field(default=None, min_length=3, max_length=3)


class IntentRequest(BaseModel):
    samples: List[MotionSampleModel]
    sample_rate_hz: Optional[int] = Field(default=None, ge=0)  # accepted, not used


class IntentResponse(BaseModel):
    intent_id: str
    compressed_bytes: int
    original_samples: int
    compression_ratio: float
    intent_type: str
    direction: List[float]
    magnitude: float
    elapsed_us: int


# -- Trajectory models --

class TrajectoryRequest(BaseModel):
    waypoints: List[List[float]]
    max_velocity: Optional[float] = None
    max_acceleration: Optional[float] = None  # accepted, not used
    smoothness: Optional[float] = None  # accepted, not used


class TrajectoryPointModel(BaseModel):
    position: List[float]
    velocity: List[float]
    time: float


class TrajectoryResponse(BaseModel):
    trajectory_id: str
    optimized_waypoints: List[TrajectoryPointModel]
    total_distance: float
    total_time: float
    max_velocity_reached: float
    elapsed_us: int


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------


def _finite(value: Any) -> Any:
    """Replace NaN and infinities with None, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


class FiniteJSONResponse(JSONResponse):
    """JSON response that renders non-finite floats as null."""

    def render(self, content: Any) -> bytes:
        return super().render(_finite(content))


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------

class AppState:
    """Application state container, one instance per process."""

    def __init__(self) -> None:
        self.start_time = time.monotonic()
        self.kinematics_service = KinematicsService()

    @property
    def uptime_secs(self) -> int:
        return int(time.monotonic() - self.start_time)


# ---------------------------------------------------------------------------
# FastAPI app setup
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(application: FastAPI):
    """Application lifespan: log the effective configuration on startup."""
    logger.info(
        "engine_starting",
        version=__version__,
        config_dir=str(CONFIG_DIR) if CONFIG_DIR else None,
        cors_origins=config.server.cors_origins,
    )
    yield


app = FastAPI(
    title="Kinematics Engine API",
    version=__version__,
    description="REST API for kinematic computation on articulated chains",
    lifespan=lifespan,
    default_response_class=FiniteJSONResponse,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


REQUEST_ID_HEADER = "X-Request-ID"


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log every HTTP request with method, path, status, and duration.

    Every log line emitted while handling the request carries its id, taken
    from the ``X-Request-ID`` header when the client sends one.
    """
    with request_context(request.headers.get(REQUEST_ID_HEADER)) as request_id:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration_ms, 1),
        )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


state = AppState()


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return errors in the { status, error } format clients expect."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "error": exc.detail},
    )


@app.exception_handler(ChainNotFoundError)
async def chain_not_found_handler(request: Request, exc: ChainNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"status": "error", "error": exc.message, "details": exc.details},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all so clients always get structured JSON, never raw HTML."""
    logger.error(
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"status": "error", "error": "Internal server error"},
    )


# ---------------------------------------------------------------------------
# Health & stats
# ---------------------------------------------------------------------------

@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        uptime_secs=state.uptime_secs,
        total_solves=state.kinematics_service.stats.total_solves,
    )


@app.get(f"{API_PREFIX}/stats", response_model=StatsResponse)
def stats() -> StatsResponse:
    return StatsResponse(**state.kinematics_service.stats.snapshot())


# ---------------------------------------------------------------------------
# Chain catalog
# ---------------------------------------------------------------------------

@app.get(f"{API_PREFIX}/chains", response_model=List[ChainInfo])
def chains() -> List[Dict[str, Any]]:
    return state.kinematics_service.get_chains()


@app.get(f"{API_PREFIX}/chains/{{chain_id}}", response_model=ChainInfo)
def chain(chain_id: str) -> Dict[str, Any]:
    return state.kinematics_service.get_chain(chain_id)


# ---------------------------------------------------------------------------
# Solvers
# ---------------------------------------------------------------------------

# Solver routes are sync so they run on the server's worker thread pool.

@app.post(f"{API_PREFIX}/solve-ik", response_model=IkResponse)
def solve_ik(body: IkRequest) -> Dict[str, Any]:
    constraints = body.constraints or IkConstraints()
    return state.kinematics_service.solve_ik(
        body.target_position,
        target_orientation=body.target_orientation,
        joint_count=body.joint_count,
        max_iterations=constraints.max_iterations,
        tolerance=constraints.tolerance,
    )


@app.post(f"{API_PREFIX}/solve-fk", response_model=FkResponse)
def solve_fk(body: FkRequest) -> Dict[str, Any]:
    return state.kinematics_service.solve_fk(body.joint_angles, body.link_lengths)


@app.post(f"{API_PREFIX}/compress-intent", response_model=IntentResponse)
def compress_intent(body: IntentRequest) -> Dict[str, Any]:
    return state.kinematics_service.compress_intent(
        [sample.model_dump() for sample in body.samples]
    )


@app.post(f"{API_PREFIX}/optimize-trajectory", response_model=TrajectoryResponse)
def optimize_trajectory(body: TrajectoryRequest) -> Dict[str, Any]:
    return state.kinematics_service.optimize_trajectory(body.waypoints, body.max_velocity)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the FastAPI server with uvicorn."""
    import uvicorn

    host = host or config.server.host
    port = port or config.server.port
    logger.info("engine_listening", host=host, port=port)
    logger.info("Press Ctrl+C to stop")

    uvicorn.run(app, host=host, port=port, log_level=config.logging.level.lower())


if __name__ == "__main__":
    run_server()
