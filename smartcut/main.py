import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .domain.admin.router import router as admin_router
from .domain.appointments.router import router as appointments_router
from .domain.auth.router import router as auth_router
from .domain.barbers.router import router as barbers_router
from .domain.barbers.router import services_router
from .domain.reviews.router import router as reviews_router
from .domain.salons.router import router as salons_router
from .exceptions import InconsistentDataError, SmartCutError
from .storage import Storage, build_storage

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("passlib").setLevel(logging.ERROR)


def create_app(
    storage: Optional[Storage] = None,
    seed: Optional[bool] = None,
    strict_status_transitions: Optional[bool] = None,
    prevent_double_booking: Optional[bool] = None,
) -> FastAPI:
    """
    Build the API. Anything not passed explicitly comes from ``smartcut.config``.

    The store is initialized when the app starts and closed when it stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting up...")
        store = storage or build_storage()
        store.init(seed=config.SEED_DATA if seed is None else seed)
        app.state.storage = store
        logger.info(f"✅ Storage ready ({type(store).__name__})")

        yield

        logger.info("Application shutting down...")
        store.close()

    app = FastAPI(title="SmartCut Booking API", version="1.0.0", lifespan=lifespan)

    app.state.strict_status_transitions = (
        config.STRICT_STATUS_TRANSITIONS if strict_status_transitions is None else strict_status_transitions
    )
    app.state.prevent_double_booking = (
        config.PREVENT_DOUBLE_BOOKING if prevent_double_booking is None else prevent_double_booking
    )

    @app.exception_handler(SmartCutError)
    async def domain_exception_handler(request: Request, exc: SmartCutError):
        if isinstance(exc, InconsistentDataError):
            logger.error(f"❌ {request.method} {request.url.path} - {exc.message}")
            return JSONResponse(status_code=exc.status_code, content={"detail": "Data inconsistency detected"})

        logger.warning(f"{request.method} {request.url.path} - {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error for {request.url.path}: {jsonable_errors(exc)}")
        return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
            raise

    logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(auth_router)
    app.include_router(salons_router)
    app.include_router(barbers_router)
    app.include_router(services_router)
    app.include_router(appointments_router)
    app.include_router(reviews_router)
    app.include_router(admin_router)

    @app.get("/")
    def root():
        return {"message": "SmartCut Booking API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the raw input, which may carry passwords"""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


app = create_app()
