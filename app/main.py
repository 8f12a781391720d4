import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.fees.router import router as fees_router
from app.api.v1.payments.router import router as payments_router
from app.api.v1.transactions.router import router as transactions_router
from app.core.config import settings
from app.core.exceptions import StorageError
from app.core.schemas import HealthResponse
from app.db.repository import PaymentRepository, get_repository
from app.db.session import init_models

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("payment-service")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creating tables if missing...")
    await init_models()
    logger.info("Startup complete.")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Enrollment Payments Backend", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(fees_router)
    app.include_router(payments_router)
    app.include_router(transactions_router)

    @app.get("/health", response_model=HealthResponse)
    async def health(repo: PaymentRepository = Depends(get_repository)) -> HealthResponse:
        try:
            await repo.ping()
        except StorageError:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unreachable")
        return HealthResponse(status="ok")

    return app


app = create_app()
