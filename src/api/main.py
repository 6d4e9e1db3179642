"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import companies, health
from src.config import settings
from src.database import dispose_engine
from src.log_config import configure_logging

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("application_startup", env=settings.app_env)
    yield
    await dispose_engine()
    logger.info("application_shutdown")


app = FastAPI(
    title="Companies API",
    description=(
        "Manage companies and their pricing plans.\n\n"
        "Absolute pricings hold a fixed amount. Relative pricings hold a "
        "multiplier of the base plan cost (0.8 = 80%), so a company with "
        "relative pricings needs one plan with `isBasePlan: true`."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 Bad Request."""
    logger.info("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(health.router, tags=["Health"])
app.include_router(companies.router, prefix=settings.api_prefix, tags=["Companies"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Companies API",
        "version": "1.0.0",
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
