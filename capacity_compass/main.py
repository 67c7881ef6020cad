import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from capacity_compass.config import settings
from capacity_compass.exceptions import (
    CapacityCompassError,
    capacity_compass_exception_handler,
    general_exception_handler,
    http_exception_handler,
    pydantic_validation_exception_handler,
    validation_exception_handler,
)
from capacity_compass.routers import estimates, forecast


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(level=settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info("Capacity Compass API starting up...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Host: {settings.host}, Port: {settings.port}")
    logger.info(f"Debug mode: {settings.debug}")
    yield
    # Shutdown
    logger.info("Capacity Compass API shutting down...")


app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(CapacityCompassError, capacity_compass_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(forecast.router)
app.include_router(estimates.router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return JSONResponse({"status": "healthy", "message": "OK"})


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return JSONResponse({"message": settings.api_title, "status": "active"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "capacity_compass.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
