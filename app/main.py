import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from app.container import container
from app.exception import BusinessException
from app.image.router import router as image_router
from app.video.router import router as video_router

# Logging
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # Startup
    logger.info("Flavorfolio Recipe Extractor API starting...")
    container.wire(modules=[__name__])
    yield
    # Shutdown
    logger.info("Flavorfolio Recipe Extractor API shutting down...")


app = FastAPI(
    title="Flavorfolio Recipe Extractor",
    version="1.0.0",
    lifespan=lifespan
)

Instrumentator().instrument(app).expose(app)


@app.exception_handler(BusinessException)
async def business_exception_handler(request: Request, exc: BusinessException):
    logger.info("business_exception", extra={"path": str(request.url), "error_code": exc.error_code})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
async def health():
    return {"status": "ok"}


# Routers
app.include_router(image_router)
app.include_router(video_router)
