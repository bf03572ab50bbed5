# app/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.core.middleware import setup_logging, setup_middleware
from app.api.v1.router import api_router

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

@asynccontextmanager
async def lifespan(app: FastAPI):
    db_host = settings.database_url.rsplit('@', 1)[-1]
    logger.info(f"{settings.app_name} v{settings.version} iniciando (BD: {db_host}, IGV: {settings.tax_rate})")
    yield
    logger.info(f"{settings.app_name} detenido")

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Sistema de gestión para taller de reparaciones: ventas, inventario y clientes",
    lifespan=lifespan
)

setup_middleware(app)

app.include_router(api_router, prefix=API_PREFIX)

@app.get("/")
async def root():
    return {"app": settings.app_name, "version": settings.version, "api": API_PREFIX}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.version}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
