from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from app.config.settings import settings

logger = logging.getLogger(__name__)

def setup_logging(level: str) -> None:
    """Configurar logging raíz de la aplicación"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

def setup_middleware(app: FastAPI):
    """CORS y registro de tiempo por petición"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        # 4xx/5xx en warning
        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response
