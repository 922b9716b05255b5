import logging
from contextlib import asynccontextmanager
from urllib.parse import unquote_to_bytes

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import load_settings
from .schemas import RutaNoEncontrada, Saludo, SaludoUsuario
from .utils import now_iso

logger = logging.getLogger(__name__)

GET_HEAD = ["GET", "HEAD"]
PREFIJO_USUARIO = b"/api/usuario/"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    logger.info("🚀 Servidor ejecutándose en %s", settings.base_url)
    logger.info("📡 API disponible en %s/api/saludo", settings.base_url)
    yield
    logger.info("🛑 Cerrando servidor...")


# Docs and OpenAPI routes would otherwise answer paths the fallback owns
app = FastAPI(
    title="Hola API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)


# === Helpers ===


def segmento_crudo(request: Request, prefijo: bytes) -> bytes:
    """Return the still percent-encoded path segment that follows ``prefijo``.

    Matching happens on ``raw_path`` so an encoded ``%2F`` stays inside the
    segment instead of splitting the path.
    """
    raw = request.scope.get("raw_path") or request.url.path.encode("utf-8")
    raw = raw.split(b"?", 1)[0]
    if not raw.startswith(prefijo):
        raise HTTPException(status_code=404)
    segmento = raw[len(prefijo) :]
    if b"/" in segmento:
        raise HTTPException(status_code=404)
    return segmento


# === Saludos ===


@app.api_route("/", methods=GET_HEAD, response_class=PlainTextResponse)
def hola_mundo() -> str:
    return "¡Hola Mundo desde Express!"


@app.api_route("/api/saludo", methods=GET_HEAD, response_model=Saludo)
def saludo() -> Saludo:
    return Saludo(timestamp=now_iso())


@app.api_route("/api/usuario/{nombre:path}", methods=GET_HEAD, response_model=SaludoUsuario)
def saludo_usuario(request: Request) -> SaludoUsuario:
    nombre = unquote_to_bytes(segmento_crudo(request, PREFIJO_USUARIO)).decode("utf-8", "replace")
    return SaludoUsuario(mensaje=f"¡Hola {nombre}!", usuario=nombre, timestamp=now_iso())


# === Fallback ===


@app.exception_handler(StarletteHTTPException)
async def ruta_no_encontrada(request: Request, exc: StarletteHTTPException):
    """Answer every request no route matched by both method and path.

    The router signals a missing path with 404 and a known path requested
    with another method with 405; both become the same 404 body.
    """
    if exc.status_code not in (404, 405):
        return await http_exception_handler(request, exc)
    logger.debug("No route for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=404, content=RutaNoEncontrada().model_dump())
