# main.py
import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_database_manager, get_settings, lifespan
from .routers import categories_router, media_router, products_router
from .schemas import ErrorResponse, HealthCheckResponse, RootResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str, detail=None, headers=None) -> JSONResponse:
    body = ErrorResponse(
        error=HTTPStatus(status_code).phrase,
        message=message,
        detail=detail,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, str):
        return error_response(exc.status_code, exc.detail, headers=exc.headers)
    return error_response(exc.status_code, HTTPStatus(exc.status_code).phrase, exc.detail, exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    messages = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in errors
    ]
    return error_response(400, "; ".join(messages) or "Request validation failed", errors)


# Routes
@app.get("/", response_model=RootResponse, tags=["Root"])
async def root():
    """Root endpoint - Always accessible"""
    return RootResponse(
        message=f"Welcome to {settings.app_name}",
        version=settings.app_version,
        docs="/docs",
        health="/health",
        status="running",
        timestamp=datetime.now(timezone.utc).isoformat()
    )


@app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
async def health():
    """Health check endpoint - Always accessible"""
    db_manager = get_database_manager()
    try:
        if db_manager.is_connected():
            await db_manager.get_database().command('ping')
            db_status = "connected"
        else:
            db_status = "disconnected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    return HealthCheckResponse(
        status="healthy",
        database=db_status,
        media="configured" if settings.media_configured else "not configured",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version
    )


app.include_router(products_router)
app.include_router(categories_router)
app.include_router(media_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.reload)
