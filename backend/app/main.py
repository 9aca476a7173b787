import time

from fastapi import FastAPI, Request, status, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import get_settings
from app.database import init_db, ping_db, close_db
from app.errors import AppError
from app.utils.logger import get_logger
from app.rate_limit import limiter
from app.schemas import HealthOut

logger = get_logger("main")
settings = get_settings()

# Routers
from app.routers import applications as applications_router
from app.routers import attachments as attachments_router
from app.routers import internships as internships_router
from app.services.socket_service import (
    ChatNamespace,
    build_chat_relay,
    create_socket_server,
    get_socket_app,
)

app = FastAPI(
    title="Mentorship Gateway API",
    debug=settings.APP_DEBUG,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(applications_router.router)
app.include_router(attachments_router.router)
app.include_router(internships_router.router)

# Real-time chat: one relay (and its connection registry) per process
sio = create_socket_server()
chat_relay = build_chat_relay(sio)
sio.register_namespace(ChatNamespace(chat_relay))

# Served app: Socket.IO on /socket.io, everything else goes to FastAPI
asgi_app = get_socket_app(sio, other_asgi_app=app)


# Error handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{type(exc).__name__} ({exc.status_code}): {exc.log_message} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={exc.detail_key: exc.detail},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "status_code": exc.status_code}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error: {exc.errors()} - Path: {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors(), "status_code": 422}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"}
    )


# Middleware Logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.3f}s"
    )
    return response


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "API is running..."


@app.get("/api/health", response_model=HealthOut)
async def health():
    return HealthOut(status="ok")


@app.get("/readyz")
async def readyz():
    if not await ping_db():
        raise HTTPException(status_code=503, detail="Database not ready")
    return {"status": "ok", "database": "up"}


@app.on_event("startup")
async def on_startup():
    logger.info("Starting application...")
    await init_db()
    logger.info("Database initialized")
    logger.info(f"Server running on port {settings.PORT}")


@app.on_event("shutdown")
async def on_shutdown():
    await chat_relay.aclose(timeout=settings.API_TIMEOUT_SECONDS)
    logger.info("Chat relay stopped")
    close_db()
    logger.info("Shutting down application...")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:asgi_app", host="0.0.0.0", port=settings.PORT)
