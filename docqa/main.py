from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import time
import structlog

from docqa.config import CORS_MAX_AGE, CORS_ORIGINS
from docqa.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from docqa.routers import documents as documents_router
from docqa.routers import quiz as quiz_router
from docqa.services.logging import configure_logging, log_api_request
from docqa.services.monitoring import health_checker, get_metrics, REQUEST_COUNT, REQUEST_DURATION

# Configure logging
configure_logging()
logger = structlog.get_logger()

app = FastAPI(
    title="Document Q&A",
    description="Upload a document, answer generated questions, get scored feedback",
    version="1.0.0"
)

# Open CORS; credentials are never sent by the browser client
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
    max_age=CORS_MAX_AGE,
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
# Applies the default limits to routes without their own decorator
app.add_middleware(SlowAPIMiddleware)


# Add middleware for request logging and metrics
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()

    log_api_request(request)

    try:
        response = await call_next(request)
    except Exception as e:
        REQUEST_COUNT.labels(method=request.method, endpoint=request.url.path, status=500).inc()
        log_api_request(request, error=e)
        raise

    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=request.url.path,
        status=response.status_code
    ).inc()

    REQUEST_DURATION.labels(
        method=request.method,
        endpoint=request.url.path
    ).observe(process_time)

    response.response_time = process_time
    log_api_request(request, response)

    return response


# ----------------- Health & Monitoring Endpoints -----------------
@app.get("/")
async def root():
    return {"message": "Document Q&A API is running"}


@app.get("/api")
async def api_status():
    return {"status": "ok", "message": "Document Q&A API is running"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return health_checker.get_health_status()


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return get_metrics()


# ----------------- Routers -----------------
app.include_router(documents_router.router)
app.include_router(quiz_router.router)
