"""
Main FastAPI application
Quiz authoring and quiz-taking API with JWT authentication
"""
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
import uuid

from quizzypop.config import settings
from quizzypop.database import SessionLocal, init_db
from quizzypop.exceptions import QuizzyPopError, UnauthorizedError
from quizzypop.api import auth, categories, quizzes, questions, submissions
from quizzypop.seed import seed_demo_data

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Backend for creating quizzes, taking them and getting scored feedback",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag each request with a trace id and log it with timing"""

    trace_id = uuid.uuid4().hex
    request.state.trace_id = trace_id
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    response.headers["X-Trace-Id"] = trace_id

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Duration: {duration:.3f}s - "
        f"Trace: {trace_id}"
    )

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors; the client only sees a generic envelope"""

    trace_id = getattr(request.state, "trace_id", None) or uuid.uuid4().hex
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path} (trace {trace_id}): {str(exc)}",
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content={
            "type": "https://httpstatuses.com/500",
            "title": "An unexpected error occurred.",
            "status": 500,
            "traceId": trace_id
        }
    )


# Domain exception handler
@app.exception_handler(QuizzyPopError)
async def domain_exception_handler(request: Request, exc: QuizzyPopError):
    """Validation, not-found, conflict and auth failures raised by services"""

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "status_code": exc.status_code
        },
        headers=headers
    )


# Request validation handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Schema failures share the 400 envelope of service-level validation, naming each field"""

    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"][1:])
        problems.append(f"{field}: {error['msg']}" if field else error["msg"])

    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": "; ".join(problems),
            "status_code": 400
        }
    )


# HTTP exception handler
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Format HTTP exceptions consistently"""

    if isinstance(exc.detail, dict):
        content = {**exc.detail, "status_code": exc.status_code}
    else:
        content = {
            "error": "http_error",
            "message": exc.detail,
            "status_code": exc.status_code
        }
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Service status for monitoring"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": time.time()
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "QuizzyPop API",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }


# Include routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(quizzes.router)
app.include_router(questions.router)
app.include_router(submissions.router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize database and optional demo data on startup"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()

    logger.info("Application startup complete")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down application")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "quizzypop.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
