"""FastAPI application entry point"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.core.config import settings
from backend.app.core.database import init_db
from backend.app.core.logging import setup_logging, get_logger
from backend.app.core.middleware import RequestIDMiddleware, LoggingMiddleware
from backend.app.core.exceptions import (
    MarketplaceException, ValidationException, ConflictException
)

# Setup logging
setup_logging()
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## FreelanceHub - Job Marketplace API

Clients post jobs, freelancers browse and apply, admins moderate.

### Authentication

1. Register at `/api/auth/register` (role `client` or `freelancer`)
2. Login at `/api/auth/login` to get an access token
3. Include the token in the `Authorization` header: `Bearer <token>`

### Roles

* **client**: Post jobs and hire applicants
* **freelancer**: Apply to open jobs
* **admin**: Moderate users and jobs
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and profile"},
        {"name": "Jobs", "description": "Job postings and hiring"},
        {"name": "Applications", "description": "Freelancer and client application views"},
        {"name": "Admin", "description": "Moderation and statistics"},
    ],
)

# Last added runs outermost, so the request ID is set before logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for error in exc.errors():
        # Drop the "body"/"query" prefix from the location
        location = [str(part) for part in error.get("loc", ())[1:]]
        message = error.get("msg", "Invalid value")
        if error.get("type") == "value_error" and error.get("ctx", {}).get("error"):
            message = str(error["ctx"]["error"])
        errors.append({"field": ".".join(location), "message": message})
    return errors


# Exception handlers
@app.exception_handler(MarketplaceException)
async def marketplace_exception_handler(request: Request, exc: MarketplaceException):
    """Handle domain exceptions"""
    request_id = _request_id(request)
    
    logger.warning(
        f"Request refused: {exc.message}",
        extra={"request_id": request_id, "status_code": exc.status_code}
    )
    
    content = {"message": exc.message, "request_id": request_id}
    if isinstance(exc, ValidationException) and exc.errors:
        content["errors"] = exc.errors
    if exc.details:
        content["details"] = exc.details
    
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report every violated field rule at once"""
    request_id = _request_id(request)
    errors = _field_errors(exc)
    
    logger.warning(f"Validation error: {errors}", extra={"request_id": request_id})
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Validation failed",
            "errors": errors,
            "request_id": request_id,
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework errors (unknown route, wrong method) in the same envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "request_id": _request_id(request)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Constraint violations that slipped past the service checks become 409"""
    logger.error(
        f"Database integrity error: {str(exc)}",
        extra={"request_id": _request_id(request)},
        exc_info=True
    )
    
    conflict = ConflictException("The operation conflicts with existing data")
    return await marketplace_exception_handler(request, conflict)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log the failure, return nothing internal"""
    request_id = _request_id(request)
    
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True
    )
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server error", "request_id": request_id}
    )


@app.on_event("startup")
async def startup_event():
    """Application startup tasks"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown tasks"""
    logger.info("Shutting down application")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# API routers
from backend.app.api import auth, jobs, applications, admin  # noqa: E402

app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Authentication"])
app.include_router(jobs.router, prefix=f"{settings.API_PREFIX}/jobs", tags=["Jobs"])
app.include_router(applications.router, prefix=f"{settings.API_PREFIX}/applications", tags=["Applications"])
app.include_router(admin.router, prefix=f"{settings.API_PREFIX}/admin", tags=["Admin"])
