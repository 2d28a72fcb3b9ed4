"""
Main application entry point
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .api.dependencies import shutdown_interaction_loader
from .api.routes import router as api_router
from .core.config import settings
from .core.exceptions import CallPulseException
from .core.logging import bind_remote_api, setup_logging, get_logger

# Set up logging
setup_logging()
bind_remote_api(settings.INSIGHTS_API_BASE_URL)
logger = get_logger(__name__)

app = FastAPI(
    title="CallPulse Supervisor Analytics API",
    description="Normalized contact-center interactions discovered from an undocumented API",
    version="1.0.0"
)

# Get CORS origins from settings
cors_origins = settings.get_cors_origins()
logger.info("Configuring CORS", allowed_origins=cors_origins)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.exception_handler(CallPulseException)
async def callpulse_exception_handler(request: Request, exc: CallPulseException):
    """Remote API failures that escape a route become structured 502 responses"""
    logger.error("Unhandled remote API error",
                 path=request.url.path,
                 error=exc.message,
                 error_code=exc.error_code)
    return JSONResponse(
        status_code=502,
        content={"detail": {"message": exc.message, "error_code": exc.error_code, "details": exc.details}}
    )

@app.on_event("startup")
async def startup_event():
    """Log where interaction data will be discovered from"""
    logger.info("Starting application",
                spec_url=settings.INSIGHTS_API_BASE_URL + settings.SPEC_PATH,
                excluded_endpoints=settings.get_excluded_endpoints())

@app.on_event("shutdown")
async def shutdown_event():
    """Release the remote API client"""
    logger.info("Shutting down application")
    await shutdown_interaction_loader()

@app.get("/")
async def root():
    return {"message": "CallPulse Supervisor Analytics"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
