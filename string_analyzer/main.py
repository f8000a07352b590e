from fastapi import FastAPI, Request, status, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
import logging

from string_analyzer.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT, STORAGE_BACKEND
from string_analyzer.database import init_db
from string_analyzer.api.routes import router
from string_analyzer.exceptions import (
    AlreadyExistsError,
    ConflictingFilterError,
    InvalidInputError,
    NotFoundError,
    StringAnalyzerError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="String Analyzer Service",
    description="Analyze, store and query strings by their computed properties",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS_CODES = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    ConflictingFilterError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


# Initialize database on startup
@app.on_event("startup")
def on_startup():
    if STORAGE_BACKEND == "memory":
        logger.info("Using in-memory string store")
        return
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully")


# Include routers
app.include_router(router, tags=["strings"])


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "String Analyzer Service",
        "version": "1.0.0",
        "status": "operational",
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string",
            "GET /docs": "API documentation"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# Domain error handler
@app.exception_handler(StringAnalyzerError)
async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.message} {exc.details}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message}
    )


# Validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    wrong_type = False
    for error in exc.errors():
        field = error['loc'][-1]
        errors[field] = error['msg']
        # A present but non-string "value" is unprocessable rather than malformed
        if error['type'] == 'string_type' and error['loc'][0] == 'body':
            wrong_type = True

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY if wrong_type else status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid data type for 'value' (must be string)" if wrong_type else "Validation failed",
            "details": errors
        }
    )


# HTTPException handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    # Routes may attach extra context (e.g. interpreted_query) next to the error
    content = exc.detail if isinstance(exc.detail, dict) else {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content)


# Generic error handler
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error"
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host=HOST, port=PORT, reload=True)
