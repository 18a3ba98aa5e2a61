import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from config.settings import CORS_ORIGINS, GEMINI_API_KEY, GEMINI_MODEL, LOG_FILE, LOG_LEVEL, PREVIEW_VARIANT
from config.preview_variants import validate_variant_name, DEFAULT_VARIANT, PREVIEW_VARIANTS
from config.prompt_examples import PROMPT_EXAMPLES
from services.export_service import ARCHIVE_FILENAME

from routes.generation import router as generation_router
from routes.shell import router as shell_router
from routes.pages import router as pages_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(LOG_FILE)
    ]
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SiteCraft Backend",
    description="AI-powered static website generator: prompt -> HTML/CSS/JS -> live preview -> zip",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["content-disposition"]
)

# Include routers
app.include_router(generation_router)
app.include_router(shell_router)
app.include_router(pages_router)


@app.on_event("startup")
async def startup_event():
    """Check configuration on startup."""
    if not validate_variant_name(PREVIEW_VARIANT):
        logger.error(f"❌ Unknown PREVIEW_VARIANT '{PREVIEW_VARIANT}'. Available: {list(PREVIEW_VARIANTS.keys())}")
        raise ValueError(f"Unknown PREVIEW_VARIANT '{PREVIEW_VARIANT}'")
    if not GEMINI_API_KEY:
        logger.warning("⚠️ GEMINI_API_KEY is not set; generation requests will fail")
    logger.info("✅ SiteCraft Backend started successfully")
    logger.info(f"✅ Model: {GEMINI_MODEL}")
    logger.info(f"✅ Preview variant: {PREVIEW_VARIANT}")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "model": GEMINI_MODEL
    }


@app.get("/api")
async def api_info():
    """API information."""
    return {
        "message": "SiteCraft Backend API",
        "version": "1.0.0",
        "model": GEMINI_MODEL,
        "endpoints": {
            "generate": "/api/generate",
            "suggestions": "/api/suggestions?q=",
            "examples": "/api/examples",
            "preview": "/api/preview",
            "export": "/api/export",
            "shell": "/shell/state",
            "health": "/health"
        },
        "preview_variants": list(PREVIEW_VARIANTS.keys()),
        "default_preview_variant": DEFAULT_VARIANT,
        "archive_filename": ARCHIVE_FILENAME,
        "example_count": len(PROMPT_EXAMPLES)
    }


# Error handlers
@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": "An unexpected error occurred"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
