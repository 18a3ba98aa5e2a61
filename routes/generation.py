"""
Stateless generation API for SiteCraft
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response
import logging

from config.preview_variants import DEFAULT_VARIANT, sandbox_attribute, validate_variant_name
from config.prompt_examples import PROMPT_EXAMPLES, get_presets
from models.generation import (
    GeneratedCode,
    GenerationActionState,
    GenerationSuccess,
    ValidationFailure,
)
from routes.dependencies import get_export_service, get_generation_handler
from services.export_service import ARCHIVE_CONTENT_TYPE, ExportService
from services.generation_service import GenerationRequestHandler
from services.preview_service import build_preview_document
from services.suggestion_service import filter_suggestions

router = APIRouter(prefix="/api", tags=["Generation"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerationActionState)
async def generate_website(
    http_request: Request,
    handler: GenerationRequestHandler = Depends(get_generation_handler),
):
    """
    Generates website code from the `prompt` form field.
    """
    form = await http_request.form()
    result = await handler.handle(form)
    state = GenerationActionState.from_result(result)

    if isinstance(result, GenerationSuccess):
        status_code = status.HTTP_200_OK
    elif isinstance(result, ValidationFailure):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_502_BAD_GATEWAY

    return JSONResponse(status_code=status_code, content=state.model_dump(mode="json"))


@router.get("/suggestions")
async def get_suggestions(q: str = Query(default="", description="Current prompt text")):
    """Example prompts matching the current input."""
    return {"query": q, "suggestions": filter_suggestions(q)}


@router.get("/examples")
async def get_examples():
    """Example prompt catalog and preset buttons."""
    return {"examples": PROMPT_EXAMPLES, "presets": get_presets()}


@router.post("/preview", response_class=HTMLResponse)
async def preview_document(code: GeneratedCode, variant: str = Query(default=DEFAULT_VARIANT)):
    """
    Synthesized preview document for the given code.
    """
    if not validate_variant_name(variant):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown preview variant '{variant}'")

    document = build_preview_document(code.html, code.css, code.javascript, variant)
    return HTMLResponse(
        content=document,
        headers={"Content-Security-Policy": f"sandbox {sandbox_attribute(variant)}"},
    )


@router.post("/export")
async def export_website(code: GeneratedCode, export_service: ExportService = Depends(get_export_service)):
    """
    Packages the given code as website.zip.
    """
    archive = export_service.build_archive(code)
    if archive is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to build the archive")

    return Response(
        content=archive,
        media_type=ARCHIVE_CONTENT_TYPE,
        headers={"Content-Disposition": export_service.get_content_disposition()},
    )
