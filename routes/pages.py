"""
Server-rendered page for SiteCraft
"""
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from config.prompt_examples import get_presets
from routes.dependencies import get_application_shell
from services.shell_service import ApplicationShell

router = APIRouter(tags=["Pages"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


@router.get("/", response_class=HTMLResponse)
async def index_page(request: Request, shell: ApplicationShell = Depends(get_application_shell)):
    frame = shell.preview
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "shell": shell.snapshot(),
            "presets": get_presets(),
            "preview_iframe": frame.to_iframe() if frame else None,
        },
    )
