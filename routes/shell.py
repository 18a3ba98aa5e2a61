"""
Single-user application shell routes for SiteCraft
"""
from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from typing import Optional
import logging

from models.shell import ShellSnapshot, SpeechEvent
from routes.dependencies import get_application_shell
from services.export_service import ARCHIVE_CONTENT_TYPE
from services.shell_service import ApplicationShell
from services.speech_service import RelayedSpeechRecognizer

router = APIRouter(prefix="/shell", tags=["Shell"])
logger = logging.getLogger(__name__)


def _back_to_page() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/state", response_model=ShellSnapshot)
async def get_state(shell: ApplicationShell = Depends(get_application_shell)):
    return shell.snapshot()


@router.post("/prompt")
async def update_prompt(prompt: str = Form(""), shell: ApplicationShell = Depends(get_application_shell)):
    shell.set_prompt(prompt)
    return _back_to_page()


@router.post("/submit")
async def submit_prompt(
    prompt: Optional[str] = Form(None),
    shell: ApplicationShell = Depends(get_application_shell),
):
    """
    Runs one generation cycle. Refused while another request is pending.
    """
    if shell.submit_disabled:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A generation is already in progress.")

    try:
        await shell.submit(prompt)
    except Exception as e:
        logger.error(f"Unexpected error in shell submit: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="An unexpected error occurred during website generation.")
    return _back_to_page()


@router.post("/select")
async def select_suggestion(
    suggestion: str = Form(...),
    auto_submit: bool = Form(True),
    shell: ApplicationShell = Depends(get_application_shell),
):
    """Fill the prompt from a suggestion or preset, optionally submitting it."""
    if auto_submit and shell.submit_disabled:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A generation is already in progress.")

    await shell.select_suggestion(suggestion, auto_submit=auto_submit)
    return _back_to_page()


@router.post("/dictation")
async def toggle_dictation(shell: ApplicationShell = Depends(get_application_shell)):
    shell.toggle_dictation()
    return _back_to_page()


@router.post("/speech-events", response_model=ShellSnapshot)
async def relay_speech_event(event: SpeechEvent, shell: ApplicationShell = Depends(get_application_shell)):
    """
    Receives a recognition event from the browser's speech API.
    """
    recognizer = shell.speech
    if not isinstance(recognizer, RelayedSpeechRecognizer):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Speech input is not enabled.")

    if event.type == "result":
        recognizer.dispatch_result(event.results, event.result_index)
    elif event.type == "error":
        recognizer.dispatch_error(event.error or "unknown")
    else:
        recognizer.dispatch_end()
    return shell.snapshot()


@router.get("/preview", response_class=HTMLResponse)
async def get_preview(shell: ApplicationShell = Depends(get_application_shell)):
    """Current preview document, served with a CSP sandbox header."""
    frame = shell.preview
    if frame is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing generated yet.")
    return HTMLResponse(
        content=frame.document,
        headers={"Content-Security-Policy": f"sandbox {frame.sandbox}", "X-Preview-Key": str(frame.key)},
    )


@router.get("/download")
async def download_website(shell: ApplicationShell = Depends(get_application_shell)):
    if shell.code is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing generated yet.")

    archive = shell.download()
    if archive is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to build the archive")

    return Response(
        content=archive,
        media_type=ARCHIVE_CONTENT_TYPE,
        headers={"Content-Disposition": shell.exporter.get_content_disposition()},
    )
