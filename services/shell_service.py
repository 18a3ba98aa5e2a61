"""
Application shell for SiteCraft

Owns the single in-memory generation cycle: prompt field, current code,
preview frame, notifications and the idle/pending/succeeded/failed state.
"""
import logging
from collections import deque
from typing import Deque, Dict, List, Optional

from config.settings import NOTIFICATION_HISTORY
from models.generation import (
    GeneratedCode,
    GenerationResult,
    GenerationSuccess,
    ValidationFailure,
)
from models.shell import Notification, PreviewFrameInfo, ShellSnapshot, ShellState
from services.export_service import ExportService
from services.generation_service import GenerationRequestHandler
from services.preview_service import PreviewFrame, PreviewRenderer
from services.speech_service import NoOpSpeechRecognizer, SpeechFailure, SpeechRecognizer
from services.suggestion_service import SuggestionDropdown

logger = logging.getLogger(__name__)


class ApplicationShell:
    def __init__(
        self,
        handler: GenerationRequestHandler,
        renderer: PreviewRenderer,
        exporter: ExportService,
        speech: Optional[SpeechRecognizer] = None,
        dropdown: Optional[SuggestionDropdown] = None,
    ):
        self.handler = handler
        self.renderer = renderer
        self.exporter = exporter
        self.speech = speech or NoOpSpeechRecognizer()
        self.dropdown = dropdown or SuggestionDropdown()

        self.state = ShellState.IDLE
        self.prompt = ""
        self.code: Optional[GeneratedCode] = None
        self.errors: Optional[Dict[str, List[str]]] = None
        self.recording = False
        self.notifications: Deque[Notification] = deque(maxlen=NOTIFICATION_HISTORY)

        self._sequence = 0
        self._in_flight = 0

        self.speech.bind(self._on_speech_result, self._on_speech_error, self._on_speech_end)

    # --- prompt field ---

    @property
    def submit_disabled(self) -> bool:
        return self._in_flight > 0

    @property
    def preview(self) -> Optional[PreviewFrame]:
        return self.renderer.current

    def set_prompt(self, value: str) -> None:
        self.prompt = value
        self.dropdown.update(value)

    def notify(self, title: str, description: str, destructive: bool = False) -> Notification:
        notification = Notification(
            title=title,
            description=description,
            variant="destructive" if destructive else "default",
        )
        self.notifications.append(notification)
        return notification

    # --- generation cycle ---

    async def submit(self, prompt: Optional[str] = None) -> Optional[GenerationResult]:
        """
        Run one generation cycle for `prompt` (or the current field value).

        Returns the handler's result, or None when the completion was
        superseded by a later submission and therefore not applied.
        """
        if prompt is not None:
            self.set_prompt(prompt)
            # submitting moves focus off the prompt field
            self.dropdown.blur()
        form = {"prompt": self.prompt}

        _, failure = self.handler.parse_request(form)
        if failure is not None:
            # still the latest submission: an earlier request still in flight becomes stale
            self._sequence += 1
            self._apply(failure)
            return failure

        self._sequence += 1
        sequence = self._sequence
        self._in_flight += 1
        self.state = ShellState.PENDING
        self.errors = None
        logger.info(f"Dispatching generation request #{sequence}")

        try:
            result = await self.handler.handle(form)
        finally:
            self._in_flight -= 1

        if sequence != self._sequence:
            logger.warning(f"Discarding stale generation result #{sequence} (latest is #{self._sequence})")
            return None

        self._apply(result)
        return result

    def _apply(self, result: GenerationResult) -> None:
        if isinstance(result, GenerationSuccess):
            self.code = result.code
            self.errors = None
            frame = self.renderer.render(result.code)
            self.state = ShellState.SUCCEEDED
            self.notify("Status", result.message)
            logger.info(f"Generation succeeded, preview re-keyed to {frame.key}")
            return

        self.state = ShellState.FAILED
        self.errors = result.errors if isinstance(result, ValidationFailure) else None
        self.notify("Error", result.message, destructive=True)
        logger.info(f"Generation failed: {result.message}")

    async def select_suggestion(self, suggestion: str, auto_submit: bool = True) -> Optional[GenerationResult]:
        self.prompt = self.dropdown.select(suggestion)
        if auto_submit:
            return await self.submit()
        return None

    async def select_preset(self, preset: str, auto_submit: bool = True) -> Optional[GenerationResult]:
        return await self.select_suggestion(preset, auto_submit=auto_submit)

    # --- download ---

    def download(self) -> Optional[bytes]:
        return self.exporter.build_archive(self.code)

    # --- dictation ---

    def toggle_dictation(self) -> bool:
        """Start or stop dictation. Returns the new recording state."""
        if not self.speech.supported:
            self.notify("Unsupported Feature", "Voice input is not supported by your browser.", destructive=True)
            return False

        if self.recording:
            self.speech.stop()
            self.recording = False
            return False

        try:
            self.speech.start()
        except Exception as e:
            logger.error(f"Error starting speech recognition: {e}", exc_info=True)
            self.notify("Error", "Could not start voice recording.", destructive=True)
            self.recording = False
            return False

        self.recording = True
        self.notify("Recording Started", "Speak into your microphone.")
        return True

    def _on_speech_result(self, transcript: str) -> None:
        self.set_prompt(self.prompt + transcript)

    def _on_speech_error(self, failure: SpeechFailure) -> None:
        self.notify("Error", str(failure), destructive=True)
        self.recording = False

    def _on_speech_end(self) -> None:
        self.recording = False

    # --- view ---

    def snapshot(self) -> ShellSnapshot:
        frame = self.renderer.current
        return ShellSnapshot(
            state=self.state,
            prompt=self.prompt,
            submit_disabled=self.submit_disabled,
            code=self.code,
            errors=self.errors,
            suggestions=self.dropdown.suggestions,
            suggestions_visible=self.dropdown.visible,
            preview=PreviewFrameInfo(key=frame.key, variant=frame.variant, sandbox=frame.sandbox) if frame else None,
            recording=self.recording,
            speech_supported=self.speech.supported,
            notifications=list(self.notifications),
        )
