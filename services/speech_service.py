"""
Speech-to-text capability for SiteCraft

Recognition happens in the browser; the backend only sees the events it
relays. The shell depends on the SpeechRecognizer interface, never on a
concrete recognizer.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional
import logging

from models.shell import SpeechResultItem

logger = logging.getLogger(__name__)

ResultCallback = Callable[[str], None]
ErrorCallback = Callable[["SpeechFailure"], None]
EndCallback = Callable[[], None]


class SpeechFailure(Exception):
    """A categorized speech recognition error."""

    def __init__(self, code: str):
        self.code = code
        self.category = categorize_speech_error(code)
        super().__init__(describe_speech_error(code))


def categorize_speech_error(code: str) -> str:
    if code in ("not-allowed", "service-not-allowed"):
        return "not-allowed"
    if code == "no-speech":
        return "no-speech"
    return "other"


def describe_speech_error(code: str) -> str:
    category = categorize_speech_error(code)
    if category == "not-allowed":
        return "Microphone access denied. Please allow microphone access in your browser settings."
    if category == "no-speech":
        return "No speech detected. Please try speaking again."
    return f"Speech recognition error: {code}"


def combine_transcripts(results: List[SpeechResultItem], result_index: int = 0) -> str:
    """Final transcripts followed by interim ones, from result_index on."""
    final_transcript = ""
    interim_transcript = ""
    for item in results[result_index:]:
        if item.is_final:
            final_transcript += item.transcript
        else:
            interim_transcript += item.transcript
    return final_transcript + interim_transcript


class SpeechRecognizer(ABC):
    continuous = True
    interim_results = True

    def __init__(self):
        self.on_result: Optional[ResultCallback] = None
        self.on_error: Optional[ErrorCallback] = None
        self.on_end: Optional[EndCallback] = None

    def bind(self, on_result: ResultCallback, on_error: ErrorCallback, on_end: EndCallback) -> None:
        self.on_result = on_result
        self.on_error = on_error
        self.on_end = on_end

    @property
    @abstractmethod
    def supported(self) -> bool:
        ...

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...


class NoOpSpeechRecognizer(SpeechRecognizer):
    """Used where no speech API is available."""

    @property
    def supported(self) -> bool:
        return False

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass


class RelayedSpeechRecognizer(SpeechRecognizer):
    """
    Recognizer driven by events the browser posts back to the server.
    """

    def __init__(self):
        super().__init__()
        self.listening = False

    @property
    def supported(self) -> bool:
        return True

    def start(self) -> None:
        self.listening = True
        logger.info("Speech recognition started")

    def stop(self) -> None:
        self.listening = False
        logger.info("Speech recognition stopped")

    def dispatch_result(self, results: List[SpeechResultItem], result_index: int = 0) -> None:
        if not self.listening:
            logger.debug("Dropping speech result received while not listening")
            return
        transcript = combine_transcripts(results, result_index)
        if transcript and self.on_result:
            self.on_result(transcript)

    def dispatch_error(self, code: str) -> None:
        if not self.listening:
            return
        logger.error(f"Speech recognition error: {code}")
        self.listening = False
        if self.on_error:
            self.on_error(SpeechFailure(code))

    def dispatch_end(self) -> None:
        # No automatic restart: a restart on end can loop forever
        was_listening = self.listening
        self.listening = False
        if was_listening:
            logger.info("Speech recognition ended.")
        if self.on_end:
            self.on_end()
