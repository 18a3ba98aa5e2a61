"""
Shell models for SiteCraft
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional
from enum import Enum

from models.generation import GeneratedCode


class ShellState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Notification(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class SpeechResultItem(BaseModel):
    transcript: str
    is_final: bool = False


class SpeechEvent(BaseModel):
    """
    A speech recognition event relayed from the browser.
    """
    type: Literal["result", "error", "end"]
    results: List[SpeechResultItem] = []
    result_index: int = 0
    error: Optional[str] = None


class PreviewFrameInfo(BaseModel):
    key: int
    variant: str
    sandbox: str


class ShellSnapshot(BaseModel):
    """
    Model for returning the shell state to the frontend.
    """
    state: ShellState
    prompt: str
    submit_disabled: bool
    code: Optional[GeneratedCode] = None
    errors: Optional[Dict[str, List[str]]] = None
    suggestions: List[str] = []
    suggestions_visible: bool = False
    preview: Optional[PreviewFrameInfo] = None
    recording: bool = False
    speech_supported: bool = False
    notifications: List[Notification] = Field(default_factory=list)
