import asyncio
import os
from typing import Dict, List, Optional, Union

os.environ.setdefault("LOG_FILE", os.devnull)

import pytest
from fastapi.testclient import TestClient

from index import app
from models.generation import GeneratedCode
from routes.dependencies import get_application_shell, get_generation_handler
from services.export_service import ExportService
from services.generation_service import GenerationRequestHandler
from services.preview_service import PreviewRenderer
from services.shell_service import ApplicationShell
from services.speech_service import RelayedSpeechRecognizer

BAKERY_PROMPT = "Create a landing page for a bakery"
BAKERY_CODE = GeneratedCode(html="<h1>Bakery</h1>", css="h1{color:red}", javascript="")


class FakeGenerator:
    """
    Stand-in for the Gemini collaborator.

    `responses` maps a prompt to the code to return or the exception to
    raise; `gated` prompts wait until `release(prompt)` is called.
    """

    def __init__(self, default: Union[GeneratedCode, Exception] = BAKERY_CODE):
        self.default = default
        self.responses: Dict[str, Union[GeneratedCode, Exception]] = {}
        self.gated: set = set()
        self.calls: List[str] = []
        self._gates: Dict[str, asyncio.Event] = {}

    def gate(self, prompt: str) -> None:
        self.gated.add(prompt)

    def release(self, prompt: str) -> None:
        self._gates.setdefault(prompt, asyncio.Event()).set()

    async def generate(self, prompt: str) -> GeneratedCode:
        self.calls.append(prompt)
        if prompt in self.gated:
            await self._gates.setdefault(prompt, asyncio.Event()).wait()
        outcome = self.responses.get(prompt, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_shell(generator: FakeGenerator, speech: Optional[RelayedSpeechRecognizer] = None, variant: str = "isolated") -> ApplicationShell:
    return ApplicationShell(
        handler=GenerationRequestHandler(generator),
        renderer=PreviewRenderer(variant),
        exporter=ExportService(),
        speech=speech,
    )


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def shell(fake_generator):
    return make_shell(fake_generator, speech=RelayedSpeechRecognizer())


@pytest.fixture
def client(fake_generator, shell):
    app.dependency_overrides[get_generation_handler] = lambda: GenerationRequestHandler(fake_generator)
    app.dependency_overrides[get_application_shell] = lambda: shell
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
