"""
Website code generator backed by Gemini
"""
import asyncio
import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types
from pydantic import ValidationError

from config.decorators import retry_on_transient_error
from config.settings import GEMINI_API_KEY, GEMINI_MODEL, GENERATION_TIMEOUT
from models.generation import GeneratedCode
from prompts.website_prompts import create_website_prompt

logger = logging.getLogger(__name__)


class WebsiteGenerationError(Exception):
    """Raised when the model call fails or returns unusable output."""


class WebsiteCodeGenerator(Protocol):
    async def generate(self, prompt: str) -> GeneratedCode:
        ...


def clean_json_response(text: str) -> str:
    """Clean the model response by removing markdown fences and extra whitespace."""
    logger.debug("Cleaning JSON response")

    original_length = len(text)
    text = text.strip()

    # Remove markdown code fences
    if text.startswith("```"):
        first_newline = text.find("\n")
        text = text[first_newline + 1:] if first_newline != -1 else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
        text = text.strip()

    # Trim anything before the first brace or after the last one
    start_idx = text.find("{")
    end_idx = text.rfind("}")
    if start_idx != -1 and end_idx > start_idx:
        text = text[start_idx:end_idx + 1]

    logger.debug(f"JSON cleaned: {original_length} -> {len(text)} characters")
    return text


def parse_generated_code(response) -> GeneratedCode:
    """Turn a Gemini response into GeneratedCode."""
    parsed = getattr(response, "parsed", None)
    if isinstance(parsed, GeneratedCode):
        return parsed

    text = getattr(response, "text", None)
    if not text:
        logger.error("No text parts found in Gemini response")
        raise WebsiteGenerationError("Empty response from model")

    try:
        return GeneratedCode.model_validate_json(clean_json_response(text))
    except ValidationError as e:
        logger.error(f"Model output is not valid website JSON: {e}")
        raise WebsiteGenerationError("The model returned malformed website code") from e


class GeminiWebsiteGenerator:
    def __init__(self, client: Optional[genai.Client] = None, model_name: str = None, timeout: int = GENERATION_TIMEOUT):
        self._client = client
        self.model_name = model_name or GEMINI_MODEL
        self.timeout = timeout

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not GEMINI_API_KEY:
                raise WebsiteGenerationError("GEMINI_API_KEY not found in environment variables")
            self._client = genai.Client(api_key=GEMINI_API_KEY)
        return self._client

    @retry_on_transient_error
    def _generate_content(self, full_prompt: str):
        return self.client.models.generate_content(
            model=self.model_name,
            contents=full_prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=GeneratedCode,
            ),
        )

    async def generate(self, prompt: str) -> GeneratedCode:
        """
        Generate website code for a prompt.

        Raises:
            WebsiteGenerationError: on missing configuration or unusable output
            asyncio.TimeoutError: when the model does not answer in time
        """
        logger.info(f"Starting website generation with model {self.model_name}")
        full_prompt = create_website_prompt(prompt)

        response = await asyncio.wait_for(
            asyncio.to_thread(self._generate_content, full_prompt),
            timeout=self.timeout,
        )
        code = parse_generated_code(response)
        logger.info(f"Generated website: html={len(code.html)} css={len(code.css)} js={len(code.javascript)} characters")
        return code
