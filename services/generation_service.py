"""
Generation request handling for SiteCraft
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging

from pydantic import ValidationError

from config.settings import PROMPT_MIN_LENGTH
from models.generation import (
    GenerationFailure,
    GenerationRequest,
    GenerationResult,
    GenerationSuccess,
    ValidationFailure,
)
from services.website_generator import WebsiteCodeGenerator

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred during website generation."

FIELD_ERROR_MESSAGES = {
    "missing": "Prompt is required.",
    "string_type": "Prompt is required.",
    "string_too_short": f"Prompt must be at least {PROMPT_MIN_LENGTH} characters long.",
}


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "prompt"
        message = FIELD_ERROR_MESSAGES.get(error["type"], error["msg"])
        errors.setdefault(field, []).append(message)
    return errors


class GenerationRequestHandler:
    def __init__(self, generator: WebsiteCodeGenerator):
        self.generator = generator

    def parse_request(self, form: Mapping[str, Any]) -> Tuple[Optional[GenerationRequest], Optional[ValidationFailure]]:
        """
        Validate raw form input into a GenerationRequest.

        Returns a (request, failure) pair where exactly one side is None.
        """
        try:
            return GenerationRequest.model_validate({"prompt": form.get("prompt")}), None
        except ValidationError as e:
            errors = _field_errors(e)
            logger.info(f"Prompt rejected by validation: {errors}")
            return None, ValidationFailure(errors=errors)

    async def handle(self, form: Mapping[str, Any]) -> GenerationResult:
        """
        Validate the form, call the generator once and map the outcome.
        """
        request, failure = self.parse_request(form)
        if failure is not None:
            return failure

        try:
            code = await self.generator.generate(request.prompt)
            return GenerationSuccess(code=code)
        except Exception as e:
            logger.error(f"Error generating website: {e!r}", exc_info=True)
            error_message = str(e) or UNKNOWN_ERROR_MESSAGE
            return GenerationFailure(message=f"Generation failed: {error_message}")
