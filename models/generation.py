"""
Generation models for SiteCraft: request, generated code and the result union.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Dict, List, Literal, Optional, Union

from config.settings import PROMPT_MIN_LENGTH


class GenerationRequest(BaseModel):
    """
    Validated form input for one generation. Discarded after dispatch.
    """
    prompt: str = Field(..., min_length=PROMPT_MIN_LENGTH, description="A text prompt describing the desired website.")


class GeneratedCode(BaseModel):
    """
    The three artifacts returned by the generation collaborator.
    """
    model_config = ConfigDict(frozen=True)

    html: str = Field(default="", description="The generated HTML code for the website.")
    css: str = Field(default="", description="The generated CSS code for the website.")
    javascript: str = Field(default="", description="The generated JavaScript code for the website.")


class GenerationSuccess(BaseModel):
    kind: Literal["success"] = "success"
    code: GeneratedCode
    message: str = "Website generated successfully!"


class ValidationFailure(BaseModel):
    kind: Literal["validation_failure"] = "validation_failure"
    errors: Dict[str, List[str]]
    message: str = "Validation failed. Please check the prompt."


class GenerationFailure(BaseModel):
    kind: Literal["generation_failure"] = "generation_failure"
    message: str


GenerationResult = Annotated[
    Union[GenerationSuccess, ValidationFailure, GenerationFailure],
    Field(discriminator="kind"),
]


class GenerationActionState(BaseModel):
    """
    Model returned to the form: {message, code, errors}.
    """
    message: Optional[str] = None
    code: Optional[GeneratedCode] = None
    errors: Optional[Dict[str, List[str]]] = None

    @classmethod
    def from_result(cls, result: GenerationResult) -> "GenerationActionState":
        if isinstance(result, GenerationSuccess):
            return cls(message=result.message, code=result.code, errors=None)
        if isinstance(result, ValidationFailure):
            return cls(message=result.message, code=None, errors=result.errors)
        return cls(message=result.message, code=None, errors=None)
