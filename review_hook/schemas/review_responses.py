from pydantic import BaseModel, ConfigDict, Field, field_validator


class Verdict(BaseModel):
    """
    Per-file judgment returned by the model.

    Strict: "false" or 0 is not a boolean. A null `suggestions` reads as "".

    Fields:
        follows_best_practices: Whether the file follows the style guide
        suggestions: Short free-text suggestions (may be empty)
    """
    model_config = ConfigDict(frozen=True, strict=True)

    follows_best_practices: bool
    suggestions: str = ""

    @field_validator("suggestions", mode="before")
    @classmethod
    def null_suggestions(cls, value):
        return "" if value is None else value


class GenerateRequest(BaseModel):
    """Body of a POST to Ollama's /api/generate endpoint."""
    model: str
    prompt: str
    format: str = "json"
    system: str
    stream: bool = False


class GenerateResponse(BaseModel):
    """
    Outer envelope returned by /api/generate.
    Only `response` is used; it holds the model output as a JSON string.
    """
    model_config = ConfigDict(extra="ignore")

    response: str = Field(..., description="Raw model output (nested JSON)")
