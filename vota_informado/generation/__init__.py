from .client import (
    GeminiTextGenerator,
    GenerationServiceError,
    MissingCredentialError,
    TextGenerator,
)

__all__ = [
    "GeminiTextGenerator",
    "GenerationServiceError",
    "MissingCredentialError",
    "TextGenerator",
]
