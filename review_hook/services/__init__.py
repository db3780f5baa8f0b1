"""
Services used by the review runner.
Exports the file filter, the Ollama launcher and the Ollama client.
"""

from review_hook.services.file_handler import FileHandlerService
from review_hook.services.ollama_server import OllamaServer
from review_hook.services.llm_client import (
    OllamaClient,
    LLMClientError,
    LLMRequestError,
    ResponseDecodeError,
    VerdictDecodeError,
)

__all__ = [
    # Files
    "FileHandlerService",
    # Server
    "OllamaServer",
    # Client
    "OllamaClient",
    "LLMClientError",
    "LLMRequestError",
    "ResponseDecodeError",
    "VerdictDecodeError",
]
