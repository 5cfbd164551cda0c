"""External API integrations.

This package contains:
- Completion protocol: Common interface for chat/vision completion providers
- OpenAI client: Integration with the OpenAI chat completions API
- Provider exceptions: Typed errors raised by provider clients
"""

from integrations.completion_protocol import (
    CompletionOptions,
    CompletionProvider,
    CompletionResult,
    ProviderMessage,
)
from integrations.exceptions import ProviderError
from integrations.openai_client import OpenAIClient

__all__ = [
    "CompletionOptions",
    "CompletionProvider",
    "CompletionResult",
    "OpenAIClient",
    "ProviderError",
    "ProviderMessage",
]
