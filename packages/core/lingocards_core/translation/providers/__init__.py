"""Translation providers for external LLM APIs.

Supported providers:
- OpenAI: chat completion models (gpt-4o-mini by default)
- Google: Gemini models (gemini-1.5-pro by default)
"""

from lingocards_core.translation.providers.base import BaseTranslationProvider
from lingocards_core.translation.providers.google import GoogleProvider
from lingocards_core.translation.providers.openai import OpenAIProvider

__all__ = ["BaseTranslationProvider", "GoogleProvider", "OpenAIProvider"]
