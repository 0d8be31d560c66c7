from tunimind.providers.base import BaseProvider, ProviderHTTPError
from tunimind.providers.groq_provider import GroqProvider


__all__ = [
    "BaseProvider",
    "ProviderHTTPError",
    "GroqProvider",
]
