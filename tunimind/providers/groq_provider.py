import logging

import httpx
from tunimind import config
from tunimind.providers.base import BaseProvider, ProviderHTTPError

logger = logging.getLogger(__name__)


class GroqProvider(BaseProvider):
    """Provider for Groq inference API using standard httpx."""

    def __init__(self, api_key: str, model: str | None = None, endpoint: str | None = None,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.model = model or config.GROQ_MODEL
        self.endpoint = endpoint or config.GROQ_ENDPOINT
        self.transport = transport

    @property
    def name(self) -> str:
        return "groq"

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    def _body(self, messages: list[dict], model: str, stream: bool) -> dict:
        body = {
            "model": model,
            "messages": messages,
            "max_tokens": config.CHAT_MAX_TOKENS,
        }
        if stream:
            body["stream"] = True
        return body

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=config.CHAT_TIMEOUT_SECONDS, transport=self.transport)

    async def chat(self, messages: list[dict], model: str | None = None) -> dict:
        used_model = model or self.model
        try:
            async with self._client() as client:
                response = await client.post(self.endpoint, headers=self._headers(),
                                             json=self._body(messages, used_model, stream=False))
                if response.is_error:
                    logger.error(f"Groq API error: {response.status_code} {response.reason_phrase} {response.text}")
                    return {
                        "text": None,
                        "provider": self.name,
                        "model": used_model,
                        "status": "failed",
                        "status_code": response.status_code,
                        "error": f"Groq API error: {response.status_code} {response.reason_phrase}",
                    }
                data = response.json()
                text = data["choices"][0]["message"]["content"] if "choices" in data and data["choices"] else None

            return {
                "text": text,
                "provider": self.name,
                "model": used_model,
                "status": "success",
                "status_code": response.status_code,
                "error": None,
            }
        except httpx.TimeoutException:
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "status_code": None,
                "error": "Timeout",
            }
        except Exception as e:
            logger.error(f"Error calling Groq API: {e}")
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "status_code": None,
                "error": str(e),
            }

    async def open_stream(self, messages: list[dict], model: str | None = None):
        used_model = model or self.model
        client = self._client()
        request = client.build_request("POST", self.endpoint, headers=self._headers(),
                                       json=self._body(messages, used_model, stream=True))
        try:
            response = await client.send(request, stream=True)
        except Exception:
            await client.aclose()
            raise

        if response.is_error:
            body = (await response.aread()).decode("utf-8", errors="replace")
            await response.aclose()
            await client.aclose()
            logger.error(f"Groq API error: {response.status_code} {response.reason_phrase} {body}")
            raise ProviderHTTPError(response.status_code, response.reason_phrase, body)

        async def chunks():
            try:
                async for chunk in response.aiter_bytes():
                    yield chunk
            finally:
                await response.aclose()
                await client.aclose()

        return chunks()
