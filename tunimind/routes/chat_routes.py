# ---------- routes/chat_routes.py ----------
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from tunimind import config
from tunimind.providers import BaseProvider, GroqProvider, ProviderHTTPError
from tunimind.schemas.chat_schemas import ChatRequest, ChatMessagesBody
from tunimind.services.chat_service import ChatService
from tunimind.storage import LocalStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


def get_chat_provider() -> BaseProvider | None:
    """FastAPI dependency — the Groq provider, or None when no key is configured."""
    if not config.API_KEY:
        return None
    return GroqProvider(config.API_KEY)


def _missing_key() -> JSONResponse:
    logger.error("API key is not configured")
    return JSONResponse(status_code=500, content={"error": "API key is not configured"})


# ── Routes ────────────────────────────────────────────────────────
@router.post("/chat")
async def chat_stream(
    body: ChatRequest,
    storage: LocalStorage = Depends(get_storage),
    provider: BaseProvider | None = Depends(get_chat_provider),
):
    """Proxy a streamed completion back to the caller as Server-Sent Events."""
    if provider is None:
        return _missing_key()

    try:
        service = ChatService(storage)
        system_prompt = service.compact_prompt(body.userName, body.userEmail)
        messages = ChatService.build_messages(system_prompt, body.message)
        chunks = await provider.open_stream(messages)
        return StreamingResponse(chunks, media_type="text/event-stream",
                                 headers={"Cache-Control": "no-cache", "Connection": "keep-alive"})
    except ProviderHTTPError as e:
        return JSONResponse(status_code=e.status_code,
                            content={"error": f"Groq API error: {e.status_code} {e.reason}"})
    except Exception as e:
        logger.error(f"Error in chat API: {e}")
        return JSONResponse(status_code=500, content={"error": f"Internal server error: {e}"})


@router.post("/chat-simple")
async def chat_simple(
    body: ChatRequest,
    storage: LocalStorage = Depends(get_storage),
    provider: BaseProvider | None = Depends(get_chat_provider),
):
    """Single non-streamed completion with the detailed prompt."""
    if provider is None:
        return _missing_key()

    service = ChatService(storage)
    system_prompt = service.detailed_prompt(body.userId, body.userName, body.userEmail, body.userProfile)
    result = await provider.chat(ChatService.build_messages(system_prompt, body.message))
    if result["status"] != "success":
        return JSONResponse(status_code=result.get("status_code") or 500,
                            content={"error": result.get("error") or "Unknown error"})
    return {"message": result["text"]}


@router.get("/chat/messages")
async def get_messages(storage: LocalStorage = Depends(get_storage)):
    return ChatService(storage).get_messages()


@router.put("/chat/messages")
async def save_messages(body: ChatMessagesBody, storage: LocalStorage = Depends(get_storage)):
    ChatService(storage).save_messages(body.messages)
    return {"status": "success"}


@router.delete("/chat/messages")
async def clear_messages(storage: LocalStorage = Depends(get_storage)):
    ChatService(storage).clear_messages()
    return {"status": "success"}
