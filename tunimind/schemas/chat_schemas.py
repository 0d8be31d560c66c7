from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class ChatRequest(BaseModel):
    message: str
    userId: Optional[str] = None
    userName: Optional[str] = None
    userEmail: Optional[str] = None
    userProfile: Optional[Dict[str, Any]] = None


class ChatMessagesBody(BaseModel):
    messages: List[Dict[str, Any]]
