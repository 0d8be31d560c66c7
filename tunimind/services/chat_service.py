"""
chat_service.py — Prompt assembly for the wellbeing assistant
Builds the system prompt from the user's identity and recent mood/emotion
context, and keeps the namespace's chat transcript ("chatMessages").
"""

import logging

from tunimind import config
from tunimind.services.data_service import DataService
from tunimind.storage import LocalStorage, CHAT_MESSAGES_KEY

logger = logging.getLogger(__name__)

ASSISTANT_RULES = (
    f"You are a mental health assistant for {config.ASSISTANT_NAME}, an app for Tunisian university students.\n"
    "\n"
    "RULES:\n"
    "- Do NOT greet the user at the beginning (no \"Hi\", \"Hello\", \"Salem\", etc).\n"
    "- Start immediately with help or support.\n"
    "- Be supportive, empathetic, concise, and culturally sensitive.\n"
    "- Never provide medical diagnoses.\n"
    "- Speak in a simple and comforting style."
)

DETAILED_INSTRUCTIONS = (
    "INSTRUCTIONS:\n"
    "1. Provide supportive, empathetic responses about mental health\n"
    "2. Never provide medical diagnoses\n"
    "3. Keep responses concise and helpful\n"
    "4. If the user appears in crisis, encourage them to seek professional help\n"
    "5. Tailor your responses to the user's recent mood and emotion data when relevant\n"
    "6. Be respectful of Tunisian cultural context and sensitivities"
)


def truncate_message(message: str, limit: int | None = None) -> str:
    limit = limit or config.CHAT_MAX_MESSAGE_CHARS
    return message[:limit] + "..." if len(message) > limit else message


def is_special_user(email: str | None) -> bool:
    return bool(email) and email == config.SPECIAL_USER_EMAIL


class ChatService:
    def __init__(self, storage: LocalStorage, data_service: DataService | None = None):
        self.storage = storage
        self.data = data_service or DataService(storage)

    # ------------------------------------------------------------------
    def compact_prompt(self, user_name: str | None, user_email: str | None) -> str:
        """Short prompt for the streaming endpoint: the 3 latest moods and 2 latest emotions."""
        mood_context, emotion_context = "", ""
        try:
            moods = self.data.get_moods(3)
            if moods:
                mood_context = "Recent moods: " + ", ".join(f"{m.get('mood')} ({m.get('intensity')}/10)" for m in moods)
            emotions = self.data.get_emotions(2)
            if emotions:
                emotion_context = "Recent emotions: " + ", ".join(f"{e.get('emotion')}" for e in emotions)
        except Exception as e:
            logger.error(f"Error fetching mood/emotion data: {e}")

        lines = [ASSISTANT_RULES, f"USER: {user_name or 'Anonymous'} ({user_email or 'No email'})"]
        if mood_context:
            lines.append(f"MOOD: {mood_context}")
        if emotion_context:
            lines.append(f"EMOTIONS: {emotion_context}")
        if is_special_user(user_email):
            lines.append(f"NOTE: This is {config.SPECIAL_USER_NAME}. Provide personalized responses.")
        return "\n".join(lines)

    def detailed_prompt(self, user_id: str | None, user_name: str | None, user_email: str | None,
                        user_profile: dict | None) -> str:
        """Full prompt for the non-streaming endpoint, with profile and the 5 latest records."""
        mood_context = "No recent mood data available."
        emotion_context = "No recent emotion data available."
        try:
            moods = self.data.get_moods(5)
            if moods:
                mood_context = "Recent moods: " + ", ".join(
                    f"{m.get('date')}: {m.get('mood')} ({m.get('intensity')}/10)" for m in moods)
            emotions = self.data.get_emotions(5)
            if emotions:
                emotion_context = "Recent emotions: " + ", ".join(
                    f"{e.get('date')}: {e.get('emotion')} ({round((e.get('confidence') or 0) * 100)}%)" for e in emotions)
        except Exception as e:
            logger.error(f"Error fetching mood/emotion data: {e}")

        profile = user_profile or {}
        lines = [
            ASSISTANT_RULES,
            "USER PROFILE:",
            f"- Name: {user_name or 'Anonymous user'}",
            f"- Email: {user_email or 'Not provided'}",
            f"- User ID: {user_id or 'Not available'}",
        ]
        if profile.get("bio"):
            lines.append(f"- Bio: {profile['bio']}")
        if profile.get("profileImage"):
            lines.append(f"- Has profile image: {profile['profileImage']}")
        lines += ["", "USER MENTAL HEALTH DATA:", mood_context, emotion_context, ""]
        if is_special_user(user_email):
            lines.append(f"NOTE: This is a special user ({config.SPECIAL_USER_NAME}). "
                         "Provide extra detailed and personalized responses.")
        lines.append(DETAILED_INSTRUCTIONS)
        return "\n".join(lines)

    @staticmethod
    def build_messages(system_prompt: str, message: str) -> list[dict]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": truncate_message(message)},
        ]

    # ------------------------------------------------------------------
    def get_messages(self) -> list[dict]:
        try:
            messages = self.storage.get_json(CHAT_MESSAGES_KEY, [])
            return messages if isinstance(messages, list) else []
        except ValueError as e:
            logger.error(f"Error loading messages from storage: {e}")
            return []

    def save_messages(self, messages: list[dict]) -> None:
        self.storage.set_json(CHAT_MESSAGES_KEY, messages)

    def clear_messages(self) -> None:
        self.storage.remove_item(CHAT_MESSAGES_KEY)
