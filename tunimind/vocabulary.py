# Moods a user can log
MOODS = ["happy", "sad", "angry", "anxious", "neutral", "excited", "tired", "content"]

# Emotions the face detector reports, with their display metadata
EMOTIONS = {
    "happy": {"label": "Happy", "emoji": "😊", "description": "You're feeling joyful and content."},
    "sad": {"label": "Sad", "emoji": "😢", "description": "You're experiencing feelings of sadness or grief."},
    "angry": {"label": "Angry", "emoji": "😠", "description": "You're feeling frustrated or irritated."},
    "surprised": {"label": "Surprised", "emoji": "😲", "description": "You're experiencing unexpected feelings."},
    "fearful": {"label": "Fearful", "emoji": "😨", "description": "You're feeling anxious or afraid."},
    "disgusted": {"label": "Disgusted", "emoji": "🤢", "description": "You're feeling aversion or revulsion."},
    "neutral": {"label": "Neutral", "emoji": "😐", "description": "You're feeling balanced and calm."},
}

MOOD_EMOJIS = {
    "happy": "😊",
    "excited": "🤩",
    "content": "😌",
    "neutral": "😐",
    "tired": "😴",
    "anxious": "😰",
    "sad": "😢",
    "angry": "😠",
}

MOOD_COLORS = {
    "happy": "#4ade80",
    "excited": "#fb923c",
    "content": "#60a5fa",
    "neutral": "#94a3b8",
    "tired": "#a78bfa",
    "anxious": "#fbbf24",
    "sad": "#38bdf8",
    "angry": "#f87171",
}

ACTIVITY_OPTIONS = [
    "Exercise",
    "Reading",
    "Studying",
    "Socializing",
    "Gaming",
    "Cooking",
    "Cleaning",
    "Working",
    "Shopping",
    "Meditating",
    "Watching TV",
    "Family time",
    "Outdoor activity",
    "Creative hobby",
    "Music",
]


def label_for(tag: str) -> str:
    """Display label of a mood or emotion tag."""
    info = EMOTIONS.get(tag)
    return info["label"] if info else tag.capitalize()
