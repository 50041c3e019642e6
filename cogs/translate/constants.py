"""Flag emoji to target language mapping for reaction translation."""

# Regional-indicator flag -> (ISO 639-1 code, display name)
FLAG_LANGUAGES = {
    "🇺🇸": ("en", "English"),
    "🇬🇧": ("en", "English"),
    "🇧🇷": ("pt", "Portuguese"),
    "🇵🇹": ("pt", "Portuguese"),
    "🇪🇸": ("es", "Spanish"),
    "🇲🇽": ("es", "Spanish"),
    "🇫🇷": ("fr", "French"),
    "🇩🇪": ("de", "German"),
    "🇮🇹": ("it", "Italian"),
    "🇳🇱": ("nl", "Dutch"),
    "🇵🇱": ("pl", "Polish"),
    "🇷🇺": ("ru", "Russian"),
    "🇺🇦": ("uk", "Ukrainian"),
    "🇹🇷": ("tr", "Turkish"),
    "🇯🇵": ("ja", "Japanese"),
    "🇰🇷": ("ko", "Korean"),
    "🇨🇳": ("zh", "Chinese"),
    "🇻🇳": ("vi", "Vietnamese"),
    "🇸🇦": ("ar", "Arabic"),
    "🇮🇳": ("hi", "Hindi"),
}

# Remember this many (message, language) pairs so repeat reactions do not re-translate
TRANSLATED_CACHE_SIZE = 500

COLOR_TRANSLATION = 0x1ABC9C
MAX_SOURCE_LENGTH = 2000
