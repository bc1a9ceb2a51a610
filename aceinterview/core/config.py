import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self):
        """Initialize settings with validation"""
        self._validate_required_env_vars()
        self._load_validated_settings()

    def _validate_required_env_vars(self):
        """Validate all required environment variables"""
        required_vars = {
            "GEMINI_API_KEY": "Gemini AI API key for question and feedback generation",
        }

        missing_vars = []
        invalid_vars = []

        for var_name, description in required_vars.items():
            value = os.getenv(var_name)

            if not value:
                missing_vars.append(f"  - {var_name}: {description}")
            elif not self._validate_var_format(var_name, value):
                invalid_vars.append(f"  - {var_name}: Invalid format")

        if missing_vars or invalid_vars:
            error_msg = "🚨 CONFIGURATION ERROR - Application cannot start:\n\n"

            if missing_vars:
                error_msg += "❌ Missing required environment variables:\n"
                error_msg += "\n".join(missing_vars) + "\n\n"

            if invalid_vars:
                error_msg += "❌ Invalid environment variables:\n"
                error_msg += "\n".join(invalid_vars) + "\n\n"

            error_msg += "💡 Please check your .env file and ensure all required variables are set."

            logger.critical(error_msg)
            raise ValueError(error_msg)

        logger.info("✅ All required environment variables validated")

    def _validate_var_format(self, var_name: str, value: str) -> bool:
        """Validate specific environment variable formats"""
        if var_name == "GEMINI_API_KEY":
            return value.startswith("AIza") and len(value) > 20

        return True

    def _load_validated_settings(self):
        """Load settings after validation"""
        # Gemini
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY")
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.QUESTION_TEMPERATURE: float = float(os.getenv("QUESTION_TEMPERATURE", "0.9"))
        self.FEEDBACK_TEMPERATURE: float = float(os.getenv("FEEDBACK_TEMPERATURE", "0.3"))
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))
        self.VALIDATE_GEMINI_ON_STARTUP: bool = _as_bool(os.getenv("VALIDATE_GEMINI_ON_STARTUP", "true"))

        # Session Configuration
        self.SESSION_TIMEOUT_SECONDS: int = int(os.getenv("SESSION_TIMEOUT_SECONDS", str(2 * 60 * 60)))
        self.MAX_INTERVIEW_ROUNDS: int = int(os.getenv("MAX_INTERVIEW_ROUNDS", "10"))

        # Speech recognition (browser relays its recognizer events)
        self.SPEECH_RECOGNITION_ENABLED: bool = _as_bool(os.getenv("SPEECH_RECOGNITION_ENABLED", "true"))
        self.SPEECH_LANG: str = os.getenv("SPEECH_LANG", "en-US")

        # HTTP
        self.CORS_ORIGINS: list[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
            if origin.strip()
        ]
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
