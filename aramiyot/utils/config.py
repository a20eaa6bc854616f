"""
Configuration management for Aramiyot
"""
import os
from typing import Dict, Any, List


class Config:
    """Application configuration"""

    # Generative AI backend
    GENAI_PROVIDER = os.getenv("GENAI_PROVIDER", "google").lower()  # google | stub
    GENAI_API_KEY = os.getenv("GENAI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    GENAI_MODEL = os.getenv("GENAI_MODEL", "gemini-2.0-flash")
    GENAI_API_BASE = os.getenv("GENAI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
    GENAI_TIMEOUT = float(os.getenv("GENAI_TIMEOUT", "60"))

    # Boards persistence
    BOARDS_BACKEND = os.getenv("BOARDS_BACKEND", "dynamodb").lower()  # dynamodb | local
    BOARDS_TABLE_NAME = os.getenv("BOARDS_TABLE_NAME", "aramiyot-user-boards")
    AWS_REGION = os.getenv("AWS_REGION", "us-west-2")

    # Local key/value storage (stands in for browser localStorage)
    LOCAL_STORAGE_PATH = os.getenv("LOCAL_STORAGE_PATH", ".aramiyot/local_storage.json")
    LOCAL_STORAGE_QUOTA_BYTES = int(os.getenv("LOCAL_STORAGE_QUOTA_BYTES", str(5 * 1024 * 1024)))

    # Request limits
    MAX_REQUEST_BYTES = int(os.getenv("MAX_REQUEST_BYTES", str(10 * 1024 * 1024)))

    # Application Configuration
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    DEBUG = os.getenv("DEBUG", "True").lower() == "true"
    SESSION_TIMEOUT = int(os.getenv("SESSION_TIMEOUT", str(60 * 60 * 24 * 365)))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000")

    def validate_required_config(self):
        """Validate that all required configuration is present"""
        missing_vars = []

        if self.GENAI_PROVIDER == "google" and not self.GENAI_API_KEY:
            missing_vars.append("GENAI_API_KEY")
        if not self.SECRET_KEY:
            missing_vars.append("SECRET_KEY")
        if self.BOARDS_BACKEND == "dynamodb" and not self.BOARDS_TABLE_NAME:
            missing_vars.append("BOARDS_TABLE_NAME")

        if missing_vars:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_vars)}. "
                f"Set GENAI_PROVIDER=stub and BOARDS_BACKEND=local to run without external services."
            )

        return True

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        raw = self.CORS_ORIGINS.strip()
        if raw in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    def get_genai_config(self) -> Dict[str, Any]:
        """Get generative backend configuration"""
        return {
            "provider": self.GENAI_PROVIDER,
            "model": self.GENAI_MODEL,
            "api_base": self.GENAI_API_BASE,
            "timeout": self.GENAI_TIMEOUT,
            "configured": bool(self.GENAI_API_KEY) or self.GENAI_PROVIDER == "stub",
        }

    def get_storage_config(self) -> Dict[str, Any]:
        """Get persistence configuration"""
        return {
            "boards_backend": self.BOARDS_BACKEND,
            "boards_table": self.BOARDS_TABLE_NAME,
            "region": self.AWS_REGION,
            "local_storage_path": self.LOCAL_STORAGE_PATH,
        }


class DevelopmentConfig(Config):
    """Development environment configuration"""
    DEBUG = True


class TestingConfig(Config):
    """Testing configuration: no external services"""
    DEBUG = True
    GENAI_PROVIDER = "stub"
    BOARDS_BACKEND = "local"


class ProductionConfig(Config):
    """Production environment configuration"""
    DEBUG = False
    SECRET_KEY = os.getenv("SECRET_KEY")  # Must be set in production


def get_config() -> Config:
    """Get configuration based on environment"""
    env = os.getenv("ENVIRONMENT", "development").lower()

    if env == "production":
        config = ProductionConfig()
    elif env == "testing":
        config = TestingConfig()
    else:
        config = DevelopmentConfig()

    try:
        config.validate_required_config()
    except ValueError:
        # Development falls back to the stub backend at app construction
        if env == "production":
            raise

    return config
