"""
Configuration settings for the Kanban Board API
"""
import os


class Settings:
    """Application settings"""

    def __init__(self):
        # Load from environment variables with safe defaults
        self.app_name = os.getenv("APP_NAME", "Kanban Board API")
        self.app_version = os.getenv("APP_VERSION", "1.0.0")
        self.debug = os.getenv("DEBUG", "False").lower() == "true"
        self.environment = os.getenv("ENVIRONMENT", "production")

        # Database - require DATABASE_URL in every environment
        self.database_url = os.getenv("DATABASE_URL")
        if not self.database_url:
            raise RuntimeError("DATABASE_URL must be set")
        self.database_echo = os.getenv("DATABASE_ECHO", "False").lower() == "true"

        # Database Connection Pool Settings (ignored for SQLite)
        self.db_pool_size = int(os.getenv("DB_POOL_SIZE", "5"))
        self.db_max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "10"))

        # Authentication - require JWT_SECRET
        self.jwt_secret = os.getenv("JWT_SECRET")
        if not self.jwt_secret:
            raise RuntimeError("JWT_SECRET must be set")
        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.jwt_expires_in = int(os.getenv("JWT_EXPIRES_IN", "43200"))  # minutes (30 days)

        # Security
        self.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "12"))
        self.password_min_length = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

        # CORS - configure for dev and prod
        origins_str = os.getenv("ALLOWED_ORIGINS", "")
        if not origins_str:
            if self.environment == "production":
                raise RuntimeError("ALLOWED_ORIGINS must be set in production (comma-separated HTTPS URLs)")
            else:
                # Default dev origins for the React frontend
                origins_str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

        self.allowed_origins = [origin.strip() for origin in origins_str.split(',') if origin.strip()]

        # Realtime fan-out
        self.ws_send_timeout = float(os.getenv("WS_SEND_TIMEOUT", "5"))

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_format = os.getenv("LOG_FORMAT", "json")


# Load environment variables from .env file if it exists
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

# Global settings instance
settings = Settings()
