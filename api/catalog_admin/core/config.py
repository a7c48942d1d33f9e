"""Settings for the catalog admin API, read from the environment and `.env`."""
import sys
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+psycopg2://catalog_user:catalog_pass@db:5432/catalog_db"
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    JWT_ISSUER: str | None = None
    JWT_AUDIENCE: str | None = None

    # Production enables secure cookies and the startup checks below
    ENVIRONMENT: str = "development"  # "development" or "production"

    # CORS configuration - comma-separated origins
    CORS_ORIGINS: str = "http://localhost:3000"

    # Session cookie set on login alongside the bearer token
    COOKIE_NAME: str = "admin_session"

    LOG_LEVEL: str = "INFO"

    # Default accounts created by the seed script
    SEED_ADMIN_EMAIL: str = "admin@example.com"
    SEED_ADMIN_PASSWORD: str = "admin123"
    SEED_EDITOR_EMAIL: str = "editor@example.com"
    SEED_EDITOR_PASSWORD: str = "editor123"

    class Config:
        env_file = ".env"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_production_settings(self) -> None:
        """Refuse to start production with the development secret.

        Raises SystemExit if critical security settings are misconfigured.
        """
        if self.is_production:
            if self.SECRET_KEY == "dev-secret-key-change-in-production":
                print("FATAL: SECRET_KEY must be changed in production!", file=sys.stderr)
                print("Set a secure random SECRET_KEY environment variable.", file=sys.stderr)
                sys.exit(1)

            if self.SEED_ADMIN_PASSWORD == "admin123":
                print("WARNING: default seed admin password is configured in production!", file=sys.stderr)
                print("Set SEED_ADMIN_PASSWORD before running the seed script.", file=sys.stderr)


settings = Settings()
# Validate on startup
settings.validate_production_settings()
