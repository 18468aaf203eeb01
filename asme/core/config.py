"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "1.04.00"

    LOG_LEVEL: str = "INFO"

    # Database (hosted Postgres; schema is owned by the platform, not by us)
    DATABASE_URL: str

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Frontend (for redirects and links in emails)
    FRONTEND_URL: str = "http://localhost:3000"

    # Hosted auth (Supabase GoTrue)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""  # Server-only, used for admin user management
    AUTH_TIMEOUT_SECONDS: float = 10.0

    # Public media storage (DigitalOcean Spaces, S3-compatible)
    SPACES_REGION: str = "nyc3"
    SPACES_BUCKET: str = ""
    SPACES_ACCESS_KEY: str = ""
    SPACES_SECRET_KEY: str = ""
    SPACES_ENDPOINT_URL: str = ""  # Defaults to https://{region}.digitaloceanspaces.com

    # Private case documents (Supabase Storage S3 endpoint or any S3 bucket)
    DOCUMENTS_BUCKET: str = "casos-docs"
    DOCUMENTS_ENDPOINT_URL: str = ""
    DOCUMENTS_REGION: str = "us-east-1"
    DOCUMENTS_ACCESS_KEY: str = ""
    DOCUMENTS_SECRET_KEY: str = ""
    PRESIGNED_URL_TTL_SECONDS: int = 3600

    # Transactional email (Resend)
    RESEND_API_KEY: str = ""
    EMAIL_FROM: str = "ASME <notificaciones@asme.mx>"
    CONTACT_NOTIFY_EMAIL: str = "contacto@asme.mx"
    LEGAL_NOTIFY_EMAIL: str = ""  # Falls back to CONTACT_NOTIFY_EMAIL

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Rate Limiting (requests per minute)
    RATE_LIMIT_PUBLIC: int = 10  # Booking + contact forms
    RATE_LIMIT_AUTH: int = 5  # Login attempts
    RATE_LIMIT_API: int = 120  # General API
    RATE_LIMIT_STORAGE_URI: str = ""  # e.g. redis://localhost:6379/0; in-memory when empty

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def spaces_endpoint(self) -> str:
        """S3 endpoint for the media Space."""
        if self.SPACES_ENDPOINT_URL:
            return self.SPACES_ENDPOINT_URL.rstrip("/")
        return f"https://{self.SPACES_REGION}.digitaloceanspaces.com"

    @property
    def spaces_public_base_url(self) -> str:
        """Public base URL for objects in the media Space."""
        return f"https://{self.SPACES_BUCKET}.{self.SPACES_REGION}.digitaloceanspaces.com"

    @property
    def legal_notify_email(self) -> str:
        return self.LEGAL_NOTIFY_EMAIL or self.CONTACT_NOTIFY_EMAIL

    @property
    def cookie_secure(self) -> bool:
        """Secure cookies only in production."""
        return self.ENV != "dev"


settings = Settings()
