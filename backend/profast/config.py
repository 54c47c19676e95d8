"""
ProFast Backend - Application Configuration
============================================

What:  Centralized configuration loaded from environment variables (or .env).
Why:   Database credentials, the payment gateway key and the listen port are
       read exactly once at process start and shared by every module.
How:   Pydantic Settings reads, coerces and validates each field, then exposes
       a singleton `settings` object.
Who:   Imported by database, services, middleware and the app factory.

Design Decision:
    The MongoDB URI can be given whole (MONGODB_URI) or assembled from the
    Atlas credentials (DB_USER, DB_PASSWORD, DB_CLUSTER_HOST). The assembled
    form quotes user and password so passwords containing '@' or '/' work.
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults are suitable for local development against an Atlas cluster.
    Production deployments MUST set DB_USER/DB_PASSWORD (or MONGODB_URI)
    and PAYMENT_GATEWAY_KEY.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Full connection string; takes precedence over the Atlas fields below
    mongodb_uri: str = Field(default="", description="Full MongoDB connection URI")

    db_user: str = Field(default="")
    db_password: str = Field(default="")
    db_cluster_host: str = Field(default="cluster0.knw8z6m.mongodb.net")
    db_app_name: str = Field(default="Cluster0")
    db_name: str = Field(default="profastDB")

    # How long the driver waits for a suitable server before failing an operation
    db_server_selection_timeout_ms: int = Field(default=5000, ge=500, le=60000)

    # Startup ping attempts (exponential backoff between attempts)
    db_connect_attempts: int = Field(default=3, ge=1, le=10)

    # Create collection indexes during startup
    db_ensure_indexes: bool = Field(default=True)

    # ── Payment Gateway (Stripe) ──────────────────────────────────────────
    payment_gateway_key: str = Field(
        default="",
        description="Stripe secret key used to create payment intents",
    )

    # Currency used when asking the gateway for a card payment intent
    payment_intent_currency: str = Field(default="usd")

    # Defaults stamped on payment history records when the client omits them
    payment_default_currency: str = Field(default="BDT")
    payment_default_method: str = Field(default="Stripe")

    # Wrap the parcel update and the history insert in one transaction.
    # Requires a replica set (Atlas clusters are replica sets).
    payment_confirm_transactional: bool = Field(default=False)

    # ── Circuit Breaker (payment gateway) ─────────────────────────────────
    cb_failure_threshold: int = Field(default=5, ge=1, le=20)
    cb_recovery_timeout: int = Field(default=60, ge=0, le=300)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Comma-separated; "*" allows every origin
    cors_origins: str = Field(default="*")

    log_level: str = Field(default="INFO")

    # ── Rate Limiting ─────────────────────────────────────────────────────
    rate_limit_requests: int = Field(default=1000, ge=10, le=100000)
    rate_limit_window: int = Field(default=3600, ge=1, le=86400)  # seconds

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("payment_intent_currency")
    @classmethod
    def lowercase_currency(cls, v: str) -> str:
        # Stripe expects ISO currency codes in lower case
        return v.strip().lower()

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def database_uri(self) -> str:
        """
        Connection string handed to the MongoDB driver.

        MONGODB_URI wins when set. Otherwise the Atlas SRV URI is built from
        the credential fields.
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_password)}"
            f"@{self.db_cluster_host}/?retryWrites=true&w=majority&appName={self.db_app_name}"
        )

    def validate_required_for_production(self) -> None:
        """
        What:  Checks that the settings the service cannot work without are present.
        When:  Called during app startup (lifespan).
        Why:   A clear startup error beats an opaque driver or gateway failure later.
        """
        errors = []
        if not self.mongodb_uri and not (self.db_user and self.db_password):
            errors.append("Database credentials are not set. Provide MONGODB_URI or DB_USER and DB_PASSWORD.")
        if not self.payment_gateway_key:
            errors.append("PAYMENT_GATEWAY_KEY is not set. Payment intents cannot be created.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance imported throughout the application
settings = Settings()
