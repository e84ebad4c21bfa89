# FILE: backend/config.py
"""
Configuration management for Memory Lane
Loads from environment variables with validation
"""
import os
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )
    
    # Backend server
    backend_host: str = Field(default="0.0.0.0", alias="BACKEND_HOST")
    backend_port: int = Field(default=3000, alias="BACKEND_PORT")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    
    # Data paths
    data_dir: str = Field(default="./data", alias="DATA_DIR")
    upload_dir: Optional[str] = Field(
        default=None,
        alias="UPLOAD_DIR",
        description="Directory for uploaded images and songs. Defaults to <DATA_DIR>/uploads"
    )
    upload_url_prefix: str = Field(default="/assets/uploads", alias="UPLOAD_URL_PREFIX")
    frontend_dir: str = Field(default="./frontend", alias="FRONTEND_DIR")
    logs_dir: str = Field(default="./logs", alias="LOGS_DIR")
    
    # Authentication
    memories_password: Optional[str] = Field(
        default=None,
        alias="MEMORIES_PASSWORD",
        description="Shared password used when no password.json exists in DATA_DIR"
    )
    session_ttl_days: int = Field(default=7, alias="SESSION_TTL_DAYS")
    session_prune_expired: bool = Field(
        default=True,
        alias="SESSION_PRUNE_EXPIRED",
        description="Drop expired sessions whenever the session store is rewritten"
    )
    audit_enabled: bool = Field(default=True, alias="AUDIT_ENABLED")
    
    # Uploads
    upload_max_mb: int = Field(default=50, alias="UPLOAD_MAX_MB")
    
    # Security
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_rpm: int = Field(default=20, alias="RATE_LIMIT_RPM")
    rate_limit_paths: List[str] = Field(default=["/check-password"], alias="RATE_LIMIT_PATHS")
    body_size_limit_mb: int = Field(default=55, alias="BODY_SIZE_LIMIT_MB")
    
    # CORS
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")
    
    # Validators
    @field_validator("session_ttl_days", "upload_max_mb", "body_size_limit_mb", "rate_limit_rpm")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v
    
    @field_validator("upload_url_prefix")
    @classmethod
    def validate_upload_url_prefix(cls, v):
        if not v.startswith("/"):
            raise ValueError("upload_url_prefix must start with '/'")
        return v.rstrip("/")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v
    
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.upload_dir:
            self.upload_dir = os.path.join(self.data_dir, "uploads")
        # Ensure directories exist
        for dir_path in [self.data_dir, self.upload_dir, self.logs_dir]:
            os.makedirs(dir_path, exist_ok=True)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings (useful for testing)"""
    global _settings
    _settings = None
    return get_settings()
