"""
Configuration settings for the application
"""

import os
from typing import Dict, List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wedding_rsvp.db")
    
    # Security
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "change-me")
    
    # Email (Brevo transactional API)
    BREVO_API_KEY: str | None = os.getenv("BREVO_API_KEY")
    BREVO_API_URL: str = "https://api.brevo.com/v3/smtp/email"
    EMAIL_TIMEOUT_SECONDS: float = 10.0
    SENDER_EMAIL: str = os.getenv("SENDER_EMAIL", "info@example.com")
    SENDER_NAME: str = "Alessandro e Simona"
    ORGANIZER_RECIPIENTS: List[Dict[str, str]] = [
        {"email": "sposi@example.com", "name": "Sposi"}
    ]
    
    # Wedding
    COUPLE_NAMES: str = "Alessandro e Simona"
    COUPLE_SIGNATURE: str = "Simona e Alessandro"
    
    # Application
    DASHBOARD_URL: str = os.getenv("DASHBOARD_URL", "http://localhost:8000/lista-invitati")
    RSVP_URL: str = os.getenv("RSVP_URL", "http://localhost:8000/")
    
    # CORS
    ALLOW_ORIGINS: List[str] = ["*"]
    
    # File limits
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB
    
    class Config:
        env_file = ".env"

settings = Settings()

def get_settings() -> Settings:
    """Settings dependency, overridable in tests"""
    return settings
