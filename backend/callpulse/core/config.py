"""
Application configuration
"""

from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # Logging Settings
    LOG_LEVEL: str = "INFO"
    
    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "CallPulse Supervisor Analytics"
    
    # CORS Settings
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    
    # Remote interaction API
    INSIGHTS_API_BASE_URL: str = "http://localhost:8080"
    SPEC_PATH: str = "/openapi.json"
    HEALTH_CHECK_PATH: str = "/docs"
    
    # API Timeouts (seconds)
    REQUEST_TIMEOUT: float = 15.0
    PROBE_TIMEOUT: float = 10.0
    MAX_CONCURRENT_REQUESTS: int = 10  # Maximum number of concurrent probes
    
    # Endpoint Discovery
    EXCLUDED_ENDPOINTS: str = "/api/v1/reports/batch,/api/v1/interactions/search,/api/v1/dsr/requests"
    SAMPLE_ENDPOINT_LIMIT: int = 3  # Interaction endpoints sampled to refine field mappings
    
    # Field Mapping
    TRANSCRIPT_MIN_LENGTH: int = 50  # Shorter free text is a label, not a transcript
    
    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production
    
    class Config:
        env_file = ".env"
        case_sensitive = True
    
    def get_cors_origins(self) -> List[str]:
        """Return the list of allowed CORS origins"""
        if self.BACKEND_CORS_ORIGINS:
            # Parse comma-separated string of origins
            origins = [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
            # Use explicit list if provided, otherwise use parsed origins
            return origins if origins else self.CORS_ORIGINS
        return self.CORS_ORIGINS
    
    def get_excluded_endpoints(self) -> List[str]:
        """Return the static paths that must never be probed"""
        return [path.strip() for path in self.EXCLUDED_ENDPOINTS.split(",") if path.strip()]


# Create global settings instance
settings = Settings()
