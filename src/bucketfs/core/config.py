"""Configuration management for bucketfs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "bucketfs"
    otel_exporter_endpoint: str = "http://localhost:4317"

    # Defaults applied to facades built without explicit values
    endpoint_domain: str = "oss-cn-beijing.aliyuncs.com"
    region_name: str = "us-east-1"
    timeout: int = 300
    list_max_keys: int = 30

    model_config = {
        "env_prefix": "BUCKETFS_",
        "case_sensitive": False,
    }


settings = Settings()
