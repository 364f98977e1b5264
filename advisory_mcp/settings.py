from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from advisory_mcp.core.protocol import MAX_LINE_BYTES

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    app_name: str = "advisory-mcp"
    max_line_bytes: int = Field(MAX_LINE_BYTES, ge=1024, description="Largest accepted request line in bytes")
    schema_root: Path = PACKAGE_DIR
    cache_schemas: bool = False
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(env_prefix="ADVISORY_MCP_")
