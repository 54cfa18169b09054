from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    schema_output_dir: Path = Field(default=Path("./out"), alias="SCHEMA_OUTPUT_DIR")
    log_level: str = Field(default="INFO", alias="SCHEMA_LOG_LEVEL")

    # 노드 드래그가 멈춘 뒤 텍스트 기반 재빌드를 허용하기까지의 대기 시간
    drag_settle_ms: int = Field(default=500, alias="SCHEMA_DRAG_SETTLE_MS")

    generation_max_tokens: int = Field(default=1000, alias="SCHEMA_GEN_MAX_TOKENS")
    generation_temperature: float = Field(default=0.7, alias="SCHEMA_GEN_TEMPERATURE")

    azure_openai_endpoint: str | None = Field(default=None, alias="AZURE_OPENAI_ENDPOINT")
    azure_openai_api_key: str | None = Field(default=None, alias="AZURE_OPENAI_API_KEY")
    openai_api_version: str = Field(default="2024-06-01", alias="OPENAI_API_VERSION")
    azure_openai_deployment: str | None = Field(default=None, alias="AZURE_OPENAI_DEPLOYMENT")

    @property
    def drag_settle_seconds(self) -> float:
        return self.drag_settle_ms / 1000.0

settings = Settings()
