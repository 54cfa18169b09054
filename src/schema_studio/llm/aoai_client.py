from __future__ import annotations
from schema_studio.config import Settings, settings as default_settings


def aoai_configured(cfg: Settings) -> bool:
    return bool(cfg.azure_openai_endpoint and cfg.azure_openai_api_key and cfg.azure_openai_deployment)


def build_aoai_client(cfg: Settings | None = None):
    """
    스키마 생성에 쓸 채팅 클라이언트. 설정이 비어 있으면 None (생성기가 MISSING_CREDENTIAL로 처리).
    v1 호환 엔드포인트(/openai/v1)는 OpenAI 클라이언트, 그 외는 AzureOpenAI.
    """
    cfg = cfg or default_settings
    if not aoai_configured(cfg):
        return None

    endpoint = cfg.azure_openai_endpoint.rstrip("/")
    if "/openai/v1" in endpoint:
        from openai import OpenAI
        return OpenAI(base_url=endpoint, api_key=cfg.azure_openai_api_key)

    from openai import AzureOpenAI
    return AzureOpenAI(
        azure_endpoint=endpoint,
        api_key=cfg.azure_openai_api_key,
        api_version=cfg.openai_api_version,
    )
