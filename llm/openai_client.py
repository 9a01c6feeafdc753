from __future__ import annotations

from langchain_core.language_models import BaseChatModel

from config.settings import Settings


def build_chat_model(settings: Settings) -> BaseChatModel:
    """
    Chat model for the Azure OpenAI deployment named in settings.

    The endpoint is treated as an OpenAI-compatible base URL: the deployment goes
    in as the model name, the API version as a query parameter, and the key both
    as bearer token and as the Azure `api-key` header.
    Retries are disabled; the client's default timeout applies.
    """
    from langchain_openai import ChatOpenAI

    return ChatOpenAI(
        model=settings.azure_openai_deployment_name,
        api_key=settings.azure_openai_api_key,
        base_url=settings.azure_openai_endpoint or None,
        default_query={"api-version": settings.azure_openai_api_version},
        default_headers={"api-key": settings.azure_openai_api_key},
        max_retries=0,
        streaming=False,
    )
