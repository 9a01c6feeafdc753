from __future__ import annotations

from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from config.settings import Settings
from llm.llm_logger import LLMLogger
from llm.openai_client import build_chat_model

GENERATION_SYSTEM = (
    "You are an expert Agile software engineer and Jira documentation specialist. "
    "Return clean structured plain text. No markdown."
)


class GenerationError(Exception):
    """The generation client is not usable (e.g. no deployment configured)."""


class GenerationClient:
    """Sends one chat completion per prompt and returns the generated text."""

    def __init__(self, settings: Settings, llm: Optional[BaseChatModel] = None) -> None:
        self.settings = settings
        self._llm = llm
        self._call_logger = LLMLogger(settings.llm_log_path)

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = build_chat_model(self.settings)
        return self._llm

    async def generate(self, prompt: str, prompt_template_name: str = "analyze") -> str:
        deployment = self.settings.azure_openai_deployment_name
        if not deployment:
            raise GenerationError("Missing AZURE_OPENAI_DEPLOYMENT_NAME")

        messages = [
            SystemMessage(content=GENERATION_SYSTEM),
            HumanMessage(content=prompt),
        ]
        response, _ = await self._call_logger.ainvoke_and_log(
            llm=self.llm,
            messages=messages,
            model_id=deployment,
            prompt_template_name=prompt_template_name,
        )

        content = getattr(response, "content", None)
        return content if isinstance(content, str) else ""
