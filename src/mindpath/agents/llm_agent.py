from __future__ import annotations

from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ConfigDict

from mindpath.settings import settings


class LlmAgent(BaseModel):
    llm: ChatOpenAI

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_env(cls) -> "LlmAgent":
        if not settings.OPENAI_API_KEY or settings.OPENAI_API_KEY == "YOUR_OPENAI_API_KEY":
            raise ValueError("Missing OpenAI API key")

        llm = ChatOpenAI(
            model=settings.OPENAI_MODEL,
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_PROXY_URL,
            max_retries=settings.OPENAI_MAX_RETRIES,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
        )
        return cls(llm=llm)
