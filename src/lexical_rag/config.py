"""Configuration models for the RAG system."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NO_CONTEXT_PLACEHOLDER = "（未检索到相关知识）"


class RetrievalConfig(BaseModel):
    """Configures top-K lexical retrieval."""

    top_k: int = Field(default=2, ge=0)


class RouterConfig(BaseModel):
    """Configures keyword routing between retrieval and direct answering."""

    keywords: tuple[str, ...] = Field(default=("eino", "框架"), min_length=1)

    @field_validator("keywords")
    @classmethod
    def _lowercase_keywords(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(keyword.strip().lower() for keyword in value if keyword.strip())
        if not cleaned:
            raise ValueError("at least one non-blank keyword is required")
        return cleaned


class MemoryConfig(BaseModel):
    """Configures per-session conversation memory."""

    max_messages: int = Field(default=10, ge=1)


class PipelineConfig(BaseModel):
    """Prompts and placeholder text used when assembling model messages."""

    rag_system_prompt: str = "你是一个知识助手，请结合提供的知识回答问题，回答时引用知识条目编号。"
    grounded_system_prompt: str = (
        "你是一个AI助手。请结合提供的知识回答用户问题，如果知识不足以回答，请直接说明不知道。"
    )
    direct_system_prompt: str = "你是一个通用的智能助手，以简洁方式回答用户问题。"
    context_header: str = "相关知识：\n"
    no_context_placeholder: str = NO_CONTEXT_PLACEHOLDER


class Settings(BaseSettings):
    """Environment-driven settings for the model endpoint and service."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ark_api_key: str = Field(default="", validation_alias="ARK_API_KEY")
    ark_base_url: str = Field(default="", validation_alias="ARK_BASE_URL")
    ark_model: str = Field(default="", validation_alias="ARK_MODEL")
    log_level: str = Field(default="INFO", validation_alias="LEXICAL_RAG_LOG_LEVEL")
    corpus_path: str | None = Field(default=None, validation_alias="LEXICAL_RAG_CORPUS_PATH")
    top_k: int = Field(default=2, ge=0, validation_alias="LEXICAL_RAG_TOP_K")

    @property
    def model_configured(self) -> bool:
        return bool(self.ark_api_key and self.ark_base_url and self.ark_model)
