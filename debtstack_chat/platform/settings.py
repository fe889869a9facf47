"""Application settings and configuration.

This module provides Pydantic settings classes for application configuration,
loaded from environment variables with support for nested configuration.
"""

import logging

import pydantic_settings
from pydantic import BaseModel, Field, field_validator


class AppHTTPSettings(BaseModel):
    url: str = Field("")
    host: str = Field("0.0.0.0")
    port: int = Field(8000)
    log_level: str = Field("INFO")
    log_json: bool | None = Field(
        None, description="Override log format: True=JSON, False=console, None=auto"
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v):
        v_upper = v.upper()
        if v_upper not in logging._nameToLevel:
            raise ValueError(f'invalid value "{v}"')
        return v_upper


class BugsnagSettings(BaseModel):
    api_key: str
    release_stage: str = Field("development")

    @field_validator("release_stage")
    @classmethod
    def _validate_bugsnag_release_stage(cls, v):
        if v not in ["development", "production", "local"]:
            raise ValueError(f'invalid bugsnag release stage "{v}"')
        return v


class LitellmSettings(BaseModel):
    """Credentials for the hosted models.

    Both fields are optional: when empty, LiteLLM falls back to the provider
    keys in the environment (ANTHROPIC_API_KEY, GEMINI_API_KEY, ...).
    """

    proxy_api_base: str | None = None
    proxy_api_key: str | None = None


class BackendSettings(BaseModel):
    """DebtStack data API used by the chat tools.

    Attributes:
        url: Base URL of the DebtStack REST API
        timeout_seconds: Budget for a single tool call against the API
        research_timeout_seconds: Budget for one live SEC research run
    """

    url: str = Field("https://api.debtstack.ai")
    timeout_seconds: float = Field(15.0, gt=0)
    research_timeout_seconds: float = Field(45.0, gt=0)


class ChatSettings(BaseModel):
    """Behaviour of the chat tool-use loop.

    Attributes:
        model: LiteLLM model identifier used for the conversation
        max_tokens: Completion token budget per round
        temperature: Sampling temperature
        max_tool_rounds: Maximum model round-trips per request
        max_messages: Maximum conversation turns accepted per request
        max_result_items: Cap on list items returned by a tool
    """

    model: str = Field("anthropic/claude-sonnet-4-5-20250929")
    max_tokens: int = Field(4096, gt=0)
    temperature: float = Field(0.2, ge=0.0, le=2.0)
    max_tool_rounds: int = Field(5, ge=1)
    max_messages: int = Field(50, ge=1)
    max_result_items: int = Field(20, ge=1)


class SecSettings(BaseModel):
    """SEC EDGAR research pipeline configuration.

    Attributes:
        user_agent: Identifying User-Agent required by SEC fair access rules
        ticker_cache_ttl_seconds: Lifetime of the ticker to CIK table
        max_section_chars: Size of the debt section window sent to the model
        research_model: LiteLLM model identifier for structured extraction
    """

    user_agent: str = Field("DebtStack.ai contact@debtstack.ai")
    ticker_cache_ttl_seconds: float = Field(24 * 60 * 60, gt=0)
    max_section_chars: int = Field(100_000, gt=0)
    research_model: str = Field("gemini/gemini-2.5-pro")


class TwelveDataSettings(BaseModel):
    api_key: str = Field("")
    url: str = Field("https://api.twelvedata.com")


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_nested_delimiter="__")

    app_http: AppHTTPSettings = AppHTTPSettings()
    bugsnag: BugsnagSettings

    # Hosted model credentials
    litellm: LitellmSettings = LitellmSettings()

    # DebtStack data API
    backend: BackendSettings = BackendSettings()

    # Chat loop behaviour
    chat: ChatSettings = ChatSettings()

    # Live SEC research
    sec: SecSettings = SecSettings()

    # Treasury yield ticker
    twelve_data: TwelveDataSettings = TwelveDataSettings()
