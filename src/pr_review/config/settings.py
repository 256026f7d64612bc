"""Application settings using Pydantic Settings for environment variable management."""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_review.models.dependencies import ContentConfig, ReviewConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # OpenAI Configuration
    openai_api_key: str | None = Field(
        default=None, description="OpenAI API key for AI models"
    )
    openai_model: str = Field(default="gpt-4.1-nano", description="OpenAI model to use")
    openai_base_url: str | None = Field(
        default=None, description="Alternative OpenAI-compatible API base URL"
    )

    # GitHub Configuration
    # Note: GitHub Actions doesn't allow secret names starting with GITHUB_
    # so we accept both GH_TOKEN and the runner-provided GITHUB_TOKEN
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_TOKEN", "GITHUB_TOKEN"),
        description="GitHub token used to read the diff and post reviews",
    )
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    github_graphql_url: str = Field(
        default="https://api.github.com/graphql",
        description="GitHub GraphQL endpoint used for review threads",
    )
    bot_login: str | None = Field(
        default=None,
        description="Login the bot posts as; looked up from the token when unset",
    )

    # Observability
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    # Application Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    http_timeout: float = Field(
        default=30.0, description="Timeout in seconds for GitHub HTTP calls"
    )

    # Review Configuration
    bot_name: str = Field(
        default="AI Code Review", description="Bot name to display in comments"
    )
    max_files: int = Field(
        default=10, description="Maximum number of files to review per PR"
    )
    exclude_patterns: str = Field(
        default="*.md,*.txt,*.json,*.yml,*.yaml",
        description="Comma-separated glob patterns of files to skip",
    )
    min_severity: str = Field(
        default="info", description="Lowest severity that gets posted inline"
    )
    auto_approve: bool = Field(
        default=False,
        description="Approve the PR once every bot thread has been resolved",
    )
    review_focus: str | None = Field(
        default=None, description="Custom review focus appended to the prompt"
    )
    max_tokens: int = Field(default=1500, description="Completion token budget")
    review_temperature: float = Field(
        default=0.3, description="Temperature for AI model responses"
    )

    # PR Content Configuration
    include_file_list: bool = Field(
        default=False, description="List changed files in the content prompt"
    )
    custom_instructions: str | None = Field(
        default=None, description="Extra instructions for title and description writing"
    )
    template_path: str = Field(
        default=".github/pull_request_template.md",
        description="Repository path of the pull request template",
    )
    content_max_tokens: int = Field(
        default=1000, description="Completion token budget for title and description"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    def to_review_config(self) -> ReviewConfig:
        """Build the immutable configuration passed into the review pipeline."""
        config = ReviewConfig(
            max_files=self.max_files,
            exclude_patterns=self.exclude_patterns,
            min_severity=self.min_severity,
            auto_approve=self.auto_approve,
            bot_name=self.bot_name,
        )
        if self.review_focus:
            config = config.model_copy(update={"review_focus": self.review_focus})
        return config

    def to_content_config(self) -> ContentConfig:
        """Build the immutable configuration for a title and description run."""
        return ContentConfig(
            include_file_list=self.include_file_list,
            custom_instructions=self.custom_instructions or "",
            template_path=self.template_path,
        )

    def require_credentials(self) -> None:
        """Raise if the secrets needed for a review run are missing."""
        missing = []
        if not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        if not self.github_token:
            missing.append("GITHUB_TOKEN")
        if missing:
            raise RuntimeError(
                "Missing required environment variables: " + ", ".join(missing)
            )


# Global settings instance
settings = Settings()
