from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    card_store_file: str = "data/store/cards.json"
    transaction_store_file: str = "data/store/transactions.json"
    offer_store_file: str = "data/store/offers.json"
    benefit_store_file: str = "data/store/benefits.json"

    # bearer token -> user id, e.g. API_TOKENS='{"dev-token": "user-1"}'
    api_tokens: dict[str, str] = {}

    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: str = ""
    ai_model: str = "google/gemini-2.5-flash"
    advisor_timeout_s: float = 60.0

    telegram_bot_token: str = ""
    telegram_user_id: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
