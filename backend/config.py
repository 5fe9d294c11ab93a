from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Up to three Gemini keys; the evaluator rotates across whichever are set
    gemini_api_key: str = ""
    gemini_api_key_2: str = ""
    gemini_api_key_3: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # AI judgment settings
    ai_evaluation_enabled: bool = True  # if False, always return deterministic scores
    ai_timeout_seconds: float = 30.0
    ai_retry_backoff_seconds: float = 1.0
    ai_rate_limit_cooldown_seconds: float = 60.0

    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def gemini_api_keys(self) -> list[str]:
        keys = [self.gemini_api_key, self.gemini_api_key_2, self.gemini_api_key_3]
        return [k for k in keys if k]


settings = Settings()
