from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Auth configuration
	jwt_secret_key: str = Field(default="change-me", validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	access_token_expire_minutes: int = Field(default=120, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")
	# Seed user, inserted into auth_users at startup when both are set
	seed_username: str | None = Field(default=None, validation_alias="SEED_USERNAME")
	seed_password_plain: str | None = Field(default=None, validation_alias="SEED_PASSWORD")

	# Scoring: "exact_alignment" (sliding window) or "weighted_overlap" (length + vocabulary)
	scoring_strategy: str = Field(default="exact_alignment", validation_alias="SCORING_STRATEGY")
	target_words: int = Field(default=200, validation_alias="TARGET_WORDS")
	# Below this many words the weighted strategy gives no length credit
	min_words: int = Field(default=50, validation_alias="MIN_WORDS")
	length_weight: float = Field(default=0.6, validation_alias="LENGTH_WEIGHT")
	quality_weight: float = Field(default=0.4, validation_alias="QUALITY_WEIGHT")
	# Candidate and reference are truncated to this many tokens before scoring
	max_input_words: int = Field(default=5000, validation_alias="MAX_INPUT_WORDS")

	# Fallback location of <task_id>.txt reference documents
	reference_texts_dir: str = Field(default="reference_texts", validation_alias="REFERENCE_TEXTS_DIR")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
	storage_retry_attempts: int = Field(default=3, validation_alias="STORAGE_RETRY_ATTEMPTS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
