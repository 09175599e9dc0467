from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

FIREBASE_CERTS_URL = "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"


class Settings(BaseSettings):
	host: str = Field(default="0.0.0.0", validation_alias="HOST")
	port: int = Field(default=8080, validation_alias="PORT")
	# Every route is mounted under this prefix (GET /api/health by default), matching
	# the paths the browser front end calls; set API_PREFIX="" for bare paths
	api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
	cors_origins: List[str] = Field(default=["*"], validation_alias="CORS_ORIGINS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# Oracle credential; absent means mock-question mode
	gemini_api_key: str | None = Field(default=None, validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY"))
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	gemini_timeout_seconds: float = Field(default=30, validation_alias="GEMINI_TIMEOUT_SECONDS")
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# Identity service; all three must be present, else open access
	firebase_project_id: str | None = Field(default=None, validation_alias="FIREBASE_PROJECT_ID")
	firebase_client_email: str | None = Field(default=None, validation_alias="FIREBASE_CLIENT_EMAIL")
	firebase_private_key: str | None = Field(default=None, validation_alias="FIREBASE_PRIVATE_KEY")
	firebase_certs_url: str = Field(default=FIREBASE_CERTS_URL, validation_alias="FIREBASE_CERTS_URL")

	# Attempt store; absent means analytics is unavailable
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	@property
	def identity_configured(self) -> bool:
		return bool(self.firebase_project_id and self.firebase_client_email and self.firebase_private_key)
