from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "aurae-pki"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Root CA subject (issuing system identity)
    CA_ORGANIZATION: str = "Aurae"
    CA_ORGANIZATIONAL_UNIT: str = "Runtime"
    CA_STREET_ADDRESS: str = "aurae"
    CA_LOCALITY: str = "aurae"
    CA_COUNTRY: str = "IS"

    # Root CA key and validity
    CA_VALIDITY_DAYS: int = 9999
    CA_KEY_SIZE: int = 2048


settings = Settings()
