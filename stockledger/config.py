from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Stock Ledger"
    LOG_LEVEL: str = "INFO"

    # Attribution for audit rows written without an explicit actor
    SYSTEM_ACTOR: str = "system"

    # Used when a product has no low_stock_threshold of its own
    DEFAULT_LOW_STOCK_THRESHOLD: int = 5

    # Generated unit serials look like <stock_code>-001
    SERIAL_PAD_WIDTH: int = 3

    # Reject sales/returns/serials pointing at unknown customers, sales or products
    STRICT_REFERENCES: bool = True

    # Base URL for QR code links (set to your domain in production)
    BASE_URL: str = "http://localhost:8000"

    model_config = {"env_file": ".env"}


settings = Settings()
