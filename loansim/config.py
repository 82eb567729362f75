from decimal import Decimal

from pydantic_settings import BaseSettings

from loansim.models.loan import Capitalization, RateMode


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOANSIM_"}

    # App
    log_level: str = "INFO"

    # Simulation defaults (applied at the request boundary, never inside the engine)
    default_currency: str = "PEN"
    default_discount_rate_percent: Decimal = Decimal("0")
    default_rate_mode: RateMode = RateMode.EFFECTIVE
    default_capitalization: Capitalization = Capitalization.MONTHLY
    default_payment_frequency: str = "monthly"


settings = Settings()
