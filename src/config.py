from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FINANCING_"}

    # App
    api_title: str = "Financing Engine"
    debug: bool = False
    log_level: str = "INFO"

    # Input bounds for financings
    max_principal: Decimal = Decimal("999999999999.99")
    max_annual_interest_rate: Decimal = Decimal("1")  # 100% a.a.
    max_term_months: int = 600  # 50 years


settings = Settings()
