from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./aluquote.db"
    COMPANY_NAME: str = "Venkatesh Aluminium & Glass"
    COMPANY_EMAIL: str = ""
    COMPANY_PHONE: str = ""

    # Quotation defaults shown on a fresh form
    GST_PERCENT_DEFAULT: float = 18.0
    PROFIT_MARGIN_DEFAULT: float = 10.0

    # Saved projects: oldest rows beyond this are pruned on save
    SAVED_PROJECT_LIMIT: int = Field(default=20, ge=1)

    # Saved quotations: IDs look like VEN2025-003
    QUOTATION_PREFIX: str = "VEN"

    # Multi-item quotation rates shown on a fresh form
    GLASS_RATE_PER_M2: float = 350.0
    ALUMINIUM_RATE_PER_KG: float = 280.0
    ACCESSORY_RATE_PER_ITEM: float = 150.0
    LABOR_CHARGE_PERCENT: float = 15.0
    COMPANY_MARKUP_PERCENT: float = 20.0

    SHARE_BASE_URL: str = "http://localhost:8000/"

    class Config:
        env_file = ".env"


settings = Settings()
