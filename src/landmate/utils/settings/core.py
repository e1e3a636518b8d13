from pydantic import Field
from .base import ABCBaseSettings


class EngineSettings(ABCBaseSettings):
    """Agreement schedule engine settings"""
    rounding_precision: int = Field(default=4, description="Decimal places for prorata factors")
    fractional_year_days: float = Field(
        default=365.25,
        description="Days per year used for the fractional part of a term length",
    )
    deed_document_type: str = Field(default="Deed", description="Document type name that marks a deed")
    purchase_price_payment_type: str = Field(
        default="Purchase Price",
        description="Payment type label on purchase price settlement events",
    )
    date_text_format: str = Field(default="%m/%d/%Y", description="strftime format for text dates")

    model_config = ABCBaseSettings.model_config.copy()
    model_config["env_prefix"] = "LANDMATE_"


class AppSettings(ABCBaseSettings):
    """Application settings"""
    app_name: str = Field(default="Landmate", description="Application name")
    environment: str = Field(default="local", description="Environment (local, dev, prod)")
    log_level: str = Field(default="INFO", description="Loguru sink level for the CLI")

    model_config = ABCBaseSettings.model_config.copy()
    model_config["env_prefix"] = "APP_"
