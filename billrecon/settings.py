import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="BILLRECON_", extra="ignore")

    store_backend: str = "json"
    data_dir: str = "./data"
    vendor_bills_file: str = "vendor_bills.json"
    company_bills_file: str = "company_bills.json"
    payments_file: str = "payments.json"

    storage_backend: str = "local"
    storage_local_path: str = "./exports"
    storage_prefix: str = "exports"

    export_filename_prefix: str = "bills_export"

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
