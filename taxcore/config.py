from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    default_tax_year: int = 2024

    # Section 179 (2024 limits, Rev. Proc. 2023-34). Congress changes these.
    section_179_max_deduction: Decimal = Decimal("1220000")
    section_179_phase_out_threshold: Decimal = Decimal("3050000")
    section_179_vehicle_limit: Decimal = Decimal("28900")
    section_179_suv_limit: Decimal = Decimal("30500")

    # Bonus depreciation for property placed in service in 2024
    bonus_depreciation_rate: Decimal = Decimal("0.60")

    # More than this share of basis placed in service in Q4 triggers mid-quarter
    mid_quarter_threshold: Decimal = Decimal("0.40")


settings = Settings()
