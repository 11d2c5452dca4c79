from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROFORMA_"}

    # NPV
    default_discount_rate: float = 0.10

    # IRR solver
    irr_lower_bound: float = -0.99
    irr_upper_bound: float = 10.0
    irr_initial_guess: float = 0.10
    irr_tolerance: float = 1e-6
    irr_max_iterations: int = 1000

    # Sensitivity shocks
    sensitivity_cap_rate_step: float = 0.005  # +/- 50bps exit cap
    sensitivity_interest_rate_step: float = 0.005  # +/- 50bps loan rate
    sensitivity_rent_growth_step: float = 0.01  # +/- 100bps annual rent growth

    # App
    cors_origins: list[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
