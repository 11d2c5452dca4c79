"""Pro forma routes: stateless calculate / sensitivity / validate."""

import logging

from fastapi import APIRouter

from proforma.api.schemas import (
    ProFormaRequest,
    ProFormaResponse,
    SensitivityResponse,
    ValidationResponse,
)
from proforma.engine.proforma import run_proforma
from proforma.engine.sensitivity import run_sensitivity
from proforma.engine.validation import validate_assumptions
from proforma.models.results import ProFormaResults

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/proforma", tags=["proforma"])


def _result_to_response(result: ProFormaResults, warnings: list[str]) -> ProFormaResponse:
    """Convert engine ProFormaResults to API response."""
    response = ProFormaResponse.model_validate(result)
    response.warnings = warnings
    return response


@router.post("/calculate", response_model=ProFormaResponse)
def calculate(req: ProFormaRequest):
    """Primary endpoint: assumptions → full pro forma.

    Incomplete assumptions still compute; problems come back as warnings.
    """
    assumptions = req.assumptions.to_domain()
    warnings = validate_assumptions(assumptions)
    if warnings:
        logger.warning("Pro forma assumptions have %d issue(s): %s", len(warnings), "; ".join(warnings))

    result = run_proforma(assumptions, discount_rate=req.discount_rate)
    logger.debug(
        "Pro forma computed: hold=%d loan=%s irr=%s",
        len(result.annual_cashflows), result.loan.loan_amount, result.irr,
    )
    return _result_to_response(result, warnings)


@router.post("/sensitivity", response_model=SensitivityResponse)
def sensitivity(req: ProFormaRequest):
    """IRR / DSCR under exit cap, rent growth and interest rate shocks."""
    assumptions = req.assumptions.to_domain()
    base = run_proforma(assumptions, discount_rate=req.discount_rate)
    return SensitivityResponse.model_validate(run_sensitivity(assumptions, base))


@router.post("/validate", response_model=ValidationResponse)
def validate(req: ProFormaRequest):
    errors = validate_assumptions(req.assumptions.to_domain())
    return ValidationResponse(valid=not errors, errors=errors)
