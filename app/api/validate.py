from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from ..core.credentials import KEYS_VALIDATED, CredentialValidator
from ..logging_config import get_logger
from ..types import ValidateKeysRequest, ValidateKeysResponse
from .agent import read_json
from .deps import get_credential_validator

router = APIRouter()
logger = get_logger(__name__)

VALIDATION_FAILED = "Failed to validate API keys"


@router.post("/validate-keys", response_model=ValidateKeysResponse, response_model_exclude_none=True)
async def validate_keys_endpoint(
    request: Request,
    validator: CredentialValidator = Depends(get_credential_validator),
) -> ValidateKeysResponse:
    """Check credential shapes and make one probe call with the model key"""

    payload = await read_json(request)
    if not isinstance(payload, dict):
        return ValidateKeysResponse(valid=False, error=VALIDATION_FAILED)
    try:
        api_keys = ValidateKeysRequest.model_validate(payload)
    except ValidationError:
        logger.info("credentials_rejected", kind="input")
        return ValidateKeysResponse(valid=False, error=VALIDATION_FAILED)

    result = await validator.validate(api_keys)
    if not result.valid:
        return ValidateKeysResponse(valid=False, error=result.reason)
    return ValidateKeysResponse(valid=True, message=KEYS_VALIDATED)
