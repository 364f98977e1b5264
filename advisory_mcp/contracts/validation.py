"""
Contract Validation Utilities

Utilities for validating contracts before they are served.
"""

import json
from typing import Any, Dict, List, Optional, Type, Union

import structlog
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger(__name__)


class ContractValidationError(Exception):
    """Contract validation error."""

    def __init__(self, message: str, errors: Optional[List[Dict]] = None):
        super().__init__(message)
        self.errors = errors or []


def validate_contract(
    data: Union[BaseModel, Dict[str, Any], str, bytes],
    contract_class: Type[BaseModel],
) -> BaseModel:
    """
    Validate data against a contract class.

    Args:
        data: Data to validate (model instance, dict, JSON string, or bytes)
        contract_class: Pydantic model class to validate against

    Returns:
        Validated contract instance

    Raises:
        ContractValidationError: If validation fails
    """
    if isinstance(data, BaseModel):
        # Instances built with model_construct skip validation; re-check them.
        data = data.model_dump(by_alias=True)

    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ContractValidationError(f"Invalid JSON: {e}")

    try:
        return contract_class.model_validate(data)
    except ValidationError as e:
        error_details = []
        for error in e.errors(include_url=False):
            error_details.append({
                'field': '.'.join(str(x) for x in error['loc']),
                'message': error['msg'],
                'type': error['type'],
            })

        logger.warning(
            "Contract validation failed",
            contract=contract_class.__name__,
            error_count=len(error_details),
        )
        raise ContractValidationError(
            f"Contract validation failed for {contract_class.__name__}",
            errors=error_details
        )
