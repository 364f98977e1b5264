"""Strict contracts for the advisory action protocol."""

from advisory_mcp.contracts.action_spec import (
    SCHEMA_DIR_PREFIX,
    ActionContract,
    InvokeRequest,
    InvokeResponse,
    Uncertainty,
)
from advisory_mcp.contracts.envelope import (
    RequestEnvelope,
    ResponseEnvelope,
    ValidationIssue,
    issues_from_error,
)
from advisory_mcp.contracts.error_spec import (
    DispatchError,
    ErrorCode,
    HandlerNotBoundError,
    InputValidationError,
    UnknownActionError,
)
from advisory_mcp.contracts.validation import ContractValidationError, validate_contract

__all__ = [
    "SCHEMA_DIR_PREFIX",
    "ActionContract",
    "InvokeRequest",
    "InvokeResponse",
    "Uncertainty",
    "RequestEnvelope",
    "ResponseEnvelope",
    "ValidationIssue",
    "issues_from_error",
    "DispatchError",
    "ErrorCode",
    "HandlerNotBoundError",
    "InputValidationError",
    "UnknownActionError",
    "ContractValidationError",
    "validate_contract",
]
