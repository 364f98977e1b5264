"""
Action Dispatcher

Gates an invoke call through the registry and the schema validator, then
hands the validated input to the bound handler.
"""

from typing import Any, Dict, Mapping

import structlog

from advisory_mcp.contracts.action_spec import InvokeResponse
from advisory_mcp.contracts.error_spec import (
    HandlerNotBoundError,
    InputValidationError,
    UnknownActionError,
)
from advisory_mcp.core.registry import ContractRegistry
from advisory_mcp.core.schema_validator import SchemaValidator
from advisory_mcp.handlers.base import ActionHandler

logger = structlog.get_logger(__name__)


class ActionDispatcher:
    """Routes validated invoke calls to their handlers."""

    def __init__(
        self,
        registry: ContractRegistry,
        validator: SchemaValidator,
        handlers: Mapping[str, ActionHandler],
    ):
        self.registry = registry
        self.validator = validator
        self._handlers: Dict[str, ActionHandler] = dict(handlers)

    def invoke(self, action: str, data: Dict[str, Any]) -> InvokeResponse:
        """
        Invoke an action.

        Raises:
            UnknownActionError: The action is not registered.
            InputValidationError: The input failed the action's input schema.
            HandlerNotBoundError: The action is registered but has no handler.
        """
        contract = self.registry.lookup(action)
        if contract is None:
            logger.info("Unknown action requested", action=action)
            raise UnknownActionError(action)

        result = self.validator.validate(contract.input_schema_path, data)
        if not result.valid:
            logger.info(
                "Input validation failed",
                action=action,
                error_count=len(result.errors),
            )
            raise InputValidationError(action, list(result.errors))

        handler = self._handlers.get(action)
        if handler is None:
            logger.error("Registered action has no bound handler", action=action, skill=contract.skill)
            raise HandlerNotBoundError(action)

        response = handler.invoke(data, contract.safety_boundary)
        logger.debug("Action invoked", action=action, uncertainty=response.uncertainty)
        return response
