"""
Handler Base Class

Every action is served by one handler: a pure function of the validated
input and the action's boundary notice. Handlers perform no I/O.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping

from advisory_mcp.contracts.action_spec import InvokeResponse, Uncertainty


def text_field(data: Mapping[str, Any], key: str, fallback: str = "") -> str:
    """Trimmed string value of ``key``, or ``fallback`` when it is not a string."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else fallback


def list_field(data: Mapping[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


class ActionHandler(ABC):
    """Base class for all action handlers."""

    action: ClassVar[str] = "base"

    @abstractmethod
    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        """Produce the action result for validated input."""

    def respond(
        self,
        boundary_notice: str,
        *,
        output: Dict[str, Any],
        assumptions: List[str],
        uncertainty: Uncertainty,
    ) -> InvokeResponse:
        return InvokeResponse(
            action=self.action,
            output=output,
            assumptions=assumptions,
            uncertainty=uncertainty,
            boundary_notice=boundary_notice,
        )
