"""Contract registry: read-only table of action contracts."""

from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, List, Optional

import structlog

from advisory_mcp.contracts.action_spec import SCHEMA_DIR_PREFIX, ActionContract
from advisory_mcp.contracts.validation import ContractValidationError, validate_contract

logger = structlog.get_logger(__name__)


def _under_schema_dir(path: str) -> bool:
    parts = PurePosixPath(path).parts
    return path.startswith(SCHEMA_DIR_PREFIX) and ".." not in parts and len(parts) > 1


class ContractRegistry:
    """Validated, ordered, immutable set of action contracts."""

    def __init__(self, contracts: Iterable[ActionContract]):
        self._contracts = tuple(self.validate_all(list(contracts)))
        self._by_action: Dict[str, ActionContract] = {
            contract.action: contract for contract in self._contracts
        }

    @staticmethod
    def validate_all(contracts: List[Any]) -> List[ActionContract]:
        """
        Check every contract and the table-wide invariants.

        Raises:
            ContractValidationError: On an empty field, a duplicate action or
                skill, or a schema path outside the schema directory.
        """
        validated = [validate_contract(contract, ActionContract) for contract in contracts]

        errors: List[Dict[str, str]] = []
        seen_actions: Dict[str, int] = {}
        seen_skills: Dict[str, int] = {}
        for index, contract in enumerate(validated):
            if contract.action in seen_actions:
                errors.append({"field": f"{index}.action", "message": f"duplicate action '{contract.action}'"})
            seen_actions.setdefault(contract.action, index)

            if contract.skill in seen_skills:
                errors.append({"field": f"{index}.skill", "message": f"duplicate skill '{contract.skill}'"})
            seen_skills.setdefault(contract.skill, index)

            for name, path in (
                ("inputSchemaPath", contract.input_schema_path),
                ("outputSchemaPath", contract.output_schema_path),
            ):
                if not _under_schema_dir(path):
                    errors.append({
                        "field": f"{index}.{name}",
                        "message": f"schema path must be under '{SCHEMA_DIR_PREFIX}'",
                    })

        if errors:
            logger.error("Registry invariant check failed", error_count=len(errors))
            raise ContractValidationError("Action registry failed its invariant check", errors=errors)
        return validated

    def lookup(self, action: str) -> Optional[ActionContract]:
        return self._by_action.get(action)

    def all(self) -> List[ActionContract]:
        return list(self._contracts)

    def listing(self) -> List[Dict[str, Any]]:
        """Wire listing for ``list_actions``, re-validated before exposure."""
        return [contract.to_wire() for contract in self.validate_all(self.all())]

    def __len__(self) -> int:
        return len(self._contracts)

    def __contains__(self, action: object) -> bool:
        return action in self._by_action
