"""Envelope contracts for the line-delimited JSON transport."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError


RequestType = Literal["list_actions", "invoke"]


class RequestEnvelope(BaseModel):
    """One inbound protocol line."""

    model_config = ConfigDict(strict=True)

    id: Optional[StrictStr] = Field(None, description="Opaque request id echoed on the response")
    type: RequestType = Field(..., description="Request type")
    payload: Any = Field(None, description="Type-specific payload")


class ValidationIssue(BaseModel):
    """Field-level detail for a rejected envelope or payload."""

    model_config = ConfigDict(frozen=True)

    path: List[Union[str, int]] = Field(default_factory=list, description="Location of the offending value")
    code: str = Field(..., description="Violation code")
    message: str = Field(..., description="Human readable message")


def issues_from_error(exc: PydanticValidationError) -> List[ValidationIssue]:
    """Flatten a pydantic validation error into wire issues."""
    return [
        ValidationIssue(
            path=list(error["loc"]),
            code=error["type"],
            message=error["msg"],
        )
        for error in exc.errors(include_url=False)
    ]


class ResponseEnvelope(BaseModel):
    """One outbound protocol line."""

    id: Optional[str] = Field(None, description="Echo of the request id")
    ok: bool = Field(..., description="Success status")
    data: Any = Field(None, description="Result on success")
    error: Optional[str] = Field(None, description="Error message on failure")
    issues: Optional[List[ValidationIssue]] = Field(None, description="Schema violation detail")

    @classmethod
    def success(cls, request_id: Optional[str], data: Any) -> "ResponseEnvelope":
        return cls(id=request_id, ok=True, data=data)

    @classmethod
    def failure(
        cls,
        request_id: Optional[str],
        error: str,
        issues: Optional[List[ValidationIssue]] = None,
    ) -> "ResponseEnvelope":
        return cls(id=request_id, ok=False, error=error, issues=issues)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with absent keys omitted and ``data``/``error`` exclusive."""
        body: Dict[str, Any] = {}
        if self.id is not None:
            body["id"] = self.id
        body["ok"] = self.ok
        if self.ok:
            body["data"] = self.data
        else:
            body["error"] = self.error
            if self.issues is not None:
                body["issues"] = [issue.model_dump() for issue in self.issues]
        return body
