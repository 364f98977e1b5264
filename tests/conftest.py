"""Shared fixtures for the advisory action server tests."""

import io
import json
from typing import Any, Dict, List

import pytest

from advisory_mcp.catalog import build_handlers, build_registry
from advisory_mcp.core.dispatcher import ActionDispatcher
from advisory_mcp.core.protocol import ProtocolServer
from advisory_mcp.core.schema_validator import SchemaValidator
from advisory_mcp.settings import PACKAGE_DIR


VALID_INPUTS: Dict[str, Dict[str, Any]] = {
    "wcagaaa_check": {"target": "https://example.com", "level": "AAA"},
    "rewrite_depression_sensitive_content": {"text": "You must finish today.", "mode": "rewrite"},
    "supportive_reply": {"message": "I feel overwhelmed", "risk_level": "medium"},
    "cognitive_accessibility_audit": {"content": "Short and clear content."},
    "cultural_context_check": {"message": "Hello team", "audience": "enterprise", "region": "India"},
    "deescalation_plan": {"situation": "billing dispute", "intensity": "medium"},
    "empathetic_reframe": {"message": "Unfortunately we cannot help.", "tone": "warm"},
    "grief_support_response": {"message": "I lost my parent", "support_mode": "presence"},
    "neurodiversity_design_check": {"ui_description": "animated dashboard", "focus": ["adhd"]},
    "age_inclusive_design_check": {"flow_description": "banking signup", "age_groups": ["older adults"]},
}


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def validator():
    return SchemaValidator(PACKAGE_DIR)


@pytest.fixture
def handlers():
    return build_handlers()


@pytest.fixture
def dispatcher(registry, validator, handlers):
    return ActionDispatcher(registry, validator, handlers)


@pytest.fixture
def server(registry, dispatcher):
    return ProtocolServer(registry, dispatcher)


@pytest.fixture
def valid_inputs():
    return {action: dict(data) for action, data in VALID_INPUTS.items()}


def _run_lines(server: ProtocolServer, lines: List[bytes]) -> List[Dict[str, Any]]:
    """Feed raw lines through ``serve`` and decode every response line."""
    instream = io.BytesIO(b"".join(line + b"\n" for line in lines))
    outstream = io.BytesIO()
    server.serve(instream, outstream)
    return [json.loads(line) for line in outstream.getvalue().splitlines()]


def _request_line(message: Dict[str, Any]) -> bytes:
    return json.dumps(message).encode("utf-8")


@pytest.fixture
def run_lines():
    return _run_lines


@pytest.fixture
def request_line():
    return _request_line
