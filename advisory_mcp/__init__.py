"""
Advisory MCP Server

Rule-based advisory actions (content-safety rewrites, accessibility
checklists, de-escalation plans) served over a line-delimited JSON
request/response transport.

Components:
- contracts/: wire contracts, error codes, contract validation
- core/registry.py: read-only action contract table
- core/schema_validator.py: schema-driven input validation
- core/dispatcher.py: action dispatch and error taxonomy
- core/protocol.py: line framing, envelope checks, routing
- handlers/: one pure handler per action
- catalog.py: the action list both registry and handlers are built from
"""

__version__ = "0.1.0"
