"""Advisory action server entry point: line-delimited JSON over stdin/stdout."""

import sys
from typing import Optional, TextIO

from advisory_mcp import __version__
from advisory_mcp.catalog import build_handlers, build_registry
from advisory_mcp.contracts.validation import ContractValidationError
from advisory_mcp.core.dispatcher import ActionDispatcher
from advisory_mcp.core.protocol import ProtocolServer
from advisory_mcp.core.schema_validator import SchemaValidator
from advisory_mcp.settings import Settings
from advisory_mcp.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_server(settings: Settings) -> ProtocolServer:
    """Wire registry, validator, dispatcher and server. Raises ContractValidationError."""
    registry = build_registry()
    validator = SchemaValidator(settings.schema_root, cache_schemas=settings.cache_schemas)
    dispatcher = ActionDispatcher(registry, validator, build_handlers())
    return ProtocolServer(registry, dispatcher, max_line_bytes=settings.max_line_bytes)


def startup_banner(action_count: int) -> str:
    return (
        f"Advisory MCP Server v{__version__}\n"
        f"Actions: {action_count} registered\n"
        "Protocol: line-delimited JSON (see docs/protocol.md)\n"
        "Ready - waiting for requests on stdin\n"
    )


def main(settings: Optional[Settings] = None, diagnostics: Optional[TextIO] = None) -> int:
    settings = settings or Settings()
    diagnostics = diagnostics or sys.stderr
    configure_logging(settings.log_level, settings.log_format)

    try:
        server = build_server(settings)
    except ContractValidationError as e:
        logger.error("Action registry failed startup validation", errors=e.errors)
        return 1

    # Banner goes to the diagnostics channel so stdout stays pure protocol.
    diagnostics.write(startup_banner(len(server.registry)))
    diagnostics.flush()

    server.install_signal_handlers()
    logger.info(
        "Server started",
        app_name=settings.app_name,
        version=__version__,
        action_count=len(server.registry),
        max_line_bytes=settings.max_line_bytes,
    )
    server.serve(sys.stdin.buffer, sys.stdout.buffer)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
