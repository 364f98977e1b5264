"""
Export the action registry as JSON.

Run: python -m advisory_mcp.export_contracts [--output PATH]

Tooling that cross-checks skills against the registry reads this file
instead of importing the package.
"""

import argparse
import json
from pathlib import Path
from typing import List, Optional

from advisory_mcp.catalog import build_registry
from advisory_mcp.settings import PACKAGE_DIR, Settings
from advisory_mcp.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT = PACKAGE_DIR / "contracts.json"


def export_contracts(output: Path = DEFAULT_OUTPUT) -> int:
    """Write the validated listing to ``output``. Returns the contract count."""
    listing = build_registry().listing()
    output.write_text(json.dumps(listing, indent=2) + "\n", encoding="utf-8")
    logger.info("Contracts exported", count=len(listing), output=str(output))
    return len(listing)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Export the action registry as JSON")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Destination file")
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level, settings.log_format)

    count = export_contracts(args.output)
    print(f"Wrote {count} contracts to {args.output}")


if __name__ == "__main__":
    main()
