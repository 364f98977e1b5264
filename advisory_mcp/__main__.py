"""
Module entrypoint: `python -m advisory_mcp`

Starts the advisory action server on stdin/stdout.
"""

from advisory_mcp.main import run

if __name__ == "__main__":
    run()
