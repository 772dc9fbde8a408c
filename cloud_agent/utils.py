"""
Utility functions for Cloud Agent MCP.
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration.

    Logs always go to stderr: stdout carries the MCP protocol stream.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    # Reduce noise from third-party libraries unless debugging
    if level.upper() != "DEBUG":
        for name in ("urllib3", "requests", "mcp"):
            logging.getLogger(name).setLevel(logging.WARNING)
