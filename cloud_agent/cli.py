#!/usr/bin/env python3
"""
Command-line entry point for the Cloud Agent MCP server.
"""

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables
load_dotenv()

# Import after loading env vars to ensure proper configuration
from . import __version__
from .infrastructure.config.settings import get_settings
from .utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloud-agent-mcp",
        description="MCP server exposing Cloud Agent tools (coding tasks, PR review, codebase Q&A, scans, playbooks)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                             # Run the MCP server on stdio
  %(prog)s --list-tools                                # Show the tool catalogue
  %(prog)s --call list_sessions --args '{"limit": 5}'  # Single tool call
        """
    )
    parser.add_argument('--list-tools',
                        action='store_true',
                        help='Print available tools and exit')
    parser.add_argument('--call',
                        metavar='TOOL',
                        help='Invoke a single tool and print its output')
    parser.add_argument('--args',
                        default='{}',
                        help='JSON object of arguments for --call (default: {})')
    parser.add_argument('--log-level',
                        default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (or set CLOUD_AGENT_LOG_LEVEL)')
    parser.add_argument('--version',
                        action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def _list_tools() -> int:
    from .plugin_loader import get_manager

    for plugin in get_manager().plugins:
        print(f"{plugin.name}\n    {plugin.description}")
    return 0


def _call_tool(name: str, raw_args: str) -> int:
    from .server import run_tool

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        print(f"Error: --args is not valid JSON: {e}", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("Error: --args must be a JSON object", file=sys.stderr)
        return 2

    output = run_tool(name, arguments)
    print(output.text)
    return 1 if output.is_error else 0


def main(argv=None) -> int:
    """Main entry point for Cloud Agent MCP."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging(args.log_level or "INFO")
        logging.getLogger(__name__).error("Invalid configuration: %s", e)
        return 2

    setup_logging(args.log_level or settings.log_level)
    logger = logging.getLogger(__name__)
    for problem in settings.validate_required_settings():
        logger.warning(problem)

    if args.list_tools:
        return _list_tools()
    if args.call:
        return _call_tool(args.call, args.args)

    from .server import serve

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
