"""
Arch Context - MCP Server for Workstation Context

A local MCP (Model Context Protocol) server that lets an AI agent request a
fresh, redacted description of this Arch Linux workstation.

Tools:
    - generate_context: Run the collectors and return the new report
    - read_latest_context: Return the most recent report
    - redact_text: Mask credentials and personal data in arbitrary text
    - list_modules: List the available collector modules

Safety Constraints:
    - Redaction is always on for reports returned to the agent
    - Returned report content is truncated to MAX_CONTENT_CHARS
"""

import os
from typing import Any

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from archcontext import (
    ALL_MODULES, BASIC_MODULES, Settings, SettingsError, UnknownModuleError, generate, resolve_modules
)
from archcontext.generator import LATEST_NAME
from redaction import get_default_engine

# Load environment variables from .env file
load_dotenv()

# Initialize MCP server
mcp = FastMCP(
    "arch-context",
    instructions="MCP Server exposing a redacted system context of an Arch Linux workstation"
)

# Safety constants
MAX_CONTENT_CHARS = 50_000


def _load_settings() -> Settings:
    settings = Settings.from_env(os.environ)
    # Never hand unredacted output to the agent
    settings.redact = True
    return settings


def _truncate(content: str, max_chars: int) -> tuple[str, bool]:
    if len(content) > max_chars:
        return content[:max_chars] + "\n... (truncated)", True
    return content, False


@mcp.tool()
def generate_context(modules: str = "", basic: bool = False) -> dict[str, Any]:
    """
    Generate a new Markdown context report for this workstation.

    Args:
        modules: Comma-separated module names, e.g. "hardware,network".
                 Leave empty to collect all modules.
        basic: If True and modules is empty, collect only the basic
               modules (hardware, os, packages).

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - report_path: Where the report was written
        - modules: The modules that were collected
        - size_bytes: Size of the report file
        - truncated: Whether content was cut to MAX_CONTENT_CHARS
        - content: The (redacted) report text

    Example usage:
        generate_context("hardware")
        generate_context(basic=True)
    """
    try:
        if modules.strip():
            selected = resolve_modules(modules.split(","))
            if not selected:
                return {
                    "status": "error",
                    "message": "No modules given",
                    "available_modules": list(ALL_MODULES)
                }
        elif basic:
            selected = list(BASIC_MODULES)
        else:
            selected = list(ALL_MODULES)

        settings = _load_settings()
        path = generate(selected, settings)
        content, truncated = _truncate(path.read_text(encoding="utf-8"), MAX_CONTENT_CHARS)

        return {
            "status": "success",
            "report_path": str(path),
            "modules": selected,
            "size_bytes": path.stat().st_size,
            "truncated": truncated,
            "content": content
        }

    except UnknownModuleError as e:
        return {
            "status": "error",
            "message": str(e),
            "available_modules": list(ALL_MODULES)
        }
    except SettingsError as e:
        return {
            "status": "error",
            "message": f"Invalid configuration: {e}"
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def read_latest_context(max_chars: int = MAX_CONTENT_CHARS) -> dict[str, Any]:
    """
    Return the most recently generated context report.

    Args:
        max_chars: Maximum characters of content to return (capped at
                   MAX_CONTENT_CHARS).

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - report_path: The file the latest link points to
        - truncated: Whether content was cut
        - content: The report text
    """
    max_chars = max(1, min(max_chars, MAX_CONTENT_CHARS))

    try:
        settings = _load_settings()
        latest = settings.output_dir / LATEST_NAME
        if not latest.exists():
            return {
                "status": "error",
                "message": f"No context report found in {settings.output_dir}. Run generate_context first."
            }

        content, truncated = _truncate(latest.read_text(encoding="utf-8"), max_chars)
        return {
            "status": "success",
            "report_path": str(latest.resolve()),
            "truncated": truncated,
            "content": content
        }

    except SettingsError as e:
        return {
            "status": "error",
            "message": f"Invalid configuration: {e}"
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def redact_text(text: str) -> dict[str, Any]:
    """
    Mask credentials, email addresses, IPv4 addresses and home directory
    usernames in the given text.

    Args:
        text: Text to sanitize; each line is processed independently.

    Returns:
        A dictionary containing:
        - status: "success"
        - text: The redacted text
        - was_redacted: True if anything was replaced
    """
    engine = get_default_engine()
    lines = text.splitlines(keepends=True)
    redacted = "".join(engine.redact_lines(lines))

    return {
        "status": "success",
        "text": redacted,
        "was_redacted": redacted != text
    }


@mcp.tool()
def list_modules() -> dict[str, Any]:
    """
    List the collector modules available to generate_context.

    Returns:
        A dictionary containing:
        - status: "success"
        - modules: All module names, in report order
        - basic_modules: The subset collected with basic=True
    """
    return {
        "status": "success",
        "modules": list(ALL_MODULES),
        "basic_modules": list(BASIC_MODULES),
        "count": len(ALL_MODULES)
    }


if __name__ == "__main__":
    # Run the MCP server using stdio transport
    mcp.run()
