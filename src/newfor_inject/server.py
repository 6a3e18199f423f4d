"""MCP server entry point for Newfor subtitle injection.

Exposes the session client as tools, resources, and prompts via the Model
Context Protocol using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import argparse
import json
import logging
import warnings
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import NewforConfig
from .errors import EncodingOverflow
from .models.page import PageNumber
from .models.style import Color, Position, SubtitleStyle
from .protocol.layout import MAX_LINES, row_numbers
from .protocol.variants import get_variant
from .session import NewforSession

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "newfor-inject",
    instructions="Send teletext subtitles to a Newfor subtitle-insertion receiver",
)

# Global session state
_config: NewforConfig = NewforConfig()
_session: NewforSession | None = None


def _get_session() -> NewforSession:
    """Get the open session, raising if not connected."""
    if _session is None or not _session.connected:
        raise RuntimeError(
            "Not connected to a receiver. Use the 'connect' tool first."
        )
    return _session


def _build_style(
    color: str, boxed: bool, double_height: bool, position: str
) -> SubtitleStyle:
    return SubtitleStyle(
        color=Color.from_name(color),
        boxed=boxed,
        double_height=double_height,
        position=Position.from_name(position),
    )


def _check_lines(lines: list[str]) -> str | None:
    if not 1 <= len(lines) <= MAX_LINES:
        return f"Between 1 and {MAX_LINES} lines are required, got {len(lines)}"
    return None


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    host: str | None = None,
    port: int | None = None,
    page: str | None = None,
    variant: str | None = None,
) -> dict[str, Any]:
    """Open a TCP session to the subtitle receiver.

    Args:
        host: Receiver address (defaults to the configured host).
        port: Receiver TCP port (defaults to the configured port).
        page: Subtitle page, 3 digits (defaults to the configured page, "888").
        variant: Protocol variant: newfor (default), burst, or framed.
    """
    global _session
    if _session is not None and _session.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "host": _session.receiver.host,
            "port": _session.receiver.port,
            "page": str(_session.page),
        }

    try:
        config = _config.with_overrides(host=host, port=port, page=page, variant=variant)
    except ValueError as e:
        return {"error": str(e)}

    _session = NewforSession.from_config(config)
    info = _session.connect()

    return {
        "connected": True,
        "host": info.host,
        "port": info.port,
        "page": str(_session.page),
        "variant": _session.variant.name,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Send DISCONNECT and close the receiver connection."""
    global _session
    if _session is None:
        return {"disconnected": True}
    _session.disconnect()
    _session = None
    return {"disconnected": True}


@mcp.tool()
def get_status() -> dict[str, Any]:
    """Report connection state, receiver address, page, and protocol variant."""
    if _session is None:
        return {"connected": False, "config": _config.to_dict()}
    info = _session.receiver
    return {
        "connected": _session.connected,
        "state": _session.state.value,
        "host": info.host,
        "port": info.port,
        "page": str(_session.page),
        "variant": _session.variant.name,
    }


@mcp.tool()
def set_page(page: str) -> dict[str, Any]:
    """Change the subtitle page used by later sends and clears.

    Args:
        page: Page number, 000-899.
    """
    try:
        new_page = _get_session().set_page(page)
    except ValueError as e:
        return {"error": str(e)}
    return {"page": str(new_page)}


# ─── SUBTITLE TOOLS ───────────────────────────────────────────────────

@mcp.tool()
def send_subtitle(
    lines: list[str],
    color: str = "white",
    boxed: bool = True,
    double_height: bool = False,
    position: str = "lower",
    page: str | None = None,
) -> dict[str, Any]:
    """Display 1-3 subtitle lines, replacing what is on screen.

    Args:
        lines: Subtitle text, one string per line (1-3 lines).
        color: white, yellow, green, red, blue, magenta, or cyan.
        boxed: Draw the text in a black box.
        double_height: Use double-height characters.
        position: top, middle, or lower.
        page: Override the session page for this update.
    """
    error = _check_lines(lines)
    if error:
        return {"error": error}
    try:
        style = _build_style(color, boxed, double_height, position)
        target = None if page is None else PageNumber.parse(page)
    except ValueError as e:
        return {"error": str(e)}

    session = _get_session()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", EncodingOverflow)
        session.send(lines, style, target)

    result: dict[str, Any] = {
        "sent": True,
        "page": str(target or session.page),
        "lines": len(lines),
        "style": style.to_dict(),
    }
    overflow = [str(w.message) for w in caught if issubclass(w.category, EncodingOverflow)]
    if overflow:
        result["warnings"] = overflow
    return result


@mcp.tool()
def clear_page(page: str | None = None) -> dict[str, Any]:
    """Blank the subtitle display.

    Args:
        page: Override the session page for this clear.
    """
    try:
        target = None if page is None else PageNumber.parse(page)
    except ValueError as e:
        return {"error": str(e)}

    session = _get_session()
    session.clear(target)
    return {"cleared": True, "page": str(target or session.page)}


@mcp.tool()
def preview_subtitle(
    lines: list[str],
    color: str = "white",
    boxed: bool = True,
    double_height: bool = False,
    position: str = "lower",
    page: str | None = None,
) -> dict[str, Any]:
    """Show the packets a send would write, without a connection.

    Uses the configured protocol variant. Arguments are as for send_subtitle.
    """
    error = _check_lines(lines)
    if error:
        return {"error": error}
    try:
        style = _build_style(color, boxed, double_height, position)
        if page is not None:
            target = PageNumber.parse(page)
        elif _session is not None:
            target = _session.page
        else:
            target = PageNumber.parse(_config.page)
    except ValueError as e:
        return {"error": str(e)}

    variant = _session.variant if _session is not None else get_variant(_config.variant)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", EncodingOverflow)
        packets = variant.send_packets(target, lines, style)

    result: dict[str, Any] = {
        "variant": variant.name,
        "page": str(target),
        "packets": [
            {"type": name, "length": len(data), "hex": data.hex(" ")}
            for name, data in packets
        ],
    }
    overflow = [str(w.message) for w in caught if issubclass(w.category, EncodingOverflow)]
    if overflow:
        result["warnings"] = overflow
    return result


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("newfor://session/status")
def resource_session_status() -> str:
    """Connection state, page, and protocol variant."""
    return json.dumps(get_status())


@mcp.resource("newfor://catalog/colors")
def resource_colors() -> str:
    """Available subtitle colours with their WST control codes."""
    colors = [{"name": c.name.lower(), "code": f"0x{c.value:02X}"} for c in Color]
    return json.dumps({"colors": colors})


@mcp.resource("newfor://catalog/positions")
def resource_positions() -> str:
    """Vertical positions and the row a single normal-height line lands on."""
    positions = [
        {"name": p.value, "row": row_numbers(1, p, False)[0]} for p in Position
    ]
    return json.dumps({"positions": positions, "max_lines": MAX_LINES})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def caption_lines(text: str) -> str:
    """Guide the AI to break text into subtitle updates.

    Args:
        text: Dialogue or narration to caption.
    """
    return f"""Break the following text into teletext subtitle updates:

{text}

Rules:
- At most {MAX_LINES} lines per update
- At most 28 characters per line; longer lines are cut off at the right edge
- Keep sentences together where possible; split at natural pauses

Send each update with the send_subtitle tool, and use clear_page
between scenes."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main(argv: list[str] | None = None):
    """Run the MCP server with stdio transport."""
    global _config
    parser = argparse.ArgumentParser(description="Newfor subtitle injection MCP server")
    parser.add_argument("--host", help="Receiver address (env NEWFOR_HOST)")
    parser.add_argument("--port", type=int, help="Receiver TCP port (env NEWFOR_PORT)")
    parser.add_argument("--page", help="Subtitle page, default 888 (env NEWFOR_PAGE)")
    parser.add_argument(
        "--variant",
        choices=["newfor", "burst", "framed"],
        help="Protocol variant (env NEWFOR_VARIANT)",
    )
    parser.add_argument("--timeout", type=float, help="Socket timeout in seconds")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())
    _config = NewforConfig.from_env().with_overrides(
        host=args.host,
        port=args.port,
        page=args.page,
        variant=args.variant,
        timeout=args.timeout,
    )
    logger.info("Receiver %s:%s page %s", _config.host, _config.port, _config.page)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
