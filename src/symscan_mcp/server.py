"""MCP server for symscan-mcp."""

import asyncio
import json

from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import Settings
from .errors import ErrorCode
from .logging import configure_logging, get_logger
from .parser import SUPPORTED_LANGUAGES, SYMBOL_TYPES
from .tools.list_languages import list_languages, get_language_example
from .tools.scan_source import scan_source
from .tools.scan_file import scan_file_tool
from .tools.scan_folder import scan_folder
from .tools.search_symbols import search_symbols, SORT_KEYS
from .tools.get_scope_outline import get_scope_outline

logger = get_logger(__name__)


# Create server
server = Server("symscan-mcp")


_SOURCE_PROPERTIES = {
    "source": {
        "type": "string",
        "description": "Source code to scan"
    },
    "language": {
        "type": "string",
        "description": "Language of the source",
        "enum": list(SUPPORTED_LANGUAGES)
    },
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="list_languages",
            description="List the supported languages with display name, file extension and keywords.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_language_example",
            description="Get the example snippet for a language together with the symbols extracted from it.",
            inputSchema={
                "type": "object",
                "properties": {
                    "language": _SOURCE_PROPERTIES["language"]
                },
                "required": ["language"]
            }
        ),
        Tool(
            name="scan_source",
            description="Extract the symbol table (variables, functions, classes, methods, constants, imports, built-ins) from source code.",
            inputSchema={
                "type": "object",
                "properties": dict(_SOURCE_PROPERTIES),
                "required": ["source", "language"]
            }
        ),
        Tool(
            name="scan_file",
            description="Extract the symbol table from a local source file. The language is detected from the file extension unless given.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the file (absolute or relative, supports ~ for home directory)"
                    },
                    "language": _SOURCE_PROPERTIES["language"]
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="scan_folder",
            description="Scan every supported source file in a local folder. Skips vendored/build directories and .gitignore matches.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to local folder (absolute or relative, supports ~ for home directory)"
                    },
                    "max_files": {
                        "type": "integer",
                        "description": "Maximum number of files to scan"
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="search_symbols",
            description="Scan source code, then filter the symbol table by name/scope substring and type, and sort it by any column.",
            inputSchema={
                "type": "object",
                "properties": {
                    **_SOURCE_PROPERTIES,
                    "query": {
                        "type": "string",
                        "description": "Case-insensitive substring matched against symbol name or scope",
                        "default": ""
                    },
                    "type": {
                        "type": "string",
                        "description": "Optional filter by symbol type",
                        "enum": ["all", *SYMBOL_TYPES]
                    },
                    "sort_by": {
                        "type": "string",
                        "description": "Column to sort by",
                        "enum": list(SORT_KEYS),
                        "default": "line"
                    },
                    "order": {
                        "type": "string",
                        "enum": ["asc", "desc"],
                        "default": "asc"
                    }
                },
                "required": ["source", "language"]
            }
        ),
        Tool(
            name="get_scope_outline",
            description="Get the symbols of source code nested under the classes and functions that enclose them.",
            inputSchema={
                "type": "object",
                "properties": dict(_SOURCE_PROPERTIES),
                "required": ["source", "language"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    settings = Settings.from_env()

    try:
        if name == "list_languages":
            result = list_languages()
        elif name == "get_language_example":
            result = get_language_example(language=arguments["language"])
        elif name == "scan_source":
            result = scan_source(
                source=arguments["source"],
                language=arguments["language"]
            )
        elif name == "scan_file":
            result = scan_file_tool(
                path=arguments["path"],
                language=arguments.get("language"),
                max_size=settings.max_file_size
            )
        elif name == "scan_folder":
            result = scan_folder(
                path=arguments["path"],
                max_files=arguments.get("max_files") or settings.max_files,
                max_size=settings.max_file_size
            )
        elif name == "search_symbols":
            result = search_symbols(
                source=arguments["source"],
                language=arguments["language"],
                query=arguments.get("query", ""),
                type=arguments.get("type"),
                sort_by=arguments.get("sort_by", "line"),
                order=arguments.get("order", "asc")
            )
        elif name == "get_scope_outline":
            result = get_scope_outline(
                source=arguments["source"],
                language=arguments["language"]
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("tool_failed", tool=name)
        error = {"error": str(e), "code": ErrorCode.INTERNAL_ERROR.name}
        return [TextContent(type="text", text=json.dumps(error, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    settings = Settings.from_env()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    logger.info("server_starting", languages=len(SUPPORTED_LANGUAGES))
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
