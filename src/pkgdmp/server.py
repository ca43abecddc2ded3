"""MCP server for pkgdmp."""

import asyncio
import json

from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import KIND_FLAG_NAMES
from .tools.dump_package import dump_package
from .tools.list_symbol_kinds import list_symbol_kinds


# Create server
server = Server("pkgdmp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    kinds = ", ".join(KIND_FLAG_NAMES)
    return [
        Tool(
            name="dump_package",
            description="Dump the declarations of the Go package(s) in a local folder: constants, types, functions and methods with signatures and doc synopses, no function bodies.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to a folder of Go files (absolute or relative, supports ~ for home directory)"
                    },
                    "matching": {
                        "type": "string",
                        "description": "Only include identifiers matching this regular expression",
                        "default": ""
                    },
                    "exclude_matching": {
                        "type": "string",
                        "description": "Exclude identifiers matching this regular expression",
                        "default": ""
                    },
                    "only": {
                        "type": "string",
                        "description": f"Comma separated symbol kinds to include ({kinds})",
                        "default": ""
                    },
                    "exclude": {
                        "type": "string",
                        "description": f"Comma separated symbol kinds to exclude ({kinds})",
                        "default": ""
                    },
                    "unexported": {
                        "type": "boolean",
                        "description": "Include unexported symbols",
                        "default": False
                    },
                    "no_docs": {
                        "type": "boolean",
                        "description": "Omit doc comments",
                        "default": False
                    },
                    "full_docs": {
                        "type": "boolean",
                        "description": "Keep full doc comments instead of the first sentence",
                        "default": False
                    },
                    "no_tags": {
                        "type": "boolean",
                        "description": "Omit struct field tags",
                        "default": False
                    },
                    "exclude_files": {
                        "type": "string",
                        "description": "Comma separated gitignore-style patterns of files to skip",
                        "default": ""
                    },
                    "format": {
                        "type": "string",
                        "description": "Output format: Go source text or structured JSON",
                        "enum": ["text", "json"],
                        "default": "text"
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="list_symbol_kinds",
            description="List the symbol kind names accepted by the only/exclude options of dump_package.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "dump_package":
            result = dump_package(
                path=arguments["path"],
                matching=arguments.get("matching", ""),
                exclude_matching=arguments.get("exclude_matching", ""),
                only=arguments.get("only", ""),
                exclude=arguments.get("exclude", ""),
                unexported=arguments.get("unexported", False),
                no_docs=arguments.get("no_docs", False),
                full_docs=arguments.get("full_docs", False),
                no_tags=arguments.get("no_tags", False),
                exclude_files=arguments.get("exclude_files", ""),
                format=arguments.get("format", "text"),
            )
        elif name == "list_symbol_kinds":
            result = list_symbol_kinds()
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


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
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
