#!/usr/bin/env python3
"""
Verify that every Braiins Pool tool is registered with FastMCP.

This script imports the MCP server and checks that:
1. The server instance exists
2. All pool tools plus health_check are registered
3. Each tool carries a description and an input schema
"""

import asyncio
import sys

from braiins_mcp.server import SERVER_VERSION, mcp
from braiins_mcp.tools import TOOL_NAMES


async def verify_tool_registration() -> bool:
    """Verify all tools are registered."""
    print("=" * 60)
    print("MCP Tool Registration Verification")
    print("=" * 60)

    print(f"\n✓ MCP Server Instance: {mcp.name} v{SERVER_VERSION}")

    tools = {tool.name: tool for tool in await mcp.list_tools()}
    print(f"\n✓ Total Tools Registered: {len(tools)}")

    print("\nRegistered Tools:")
    for i, name in enumerate(sorted(tools), 1):
        print(f"  {i}. {name}")

    missing = [name for name in (*TOOL_NAMES, "health_check") if name not in tools]
    for name in TOOL_NAMES:
        tool = tools.get(name)
        if tool is None:
            continue
        params = ", ".join(tool.inputSchema.get("properties", {}).keys()) or "none"
        print(f"\n  - {name}: {(tool.description or 'N/A')[:80]}...")
        print(f"    Parameters: {params}")

    print("\n" + "=" * 60)
    if missing:
        print(f"✗ VERIFICATION FAILED: missing {', '.join(missing)}")
    else:
        print("✓ VERIFICATION SUCCESSFUL")
    print("=" * 60)
    return not missing


if __name__ == "__main__":
    try:
        success = asyncio.run(verify_tool_registration())
        sys.exit(0 if success else 1)
    except Exception as e:
        print(f"\n✗ ERROR: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
