"""MCP project detector.

Classifies the scanned project itself: an MCP server implementation, an
MCP client, or neither.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    PackageJson,
    Score,
    get_dependencies,
    read_package_json,
    read_text_capped,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40

MCP_SDK = "@modelcontextprotocol/sdk"

SERVER_ENTRY_FILES = [
    "src/index.ts",
    "src/server.ts",
    "src/mcp.ts",
    "index.ts",
    "server.ts",
]

SERVER_CODE_MARKERS = (MCP_SDK, "McpServer")

KEYWORD_MARKERS = ("mcp", "model-context-protocol", "claude")


def _server_entry_file(project_root: Path) -> Optional[str]:
    """First entry file that imports the SDK or builds an McpServer."""
    for relative in SERVER_ENTRY_FILES:
        content = read_text_capped(Path(project_root) / relative)
        if content and any(marker in content for marker in SERVER_CODE_MARKERS):
            return relative
    return None


def _mcp_keywords(pkg: PackageJson) -> list[str]:
    keywords = pkg.get("keywords")
    if not isinstance(keywords, list):
        return []
    return [
        keyword
        for keyword in keywords
        if isinstance(keyword, str) and any(m in keyword.lower() for m in KEYWORD_MARKERS)
    ]


def _detect_mcp_server(
    project_root: Path, pkg: PackageJson, deps: DependencyMap
) -> Optional[DetectionResult]:
    score = Score()

    if MCP_SDK in deps:
        score.add(70, f"{MCP_SDK}@{deps[MCP_SDK]} in dependencies")

    name = pkg.get("name")
    if isinstance(name, str):
        if name.startswith("mcp-") or name.endswith("-mcp"):
            score.add(20, f'Package name "{name}" follows MCP naming convention')
        if "mcp-server" in name or "server-mcp" in name:
            score.add(10, f'Package name "{name}" indicates MCP server')

    keywords = _mcp_keywords(pkg)
    if keywords:
        score.add(10, f"MCP-related keywords: {', '.join(keywords)}")

    entry_file = _server_entry_file(project_root)
    if entry_file:
        score.add(20, f"MCP server code found in {entry_file}")

    if pkg.get("bin") and MCP_SDK in deps:
        score.add(10, "Package has bin field (likely a CLI MCP server)")

    return score.result("MCP Server Project", version=deps.get(MCP_SDK))


def _detect_mcp_client(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@anthropic-ai/sdk" in deps:
        score.add(50, f"@anthropic-ai/sdk@{deps['@anthropic-ai/sdk']} in dependencies")
    if MCP_SDK in deps:
        score.add(30, "MCP SDK found (could be client usage)")

    return score.result("MCP Client")


def detect_mcp_project(project_root: Path) -> Optional[DetectionResult]:
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)

    server = _detect_mcp_server(project_root, pkg, deps)
    if server and server.confidence >= MIN_CONFIDENCE:
        return server

    client = _detect_mcp_client(deps)
    if client and client.confidence >= MIN_CONFIDENCE:
        return client

    return None


mcp_project_detector = Detector(
    category=DetectorCategory.MCP,
    name="MCP Project Detector",
    probe=detect_mcp_project,
    priority=20,
)
