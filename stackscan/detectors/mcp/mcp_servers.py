"""Configured MCP server detector.

Reads the mcpServers map from the MCP config files editors and agents keep
in a project. Each configured server becomes one result named
"MCP: <server>".
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import dir_exists, read_json_file
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

# Checked in order; the first file declaring a server name wins.
MCP_CONFIG_FILES = [
    ".claude/mcp.json",
    ".cursor/mcp.json",
    "mcp.json",
]

MCP_CONFIG_DIRS = [".claude", ".cursor"]

CONFIGURED_CONFIDENCE = 90
CONFIG_DIR_CONFIDENCE = 50


def _server_variant(server_config: object) -> str:
    if isinstance(server_config, dict):
        return server_config.get("command") or server_config.get("url") or "configured"
    return "configured"


def _servers_from_config(project_root: Path, relative: str) -> list[DetectionResult]:
    config = read_json_file(Path(project_root) / relative)
    if not config:
        return []

    servers = config.get("mcpServers")
    if not isinstance(servers, dict):
        return []

    return [
        DetectionResult(
            name=f"MCP: {name}",
            confidence=CONFIGURED_CONFIDENCE,
            evidence=(f"Configured in {relative}",),
            variant=str(_server_variant(server_config)),
        )
        for name, server_config in servers.items()
    ]


def detect_mcp_servers(project_root: Path) -> Optional[list[DetectionResult]]:
    """Detect configured MCP servers.

    Falls back to a weak "MCP Config Directory" signal when an editor config
    directory exists but declares no servers.
    """
    results: list[DetectionResult] = []
    seen: set[str] = set()

    for relative in MCP_CONFIG_FILES:
        for result in _servers_from_config(project_root, relative):
            if result.name in seen:
                continue
            seen.add(result.name)
            results.append(result)

    if results:
        return results

    found_dirs = [name for name in MCP_CONFIG_DIRS if dir_exists(project_root, name)]
    if not found_dirs:
        return None

    return [
        DetectionResult(
            name="MCP Config Directory",
            confidence=CONFIG_DIR_CONFIDENCE,
            evidence=tuple(f"{name}/ directory found" for name in found_dirs),
        )
    ]


mcp_servers_detector = Detector(
    category=DetectorCategory.MCP,
    name="MCP Servers Detector",
    probe=detect_mcp_servers,
    priority=10,
)
