"""Model Context Protocol detectors.

Entry points:
    detect_mcp_servers(project_root)   -- servers configured in MCP config files
    detect_mcp_project(project_root)   -- is the project an MCP server or client
    get_recommended_mcp_servers(project_root) -- servers worth installing
"""

from stackscan.detectors.mcp.mcp_project import detect_mcp_project, mcp_project_detector
from stackscan.detectors.mcp.mcp_servers import detect_mcp_servers, mcp_servers_detector
from stackscan.detectors.mcp.recommendations import (
    detect_recommendations,
    get_recommended_mcp_servers,
    is_recommendation,
    recommendations_detector,
    recommended_server,
)

__all__ = [
    "detect_mcp_project",
    "detect_mcp_servers",
    "detect_recommendations",
    "get_recommended_mcp_servers",
    "is_recommendation",
    "mcp_project_detector",
    "mcp_servers_detector",
    "recommendations_detector",
    "recommended_server",
]
