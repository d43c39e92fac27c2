"""MCP server recommendations.

Recommendations ride through the registry as ordinary detector output:
one "Recommended: <server>" result per suggested server, always at full
confidence. The registry strips the prefix when it assembles the MCP slot.
"""

import logging
from pathlib import Path

from stackscan.detectors.utils import DependencyMap, Score, get_dependencies, read_package_json
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

RECOMMENDATION_PREFIX = "Recommended: "

DEFAULT_SERVERS = ["filesystem", "github", "memory"]

POSTGRES_PACKAGES = ("pg", "postgres", "@prisma/client")


def _recommend_from_deps(deps: DependencyMap) -> list[tuple[str, str]]:
    """(server, reason) pairs in recommendation order."""
    picks: list[tuple[str, str]] = []

    if "@supabase/supabase-js" in deps or "@supabase/ssr" in deps:
        picks.append(("supabase", "Supabase client in dependencies"))
    picks.append(("github", "Useful for any git-hosted project"))
    if "stripe" in deps:
        picks.append(("stripe", "stripe in dependencies"))
    if any(package in deps for package in POSTGRES_PACKAGES):
        picks.append(("postgres", "PostgreSQL driver or Prisma client in dependencies"))
    picks.append(("filesystem", "Useful for any project"))
    picks.append(("memory", "Useful for any project"))

    unique: dict[str, str] = {}
    for server, reason in picks:
        unique.setdefault(server, reason)
    return list(unique.items())


def get_recommended_mcp_servers(project_root: Path) -> list[str]:
    """Names of MCP servers worth installing for this project."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return list(DEFAULT_SERVERS)
    return [server for server, _ in _recommend_from_deps(get_dependencies(pkg))]


def detect_recommendations(project_root: Path) -> list[DetectionResult]:
    pkg = read_package_json(project_root)
    if pkg is None:
        picks = [(server, "Default recommendation (no package.json)") for server in DEFAULT_SERVERS]
    else:
        picks = _recommend_from_deps(get_dependencies(pkg))

    results = []
    for server, reason in picks:
        score = Score()
        score.add(100, reason)
        results.append(score.result(f"{RECOMMENDATION_PREFIX}{server}"))
    return results


def recommended_server(result: DetectionResult) -> str:
    """Server name carried by a recommendation result."""
    return result.name[len(RECOMMENDATION_PREFIX):]


def is_recommendation(result: DetectionResult) -> bool:
    return result.name.startswith(RECOMMENDATION_PREFIX)


recommendations_detector = Detector(
    category=DetectorCategory.MCP,
    name="MCP Recommendations",
    probe=detect_recommendations,
    priority=90,
)
