"""API pattern detector: tRPC, GraphQL, TanStack Query, REST clients.

A project can use several patterns at once, so every candidate that fired
is returned and the registry admits those above its threshold.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    file_exists,
    find_matching_deps,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

GRAPHQL_SCHEMA_FILES = ["schema.graphql", "schema.gql"]

# (package, points, variant). The last matching package decides the variant.
TANSTACK_QUERY_PACKAGES: list[tuple[str, int, str, str]] = [
    ("@tanstack/react-query", 80, "react", ""),
    ("@tanstack/vue-query", 80, "vue", ""),
    ("@tanstack/svelte-query", 80, "svelte", ""),
    ("react-query", 70, "react-legacy", " (legacy)"),
]

REST_CLIENTS: list[tuple[str, int]] = [
    ("axios", 60),
    ("ky", 60),
    ("got", 50),
    ("node-fetch", 40),
    ("swr", 50),
]


def _detect_trpc(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    packages = find_matching_deps(deps, "@trpc/")
    if not packages:
        return None

    score = Score()
    score.add(70, f"tRPC packages found: {', '.join(packages)}")

    if "@trpc/server" in deps and "@trpc/client" in deps:
        score.add(20, "tRPC server and client packages both present")
    if "@trpc/react-query" in deps or "@trpc/next" in deps:
        score.add(10, "tRPC React/Next integration detected")

    return score.result("tRPC", version=first_version(deps, "@trpc/server", "@trpc/client"))


def _detect_graphql(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    version = deps.get("graphql")

    if "graphql" in deps:
        score.add(40, f"graphql@{deps['graphql']} in dependencies")

    apollo = find_matching_deps(deps, "@apollo/")
    if apollo:
        score.add(40, f"Apollo packages found: {', '.join(apollo)}")
        return score.result("GraphQL", version=version, variant="apollo")

    if "urql" in deps or "@urql/core" in deps:
        score.add(40, "urql client detected")
        return score.result("GraphQL", version=version, variant="urql")

    if "react-relay" in deps or "relay-runtime" in deps:
        score.add(40, "Relay detected")
        return score.result("GraphQL", version=version, variant="relay")

    for schema_file in GRAPHQL_SCHEMA_FILES:
        if file_exists(project_root, schema_file):
            score.add(20, f"{schema_file} found")

    return score.result("GraphQL", version=version)


def _detect_tanstack_query(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    for package, points, package_variant, suffix in TANSTACK_QUERY_PACKAGES:
        if package in deps:
            score.add(points, f"{package}@{deps[package]} in dependencies{suffix}")
            variant = package_variant

    if "@tanstack/react-query-devtools" in deps or "@tanstack/vue-query-devtools" in deps:
        score.add(10, "TanStack Query devtools detected")

    version = first_version(deps, *(package for package, *_ in TANSTACK_QUERY_PACKAGES))
    return score.result("TanStack Query", version=version, variant=variant)


def _detect_rest(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    for client, points in REST_CLIENTS:
        if client in deps:
            score.add(points, f"{client}@{deps[client]} in dependencies")
            variant = client

    version = first_version(deps, *(client for client, _ in REST_CLIENTS))
    return score.result("REST", version=version, variant=variant)


API_CANDIDATES = [
    _detect_trpc,
    _detect_graphql,
    _detect_tanstack_query,
    _detect_rest,
]


def detect_api_patterns(project_root: Path) -> Optional[list[DetectionResult]]:
    """Detect every API pattern in use."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    results = [result for candidate in API_CANDIDATES if (result := candidate(project_root, deps))]
    return results or None


api_detector = Detector(
    category=DetectorCategory.API,
    name="API Pattern Detector",
    probe=detect_api_patterns,
)
