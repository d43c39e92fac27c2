"""Monorepo tool detector: Turborepo, Nx, Lerna, Rush, and workspace configs."""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    PackageJson,
    Score,
    file_exists,
    get_dependencies,
    pick_best,
    read_package_json,
    read_yaml_file,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40


def _detect_turborepo(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if file_exists(project_root, "turbo.json"):
        score.add(60, "turbo.json found")
    if "turbo" in deps:
        score.add(40, f"turbo@{deps['turbo']} in devDependencies")

    return score.result("Turborepo", version=deps.get("turbo"))


def _detect_nx(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if file_exists(project_root, "nx.json"):
        score.add(60, "nx.json found")
    if "nx" in deps:
        score.add(40, f"nx@{deps['nx']} in devDependencies")
    if "@nrwl/workspace" in deps or "@nx/workspace" in deps:
        score.add(20, "Nx workspace package found")

    return score.result("Nx", version=deps.get("nx"))


def _detect_lerna(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if file_exists(project_root, "lerna.json"):
        score.add(70, "lerna.json found")
    if "lerna" in deps:
        score.add(30, f"lerna@{deps['lerna']} in devDependencies")

    return score.result("Lerna", version=deps.get("lerna"))


def _detect_rush(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if file_exists(project_root, "rush.json"):
        score.add(80, "rush.json found")
    return score.result("Rush")


def _detect_pnpm_workspaces(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    path = Path(project_root) / "pnpm-workspace.yaml"
    if not path.exists():
        return None

    reason = "pnpm-workspace.yaml found"
    config = read_yaml_file(path)
    packages = config.get("packages") if config else None
    if isinstance(packages, list) and packages:
        reason += f" (packages: {', '.join(str(glob) for glob in packages)})"

    score = Score()
    score.add(80, reason)
    return score.result("pnpm Workspaces")


def _detect_package_workspaces(project_root: Path, pkg: PackageJson) -> Optional[DetectionResult]:
    """npm or Yarn workspaces declared in package.json, told apart by lock file."""
    if not pkg.get("workspaces"):
        return None

    score = Score()
    score.add(70, "workspaces field in package.json")

    variant = None
    if file_exists(project_root, "yarn.lock"):
        score.add(0, "yarn.lock found")
        variant = "yarn"
    elif file_exists(project_root, "package-lock.json"):
        score.add(0, "package-lock.json found")
        variant = "npm"

    name = "Yarn Workspaces" if variant == "yarn" else "npm Workspaces"
    return score.result(name, variant=variant)


TOOL_CANDIDATES = [
    _detect_turborepo,
    _detect_nx,
    _detect_lerna,
    _detect_rush,
    _detect_pnpm_workspaces,
]


def detect_monorepo(project_root: Path) -> Optional[DetectionResult]:
    """Detect the monorepo tool. Dedicated tools win ties over workspace configs."""
    pkg = read_package_json(project_root)
    deps = get_dependencies(pkg)

    results = [candidate(project_root, deps) for candidate in TOOL_CANDIDATES]
    if pkg is not None:
        results.append(_detect_package_workspaces(project_root, pkg))

    best = pick_best(results)
    if best and best.confidence >= MIN_CONFIDENCE:
        return best
    return None


monorepo_detector = Detector(
    category=DetectorCategory.MONOREPO,
    name="Monorepo Tool Detector",
    probe=detect_monorepo,
)
