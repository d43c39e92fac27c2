"""Testing framework detector.

Unit: Vitest, Jest. E2E: Playwright, Cypress.

Every candidate that fired is returned, tagged with its "unit" or "e2e"
slot. Choosing one result per slot is the registry's job.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    PackageJson,
    Score,
    dir_exists,
    find_config_file,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

UNIT = "unit"
E2E = "e2e"


def _detect_vitest(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "vitest" in deps:
        score.add(60, f"vitest@{deps['vitest']} in dependencies")

    config = find_config_file(
        project_root, "vitest", [".config.ts", ".config.js", ".config.mts", ".config.mjs"]
    )
    if config:
        score.add(30, f"{config} found")
    elif "vitest" in deps:
        # Vitest reads the `test` block of vite.config when it has no config of its own.
        vite_config = find_config_file(project_root, "vite.config", [".ts", ".js", ".mjs"])
        if vite_config:
            score.add(10, "Vitest likely configured in vite.config")

    return score.result("Vitest", version=deps.get("vitest"))


def _detect_jest(
    project_root: Path, deps: DependencyMap, pkg: PackageJson
) -> Optional[DetectionResult]:
    score = Score()

    if "jest" in deps:
        score.add(50, f"jest@{deps['jest']} in dependencies")

    config = find_config_file(
        project_root, "jest", [".config.js", ".config.ts", ".config.mjs", ".config.cjs"]
    )
    if config:
        score.add(30, f"{config} found")

    if pkg.get("jest"):
        score.add(20, "jest config in package.json")

    if "@types/jest" in deps:
        score.add(10, "@types/jest in dependencies")
    if "ts-jest" in deps:
        score.add(10, "ts-jest in dependencies")

    return score.result("Jest", version=deps.get("jest"))


def _detect_playwright(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@playwright/test" in deps:
        score.add(60, f"@playwright/test@{deps['@playwright/test']} in dependencies")
    elif "playwright" in deps:
        score.add(50, f"playwright@{deps['playwright']} in dependencies")

    config = find_config_file(
        project_root, "playwright", [".config.ts", ".config.js", ".config.mjs"]
    )
    if config:
        score.add(30, f"{config} found")

    return score.result(
        "Playwright", version=first_version(deps, "@playwright/test", "playwright")
    )


def _detect_cypress(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "cypress" in deps:
        score.add(60, f"cypress@{deps['cypress']} in dependencies")

    config = find_config_file(
        project_root, "cypress", [".config.ts", ".config.js", ".config.mjs", ".config.cjs"]
    )
    if config:
        score.add(30, f"{config} found")

    if dir_exists(project_root, "cypress"):
        score.add(10, "cypress/ folder found")

    return score.result("Cypress", version=deps.get("cypress"))


def detect_testing(project_root: Path) -> Optional[list[DetectionResult]]:
    """Detect unit and e2e test frameworks, tagged by slot."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    candidates = [
        (UNIT, _detect_vitest(project_root, deps)),
        (UNIT, _detect_jest(project_root, deps, pkg)),
        (E2E, _detect_playwright(project_root, deps)),
        (E2E, _detect_cypress(project_root, deps)),
    ]

    results = [result.with_variant(slot) for slot, result in candidates if result]
    return results or None


testing_detector = Detector(
    category=DetectorCategory.TESTING,
    name="Testing Framework Detector",
    probe=detect_testing,
)
