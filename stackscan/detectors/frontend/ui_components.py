"""UI component library detector.

Projects often combine libraries, so every match is reported. Radix UI is
only reported on its own when shadcn/ui (which is built on Radix) is not.
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
    read_json_file,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40

SHADCN_CONFIG_KEYS = ("style", "rsc", "tsx", "components")


def _detect_shadcn(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if file_exists(project_root, "components.json"):
        score.add(60, "components.json found")
        config = read_json_file(Path(project_root) / "components.json")
        if config and any(config.get(key) for key in SHADCN_CONFIG_KEYS):
            score.add(20, "Valid shadcn/ui configuration detected")

    radix = find_matching_deps(deps, "@radix-ui/")
    if len(radix) >= 3:
        score.add(20, f"Multiple @radix-ui packages found ({len(radix)})")

    if "class-variance-authority" in deps:
        score.add(10, "class-variance-authority detected (common with shadcn)")
    if "clsx" in deps or "tailwind-merge" in deps:
        score.add(5, "clsx/tailwind-merge utilities detected")

    return score.result("shadcn/ui")


def _detect_radix(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    packages = find_matching_deps(deps, "@radix-ui/")
    if packages:
        shown = ", ".join(packages[:5]) + ("..." if len(packages) > 5 else "")
        score.add(50 + min(len(packages) * 5, 30), f"@radix-ui packages found: {shown}")
    if "@radix-ui/themes" in deps:
        score.add(20, "@radix-ui/themes found")

    return score.result("Radix UI")


def _detect_mui(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@mui/material" in deps:
        score.add(70, f"@mui/material@{deps['@mui/material']} in dependencies")
    if "@mui/icons-material" in deps:
        score.add(10, "@mui/icons-material found")

    mui_x = find_matching_deps(deps, "@mui/x-")
    if mui_x:
        score.add(10, f"MUI X packages found: {', '.join(mui_x)}")
    if "@emotion/react" in deps or "@emotion/styled" in deps:
        score.add(10, "Emotion styling detected (MUI default)")

    return score.result("MUI", version=deps.get("@mui/material"))


def _detect_chakra(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@chakra-ui/react" in deps:
        score.add(80, f"@chakra-ui/react@{deps['@chakra-ui/react']} in dependencies")

    packages = find_matching_deps(deps, "@chakra-ui/")
    if len(packages) > 1:
        score.add(10, f"Multiple Chakra packages found ({len(packages)})")

    return score.result("Chakra UI", version=deps.get("@chakra-ui/react"))


def _detect_ant_design(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "antd" in deps:
        score.add(80, f"antd@{deps['antd']} in dependencies")

    packages = find_matching_deps(deps, "@ant-design/")
    if packages:
        score.add(10, f"Ant Design packages found: {', '.join(packages)}")

    return score.result("Ant Design", version=deps.get("antd"))


def _detect_headless_ui(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    for package in ("@headlessui/react", "@headlessui/vue"):
        if package in deps:
            score.add(80, f"{package}@{deps[package]} in dependencies")

    return score.result(
        "Headless UI", version=first_version(deps, "@headlessui/react", "@headlessui/vue")
    )


def _detect_daisyui(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if "daisyui" in deps:
        score.add(80, f"daisyui@{deps['daisyui']} in dependencies")
    return score.result("daisyUI", version=deps.get("daisyui"))


LIBRARY_CANDIDATES = [
    _detect_mui,
    _detect_chakra,
    _detect_ant_design,
    _detect_headless_ui,
    _detect_daisyui,
]


def detect_ui_components(project_root: Path) -> Optional[list[DetectionResult]]:
    """Detect every UI component library in use."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    results: list[DetectionResult] = []

    shadcn = _detect_shadcn(project_root, deps)
    if shadcn and shadcn.confidence >= MIN_CONFIDENCE:
        results.append(shadcn)
    else:
        radix = _detect_radix(project_root, deps)
        if radix:
            results.append(radix)

    results.extend(result for candidate in LIBRARY_CANDIDATES if (result := candidate(deps)))
    return results or None


ui_components_detector = Detector(
    category=DetectorCategory.UI_COMPONENTS,
    name="UI Components Detector",
    probe=detect_ui_components,
)
