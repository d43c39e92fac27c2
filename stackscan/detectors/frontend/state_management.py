"""State management detector: Zustand, Jotai, Valtio, Pinia, Recoil, Redux, MobX."""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    first_version,
    get_dependencies,
    pick_best,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40

# Single-package stores: (display name, package, plugin package or None)
ATOMIC_STORES: list[tuple[str, str, Optional[str]]] = [
    ("Zustand", "zustand", None),
    ("Jotai", "jotai", "jotai-devtools"),
    ("Valtio", "valtio", None),
    ("Pinia", "pinia", "pinia-plugin-persistedstate"),
    ("Recoil", "recoil", None),
]


def _detect_atomic_store(
    deps: DependencyMap, name: str, package: str, plugin: Optional[str]
) -> Optional[DetectionResult]:
    score = Score()

    if package in deps:
        score.add(90, f"{package}@{deps[package]} in dependencies")
    if plugin and plugin in deps:
        score.add(10, f"{plugin} detected")

    return score.result(name, version=deps.get(package))


def _detect_redux(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    if "@reduxjs/toolkit" in deps:
        score.add(70, f"@reduxjs/toolkit@{deps['@reduxjs/toolkit']} in dependencies")
        variant = "toolkit"
    if "redux" in deps:
        score.add(50, f"redux@{deps['redux']} in dependencies")
        variant = variant or "classic"
    if "react-redux" in deps:
        score.add(20, f"react-redux@{deps['react-redux']} in dependencies")
    for middleware in ("redux-saga", "redux-thunk"):
        if middleware in deps:
            score.add(10, f"{middleware} detected")

    return score.result(
        "Redux", version=first_version(deps, "@reduxjs/toolkit", "redux"), variant=variant
    )


def _detect_mobx(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "mobx" in deps:
        score.add(70, f"mobx@{deps['mobx']} in dependencies")
    if "mobx-react" in deps or "mobx-react-lite" in deps:
        score.add(20, "mobx-react bindings detected")
    if "mobx-state-tree" in deps:
        score.add(10, "mobx-state-tree detected")

    return score.result("MobX", version=deps.get("mobx"))


def detect_state_management(project_root: Path) -> Optional[DetectionResult]:
    """Detect the primary state management library.

    Lightweight stores are listed first so they win confidence ties.
    """
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    results = [_detect_atomic_store(deps, *store) for store in ATOMIC_STORES]
    results += [_detect_redux(deps), _detect_mobx(deps)]

    best = pick_best(results)
    if best and best.confidence >= MIN_CONFIDENCE:
        return best
    return None


state_management_detector = Detector(
    category=DetectorCategory.STATE_MANAGEMENT,
    name="State Management Detector",
    probe=detect_state_management,
)
