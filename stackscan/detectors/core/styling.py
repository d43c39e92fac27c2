"""Styling detector: Tailwind CSS, styled-components, Emotion, Sass, CSS Modules.

Returns the single highest-confidence styling approach. On equal confidence
the candidate listed first in STYLING_CANDIDATES wins.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    find_config_file,
    first_version,
    get_dependencies,
    pick_best,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

# Directories searched for *.module.css / *.module.scss files
CSS_MODULE_DIRS = ["src", "app", "pages", "components", "styles"]

SKIP_DIRS = {"node_modules", ".git", "dist", "build", ".next", "coverage"}


def _has_css_modules(project_root: Path) -> bool:
    for dir_name in CSS_MODULE_DIRS:
        base_dir = Path(project_root) / dir_name
        if not base_dir.is_dir():
            continue
        try:
            for path in base_dir.rglob("*.module.*"):
                if any(part in SKIP_DIRS for part in path.relative_to(base_dir).parts):
                    continue
                if path.name.endswith((".module.css", ".module.scss")):
                    return True
        except OSError as exc:
            logger.debug("Failed to walk %s: %s", base_dir, exc)
    return False


def _tailwind_variant(version: str) -> Optional[str]:
    """Tailwind v4 moved configuration into CSS."""
    if version.lstrip("^~").startswith("4."):
        return "v4"
    return None


def _detect_tailwind(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "tailwindcss" in deps:
        score.add(50, f"tailwindcss@{deps['tailwindcss']} in dependencies")

    config = find_config_file(
        project_root, "tailwind", [".config.js", ".config.ts", ".config.mjs", ".config.cjs"]
    )
    if config:
        score.add(40, f"{config} found")

    postcss = find_config_file(project_root, "postcss.config", [".js", ".mjs", ".cjs"])
    if postcss and "tailwindcss" in deps:
        score.add(10, f"{postcss} found")

    version = deps.get("tailwindcss")
    variant = _tailwind_variant(version) if version else None
    return score.result("Tailwind CSS", version=version, variant=variant)


def _detect_styled_components(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "styled-components" in deps:
        score.add(80, f"styled-components@{deps['styled-components']} in dependencies")

    if "babel-plugin-styled-components" in deps:
        score.add(10, "babel-plugin-styled-components in dependencies")

    return score.result("styled-components", version=deps.get("styled-components"))


def _detect_emotion(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    version = first_version(deps, "@emotion/react", "@emotion/styled")
    if version is None:
        return None

    score = Score()
    score.add(80, f"@emotion packages@{version} in dependencies")
    return score.result("Emotion", version=version)


def _detect_sass(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "sass" in deps:
        score.add(70, f"sass@{deps['sass']} in dependencies")
    elif "node-sass" in deps:
        score.add(70, f"node-sass@{deps['node-sass']} in dependencies")

    return score.result("Sass/SCSS", version=first_version(deps, "sass", "node-sass"))


def _detect_css_modules(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if _has_css_modules(project_root):
        score.add(80, "*.module.css or *.module.scss files found")
    return score.result("CSS Modules")


STYLING_CANDIDATES = [
    _detect_tailwind,
    _detect_styled_components,
    _detect_emotion,
    _detect_sass,
    _detect_css_modules,
]


def detect_styling(project_root: Path) -> Optional[DetectionResult]:
    """Detect the primary styling approach."""
    pkg = read_package_json(project_root)
    if pkg is None:
        # CSS Modules need no dependency, so they are still worth checking.
        return _detect_css_modules(project_root, {})

    deps = get_dependencies(pkg)
    return pick_best([candidate(project_root, deps) for candidate in STYLING_CANDIDATES])


styling_detector = Detector(
    category=DetectorCategory.STYLING,
    name="Styling Detector",
    probe=detect_styling,
)
