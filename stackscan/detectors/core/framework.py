"""Framework detector: Next.js, Remix, Astro, Vue/Nuxt, Svelte/SvelteKit, React.

Meta-frameworks depend on a base framework (Next.js pulls in React, Nuxt pulls
in Vue), so candidates carry an explicit priority and the base frameworks are
evaluated last. The first candidate reaching the admission threshold wins.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    dir_exists,
    find_config_file,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40


def _detect_nextjs_variant(project_root: Path) -> Optional[str]:
    if dir_exists(project_root, "app") or dir_exists(project_root, "src/app"):
        return "app-router"
    if dir_exists(project_root, "pages") or dir_exists(project_root, "src/pages"):
        return "pages-router"
    return None


def _detect_nextjs(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "next" in deps:
        score.add(80, f"next@{deps['next']} in dependencies")

    config = find_config_file(project_root, "next.config", [".js", ".mjs", ".ts"])
    if config:
        score.add(30, f"{config} found")

    if not score:
        return None

    variant = _detect_nextjs_variant(project_root)
    if variant:
        score.add(10, f"{variant} detected")

    return score.result("Next.js", version=deps.get("next"), variant=variant)


def _detect_remix(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    version = first_version(deps, "@remix-run/react", "@remix-run/node")
    if version is None:
        return None

    score = Score()
    score.add(70, f"@remix-run packages@{version} in dependencies")

    config = find_config_file(project_root, "remix.config", [".js", ".ts"])
    if config:
        score.add(20, f"{config} found")

    vite_config = find_config_file(project_root, "vite.config", [".js", ".ts", ".mjs"])
    if vite_config and "@remix-run/dev" in deps:
        score.add(10, "Vite-based Remix setup detected")

    return score.result("Remix", version=version)


def _detect_astro(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    if "astro" not in deps:
        return None

    score = Score()
    score.add(60, f"astro@{deps['astro']} in dependencies")

    config = find_config_file(project_root, "astro.config", [".mjs", ".js", ".ts"])
    if config:
        score.add(30, f"{config} found")

    return score.result("Astro", version=deps["astro"])


def _detect_vue(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    """Nuxt takes precedence over plain Vue since it bundles Vue."""
    score = Score()

    if "nuxt" in deps:
        score.add(70, f"nuxt@{deps['nuxt']} in dependencies")
        config = find_config_file(project_root, "nuxt.config", [".js", ".ts"])
        if config:
            score.add(30, f"{config} found")
        return score.result("Nuxt", version=deps["nuxt"])

    if "vue" not in deps:
        return None

    score.add(50, f"vue@{deps['vue']} in dependencies")

    vue_config = find_config_file(project_root, "vue.config", [".js", ".ts"])
    if vue_config:
        score.add(20, f"{vue_config} found")

    vite_config = find_config_file(project_root, "vite.config", [".js", ".ts", ".mjs"])
    if vite_config and "@vitejs/plugin-vue" in deps:
        score.add(20, "Vite + Vue plugin detected")

    return score.result("Vue", version=deps["vue"])


def _detect_svelte(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    """SvelteKit takes precedence over plain Svelte."""
    score = Score()

    if "@sveltejs/kit" in deps:
        score.add(70, f"@sveltejs/kit@{deps['@sveltejs/kit']} in dependencies")
        name, version = "SvelteKit", deps["@sveltejs/kit"]
    elif "svelte" in deps:
        score.add(50, f"svelte@{deps['svelte']} in dependencies")
        name, version = "Svelte", deps["svelte"]
    else:
        return None

    config = find_config_file(project_root, "svelte.config", [".js", ".ts"])
    if config:
        score.add(30, f"{config} found")

    return score.result(name, version=version)


def _detect_react(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    if "react" not in deps:
        return None

    score = Score()
    score.add(40, f"react@{deps['react']} in dependencies")

    variant = None
    if "react-scripts" in deps:
        score.add(40, "Create React App detected (react-scripts)")
        variant = "create-react-app"
    elif "@vitejs/plugin-react" in deps or "@vitejs/plugin-react-swc" in deps:
        score.add(30, "Vite + React setup detected")
        variant = "vite"

    return score.result("React", version=deps["react"], variant=variant)


FrameworkProbe = Callable[[Path, DependencyMap], Optional[DetectionResult]]

# Lower runs first. React sits last because nearly every meta-framework
# declares it as a dependency.
FRAMEWORK_PRIORITIES: list[tuple[int, FrameworkProbe]] = [
    (10, _detect_nextjs),
    (20, _detect_remix),
    (30, _detect_astro),
    (40, _detect_vue),
    (50, _detect_svelte),
    (90, _detect_react),
]


def detect_framework(project_root: Path) -> Optional[DetectionResult]:
    """Detect the primary web framework from package.json and config files."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)

    for _, probe in sorted(FRAMEWORK_PRIORITIES, key=lambda entry: entry[0]):
        result = probe(project_root, deps)
        if result and result.confidence >= MIN_CONFIDENCE:
            return result

    return None


framework_detector = Detector(
    category=DetectorCategory.FRAMEWORK,
    name="Framework Detector",
    probe=detect_framework,
)
