"""Deployment target detector.

Deployment configuration is mostly file based, so this detector also runs
for projects without a package.json.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    file_exists,
    find_matching_deps,
    get_dependencies,
    read_package_json,
    read_text_capped,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

COMPOSE_FILES = [
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
]

SAM_MARKERS = ("AWS::Serverless", "AWSTemplateFormatVersion")


def _detect_vercel(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if file_exists(project_root, "vercel.json"):
        score.add(50, "vercel.json found")
    if file_exists(project_root, ".vercel"):
        score.add(30, ".vercel/ directory found")

    packages = find_matching_deps(deps, "@vercel/")
    if packages:
        score.add(30, f"Vercel packages found: {', '.join(packages)}")
    if "vercel" in deps:
        score.add(20, "vercel CLI in devDependencies")

    return score.result("Vercel")


def _detect_netlify(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if file_exists(project_root, "netlify.toml"):
        score.add(60, "netlify.toml found")
    if file_exists(project_root, ".netlify"):
        score.add(30, ".netlify/ directory found")
    if "netlify-cli" in deps:
        score.add(20, "netlify-cli in devDependencies")

    packages = find_matching_deps(deps, "@netlify/")
    if packages:
        score.add(20, f"Netlify packages found: {', '.join(packages)}")

    return score.result("Netlify")


def _detect_railway(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    for config in ("railway.json", "railway.toml"):
        if file_exists(project_root, config):
            score.add(70, f"{config} found")
    return score.result("Railway")


def _detect_docker(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    if file_exists(project_root, "Dockerfile"):
        score.add(50, "Dockerfile found")

    compose = next((name for name in COMPOSE_FILES if file_exists(project_root, name)), None)
    if compose:
        score.add(40, f"{compose} found")
        variant = "compose"

    if file_exists(project_root, ".dockerignore"):
        score.add(10, ".dockerignore found")

    return score.result("Docker", variant=variant)


def _detect_fly(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if file_exists(project_root, "fly.toml"):
        score.add(80, "fly.toml found")
    return score.result("Fly.io")


def _detect_render(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if file_exists(project_root, "render.yaml"):
        score.add(80, "render.yaml found")
    return score.result("Render")


def _is_sam_template(project_root: Path) -> bool:
    content = read_text_capped(Path(project_root) / "template.yaml")
    return bool(content) and any(marker in content for marker in SAM_MARKERS)


def _detect_aws(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    """AWS tooling. The last matching tool decides the variant."""
    score = Score()
    variant = None

    if _is_sam_template(project_root):
        score.add(70, "AWS SAM template.yaml found")
        variant = "sam"

    if file_exists(project_root, "serverless.yml") or file_exists(project_root, "serverless.yaml"):
        score.add(60, "serverless.yml found")
        variant = "serverless-framework"

    if "aws-cdk-lib" in deps or "@aws-cdk/core" in deps:
        score.add(60, "AWS CDK detected")
        variant = "cdk"

    if "sst" in deps:
        score.add(70, f"sst@{deps['sst']} in dependencies")
        variant = "sst"

    return score.result("AWS", variant=variant)


DEPLOYMENT_CANDIDATES = [
    _detect_vercel,
    _detect_netlify,
    _detect_railway,
    _detect_docker,
    _detect_fly,
    _detect_render,
    _detect_aws,
]


def detect_deployment(project_root: Path) -> Optional[list[DetectionResult]]:
    """Detect every deployment target configured in the project."""
    deps = get_dependencies(read_package_json(project_root))

    results = [
        result for candidate in DEPLOYMENT_CANDIDATES if (result := candidate(project_root, deps))
    ]
    return results or None


deployment_detector = Detector(
    category=DetectorCategory.DEPLOYMENT,
    name="Deployment Target Detector",
    probe=detect_deployment,
)
