"""Form handling detector: form libraries and schema validation libraries.

Validation libraries are reported with the variant "validation" so they can
be told apart from form state libraries in the same list.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

# (display name, package, companion package or None)
VALIDATION_LIBRARIES: list[tuple[str, str, Optional[str]]] = [
    ("Zod", "zod", "zod-to-json-schema"),
    ("Yup", "yup", None),
    ("Valibot", "valibot", None),
]


def _detect_react_hook_form(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "react-hook-form" in deps:
        score.add(80, f"react-hook-form@{deps['react-hook-form']} in dependencies")
    if "@hookform/resolvers" in deps:
        score.add(10, "@hookform/resolvers found")
    if "@hookform/devtools" in deps:
        score.add(5, "@hookform/devtools found")

    return score.result("React Hook Form", version=deps.get("react-hook-form"))


def _detect_formik(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if "formik" in deps:
        score.add(80, f"formik@{deps['formik']} in dependencies")
    return score.result("Formik", version=deps.get("formik"))


def _detect_tanstack_form(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    for package in ("@tanstack/react-form", "@tanstack/vue-form"):
        if package in deps:
            score.add(80, f"{package}@{deps[package]} in dependencies")

    return score.result(
        "TanStack Form",
        version=first_version(deps, "@tanstack/react-form", "@tanstack/vue-form"),
    )


def _detect_validation(
    deps: DependencyMap, name: str, package: str, companion: Optional[str]
) -> Optional[DetectionResult]:
    score = Score()

    if package in deps:
        score.add(80, f"{package}@{deps[package]} in dependencies")
    if companion and companion in deps:
        score.add(10, f"{companion} found")

    return score.result(name, version=deps.get(package), variant="validation")


FORM_CANDIDATES = [
    _detect_react_hook_form,
    _detect_formik,
    _detect_tanstack_form,
]


def detect_form_handling(project_root: Path) -> Optional[list[DetectionResult]]:
    """Detect form libraries followed by validation libraries."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    results = [candidate(deps) for candidate in FORM_CANDIDATES]
    results += [_detect_validation(deps, *library) for library in VALIDATION_LIBRARIES]

    found = [result for result in results if result]
    return found or None


form_handling_detector = Detector(
    category=DetectorCategory.FORM_HANDLING,
    name="Form Handling Detector",
    probe=detect_form_handling,
)
