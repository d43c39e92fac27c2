"""Package manager detector: pnpm, yarn, bun, npm.

Priority order:
1. Lock files (pnpm-lock.yaml, yarn.lock, bun.lockb, package-lock.json)
2. package.json "packageManager" field (corepack)
3. node_modules/ without a lock file -> npm, low confidence
"""

import logging
import re
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import file_exists, read_package_json
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

LOCK_FILES: list[tuple[str, str, int]] = [
    ("pnpm-lock.yaml", "pnpm", 95),
    ("yarn.lock", "yarn", 95),
    ("bun.lockb", "bun", 95),
    ("package-lock.json", "npm", 95),
]

PACKAGE_MANAGER_FIELD_CONFIDENCE = 90
NODE_MODULES_CONFIDENCE = 30

_PM_FIELD_RE = re.compile(r"^(pnpm|yarn|npm|bun)@(\S+)")


def detect_package_manager(project_root: Path) -> Optional[DetectionResult]:
    """Detect the package manager from lock files and package.json."""
    for filename, manager, confidence in LOCK_FILES:
        if file_exists(project_root, filename):
            return DetectionResult(
                name=manager,
                confidence=confidence,
                evidence=(f"{filename} found",),
            )

    pkg = read_package_json(project_root)
    if pkg:
        field = pkg.get("packageManager")
        match = _PM_FIELD_RE.match(field) if isinstance(field, str) else None
        if match:
            return DetectionResult(
                name=match.group(1),
                version=match.group(2),
                confidence=PACKAGE_MANAGER_FIELD_CONFIDENCE,
                evidence=(f"packageManager field: {field}",),
            )

    if file_exists(project_root, "node_modules"):
        # No lock file at all, so npm is only a guess.
        return DetectionResult(
            name="npm",
            confidence=NODE_MODULES_CONFIDENCE,
            evidence=("node_modules exists, no lock file found",),
        )

    return None


package_manager_detector = Detector(
    category=DetectorCategory.PACKAGE_MANAGER,
    name="Package Manager Detector",
    probe=detect_package_manager,
)
