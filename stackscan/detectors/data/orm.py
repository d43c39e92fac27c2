"""ORM detector: Prisma, Drizzle."""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    file_exists,
    find_config_file,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40

# Ordered: the first adapter package present decides the Drizzle variant.
DRIZZLE_ADAPTERS: list[tuple[tuple[str, ...], str]] = [
    (("@planetscale/database",), "planetscale"),
    (("@neondatabase/serverless",), "neon"),
    (("@libsql/client", "better-sqlite3"), "sqlite"),
    (("pg", "postgres"), "postgres"),
    (("mysql2",), "mysql"),
]


def _detect_prisma(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@prisma/client" in deps:
        score.add(50, f"@prisma/client@{deps['@prisma/client']} in dependencies")
    if "prisma" in deps:
        score.add(30, f"prisma@{deps['prisma']} in devDependencies")
    if file_exists(project_root, "prisma/schema.prisma"):
        score.add(30, "prisma/schema.prisma found")
    if file_exists(project_root, "schema.prisma"):
        score.add(20, "schema.prisma found in root")

    return score.result("Prisma", version=first_version(deps, "@prisma/client", "prisma"))


def _drizzle_variant(deps: DependencyMap) -> Optional[str]:
    for packages, variant in DRIZZLE_ADAPTERS:
        if any(name in deps for name in packages):
            return variant
    return None


def _detect_drizzle(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "drizzle-orm" in deps:
        score.add(60, f"drizzle-orm@{deps['drizzle-orm']} in dependencies")
    if "drizzle-kit" in deps:
        score.add(20, f"drizzle-kit@{deps['drizzle-kit']} in dependencies")

    config = find_config_file(project_root, "drizzle", [".config.ts", ".config.js", ".config.mjs"])
    if config:
        score.add(20, f"{config} found")

    return score.result("Drizzle", version=deps.get("drizzle-orm"), variant=_drizzle_variant(deps))


def detect_orm(project_root: Path) -> Optional[DetectionResult]:
    """Detect the primary ORM.

    When both ORMs fire, the higher confidence wins (Prisma on a tie),
    regardless of the admission threshold.
    """
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    prisma = _detect_prisma(project_root, deps)
    drizzle = _detect_drizzle(project_root, deps)

    if prisma and drizzle:
        return prisma if prisma.confidence >= drizzle.confidence else drizzle

    for result in (prisma, drizzle):
        if result and result.confidence >= MIN_CONFIDENCE:
            return result

    return None


orm_detector = Detector(
    category=DetectorCategory.ORM,
    name="ORM Detector",
    probe=detect_orm,
)
