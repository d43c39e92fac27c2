"""Database detector: Supabase, Firebase, MongoDB, PostgreSQL.

Backend-as-a-service platforms outrank plain drivers because they
encompass more of the stack. The first candidate reaching the admission
threshold wins.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    dir_exists,
    file_exists,
    find_matching_deps,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40


def _detect_supabase(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@supabase/supabase-js" in deps:
        score.add(70, f"@supabase/supabase-js@{deps['@supabase/supabase-js']} in dependencies")

    packages = find_matching_deps(deps, "@supabase/")
    if len(packages) > 1:
        score.add(10, f"Multiple @supabase packages found: {', '.join(packages)}")

    if dir_exists(project_root, "supabase"):
        score.add(20, "supabase/ directory found")

    if file_exists(project_root, "supabase/config.toml"):
        score.add(10, "supabase/config.toml found")

    return score.result("Supabase", version=deps.get("@supabase/supabase-js"))


def _detect_firebase(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "firebase" in deps:
        score.add(70, f"firebase@{deps['firebase']} in dependencies")

    packages = find_matching_deps(deps, "@firebase/")
    if packages:
        shown = ", ".join(packages[:3]) + ("..." if len(packages) > 3 else "")
        score.add(20, f"Firebase packages found: {shown}")

    if "firebase-admin" in deps:
        score.add(20, f"firebase-admin@{deps['firebase-admin']} in dependencies")

    if file_exists(project_root, "firebase.json"):
        score.add(10, "firebase.json found")

    return score.result("Firebase", version=first_version(deps, "firebase", "firebase-admin"))


def _detect_mongodb(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "mongoose" in deps:
        score.add(80, f"mongoose@{deps['mongoose']} in dependencies")
        return score.result("MongoDB", version=deps["mongoose"], variant="mongoose")

    if "mongodb" in deps:
        score.add(80, f"mongodb@{deps['mongodb']} in dependencies")
        return score.result("MongoDB", version=deps["mongodb"], variant="native-driver")

    return None


def _detect_postgresql(project_root: Path, deps: DependencyMap) -> Optional[DetectionResult]:
    """Direct Postgres drivers only; Supabase and ORMs are reported elsewhere."""
    score = Score()

    if "pg" in deps:
        score.add(70, f"pg@{deps['pg']} in dependencies")
    if "postgres" in deps:
        score.add(70, f"postgres@{deps['postgres']} in dependencies")

    variant = "node-postgres" if "pg" in deps else "postgres.js"
    return score.result("PostgreSQL", version=first_version(deps, "pg", "postgres"), variant=variant)


DATABASE_PRIORITIES = [
    (10, _detect_supabase),
    (20, _detect_firebase),
    (30, _detect_mongodb),
    (40, _detect_postgresql),
]


def detect_database(project_root: Path) -> Optional[DetectionResult]:
    """Detect the primary database."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)

    for _, probe in sorted(DATABASE_PRIORITIES, key=lambda entry: entry[0]):
        result = probe(project_root, deps)
        if result and result.confidence >= MIN_CONFIDENCE:
            return result

    return None


database_detector = Detector(
    category=DetectorCategory.DATABASE,
    name="Database Detector",
    probe=detect_database,
)
