"""Evidence primitives shared by every detector.

All helpers are read-only. Missing or malformed files never raise: readers
return None and log, so a detector simply sees "no signal".
"""

import json
import logging
from pathlib import Path
from typing import Optional

import yaml

from stackscan.types import DetectionResult

logger = logging.getLogger(__name__)

PackageJson = dict
DependencyMap = dict[str, str]

# Upper bound on bytes read from any single source file.
MAX_SOURCE_BYTES = 64 * 1024


class Score:
    """Additive confidence accumulator.

    Each call to add() contributes a fixed number of points and the matching
    evidence line, so the evidence trail always explains the score.
    """

    def __init__(self) -> None:
        self.confidence = 0
        self.evidence: list[str] = []

    def add(self, points: int, reason: str) -> None:
        self.confidence += points
        self.evidence.append(reason)

    def __bool__(self) -> bool:
        return self.confidence > 0

    def result(
        self,
        name: str,
        version: Optional[str] = None,
        variant: Optional[str] = None,
    ) -> Optional[DetectionResult]:
        """Build the final result, or None when no signal fired."""
        if self.confidence == 0:
            return None
        return DetectionResult(
            name=name,
            version=version,
            variant=variant,
            confidence=min(self.confidence, 100),
            evidence=tuple(self.evidence),
        )


def read_json_file(path: Path) -> Optional[dict]:
    """Parse a JSON object from disk. Returns None if absent or invalid."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (ValueError, RecursionError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.debug("Ignoring %s: top-level JSON value is not an object", path)
        return None
    return data


def read_yaml_file(path: Path) -> Optional[dict]:
    """Parse a YAML mapping from disk. Returns None if absent or invalid."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def read_package_json(project_root: Path) -> Optional[PackageJson]:
    """Read and parse package.json from the project root."""
    return read_json_file(Path(project_root) / "package.json")


def get_dependencies(pkg: Optional[PackageJson]) -> DependencyMap:
    """Combine dependencies and devDependencies.

    devDependencies win when a package is declared in both.
    """
    if not pkg:
        return {}
    deps: DependencyMap = {}
    for section in ("dependencies", "devDependencies"):
        values = pkg.get(section)
        if isinstance(values, dict):
            deps.update({name: str(version) for name, version in values.items()})
    return deps


def get_scripts(pkg: Optional[PackageJson]) -> dict[str, str]:
    if not pkg:
        return {}
    scripts = pkg.get("scripts")
    return scripts if isinstance(scripts, dict) else {}


def has_script(pkg: Optional[PackageJson], script_name: str) -> bool:
    return script_name in get_scripts(pkg)


def file_exists(project_root: Path, relative: str) -> bool:
    return (Path(project_root) / relative).exists()


def dir_exists(project_root: Path, relative: str) -> bool:
    return (Path(project_root) / relative).is_dir()


def find_config_file(
    project_root: Path,
    base_name: str,
    extensions: list[str],
) -> Optional[str]:
    """Return the first "<base_name><ext>" present in the project root.

    Extensions are tried in order. The returned value is the file name
    relative to the root, suitable for evidence strings.
    """
    for ext in extensions:
        candidate = f"{base_name}{ext}"
        if (Path(project_root) / candidate).exists():
            return candidate
    return None


def find_matching_deps(deps: DependencyMap, prefix: str) -> list[str]:
    """Names of all dependencies that start with (or equal) the prefix."""
    return [name for name in deps if name.startswith(prefix)]


def has_dependency_pattern(deps: DependencyMap, prefix: str) -> Optional[str]:
    """Version of the first dependency matching the prefix, if any."""
    for name, version in deps.items():
        if name.startswith(prefix):
            return version
    return None


def first_version(deps: DependencyMap, *names: str) -> Optional[str]:
    """Version of the first listed package present in the dependency map."""
    for name in names:
        if deps.get(name):
            return deps[name]
    return None


def read_text_capped(path: Path, limit: int = MAX_SOURCE_BYTES) -> Optional[str]:
    """Read at most `limit` bytes of a text file."""
    if not path.is_file():
        return None
    try:
        with open(path, "rb") as fh:
            raw = fh.read(limit)
    except OSError as exc:
        logger.debug("Failed to read %s: %s", path, exc)
        return None
    return raw.decode("utf-8", errors="replace")


def pick_best(results: list[Optional[DetectionResult]]) -> Optional[DetectionResult]:
    """Pick the result with the highest confidence.

    None entries are skipped. On ties, the first result wins.
    """
    best: Optional[DetectionResult] = None
    for result in results:
        if result and (best is None or result.confidence > best.confidence):
            best = result
    return best
