"""Detector registry: holds detectors per category and folds their output
into a DetectedStack.

Resolution policy per category:
  single-winner  -- first detector (by priority) yielding a single result wins;
                    later detectors are never invoked
  multi-winner   -- every detector runs; results at or above the admission
                    threshold are kept
  testing        -- results are split into unit / e2e slots
  mcp            -- results are split into configured servers, project
                    classification and recommendations

A detector that raises is logged and recorded as an error string; the rest
of its category and every other category still run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from stackscan.detectors import ALL_DETECTORS
from stackscan.detectors.mcp import is_recommendation, recommended_server
from stackscan.types import (
    ALL_CATEGORIES,
    STACK_SLOTS,
    DetectedStack,
    DetectionResult,
    Detector,
    DetectorCategory,
    MCPStack,
    ProbeOutput,
    TestingStack,
)

logger = logging.getLogger(__name__)

ADMISSION_THRESHOLD = 40

# Named preference for the unit slot; overrides confidence.
UNIT_TEST_PREFERENCE = ("Vitest", "Jest")

UNIT_TEST_NAMES = {"Vitest", "Jest"}

MULTI_CATEGORIES = frozenset({
    DetectorCategory.API,
    DetectorCategory.UI_COMPONENTS,
    DetectorCategory.FORM_HANDLING,
    DetectorCategory.ANALYTICS,
    DetectorCategory.DEPLOYMENT,
})

MCP_PROJECT_NAMES = {"MCP Server Project", "MCP Client"}


@dataclass
class RegistryRun:
    """Outcome of running every registered detector once."""

    stack: DetectedStack = field(default_factory=DetectedStack)
    errors: list[str] = field(default_factory=list)


class DetectorRegistry:
    """Detectors grouped by category.

    Every category starts with an empty list, so a category with no
    detectors simply resolves to None.
    """

    def __init__(self) -> None:
        self._detectors: dict[DetectorCategory, list[Detector]] = {
            category: [] for category in ALL_CATEGORIES
        }

    def register(self, detector: Detector) -> None:
        self._detectors[DetectorCategory(detector.category)].append(detector)
        logger.debug("Registered %s for %s", detector.name, detector.category)

    def register_all(self, detectors: Iterable[Detector]) -> None:
        for detector in detectors:
            self.register(detector)

    def get_detectors(self, category: DetectorCategory) -> list[Detector]:
        """Detectors for a category, lowest priority value first.

        sorted() is stable, so equal priorities keep registration order.
        """
        return sorted(self._detectors[DetectorCategory(category)], key=lambda d: d.priority)

    def get_all_detectors(self) -> list[Detector]:
        return [d for category in ALL_CATEGORIES for d in self.get_detectors(category)]

    def has_detectors(self, category: DetectorCategory) -> bool:
        return bool(self._detectors[DetectorCategory(category)])

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def run_all_detectors(self, project_root: Path) -> RegistryRun:
        """Run every category in order and assemble the detected stack."""
        run = RegistryRun()

        for category in ALL_CATEGORIES:
            value = self._resolve(category, Path(project_root), run.errors)
            setattr(run.stack, STACK_SLOTS[category], value)
            logger.debug("%s -> %s", category, _describe(value))

        return run

    def _resolve(self, category: DetectorCategory, project_root: Path, errors: list[str]):
        if category == DetectorCategory.TESTING:
            return self._run_testing(project_root, errors)
        if category == DetectorCategory.MCP:
            return self._run_mcp(project_root, errors)
        if category in MULTI_CATEGORIES:
            return self._run_multi(category, project_root, errors)
        return self._run_single(category, project_root, errors)

    def _probe(self, detector: Detector, project_root: Path, errors: list[str]) -> ProbeOutput:
        try:
            return detector.detect(project_root)
        except Exception as exc:
            logger.exception("Detector %s failed on %s", detector.name, project_root)
            errors.append(
                f"{detector.category}: {detector.name} failed: {type(exc).__name__}: {exc}"
            )
            return None

    def _collect(
        self, category: DetectorCategory, project_root: Path, errors: list[str]
    ) -> list[DetectionResult]:
        """Flattened output of every detector in the category."""
        results: list[DetectionResult] = []
        for detector in self.get_detectors(category):
            output = self._probe(detector, project_root, errors)
            if isinstance(output, list):
                results.extend(r for r in output if r is not None)
            elif output is not None:
                results.append(output)
        return results

    def _run_single(
        self, category: DetectorCategory, project_root: Path, errors: list[str]
    ) -> Optional[DetectionResult]:
        for detector in self.get_detectors(category):
            output = self._probe(detector, project_root, errors)
            if isinstance(output, DetectionResult):
                return output
        return None

    def _run_multi(
        self, category: DetectorCategory, project_root: Path, errors: list[str]
    ) -> Optional[list[DetectionResult]]:
        admitted = [
            r for r in self._collect(category, project_root, errors)
            if r.confidence >= ADMISSION_THRESHOLD
        ]
        return admitted or None

    def _run_testing(self, project_root: Path, errors: list[str]) -> Optional[TestingStack]:
        unit: list[DetectionResult] = []
        e2e: list[DetectionResult] = []

        for result in self._collect(DetectorCategory.TESTING, project_root, errors):
            if result.confidence < ADMISSION_THRESHOLD:
                continue
            if _testing_slot(result) == "unit":
                unit.append(result)
            else:
                e2e.append(result)

        stack = TestingStack(unit=_pick_unit(unit), e2e=_pick_highest(e2e))
        if stack.unit is None and stack.e2e is None:
            return None
        return stack

    def _run_mcp(self, project_root: Path, errors: list[str]) -> Optional[MCPStack]:
        detected: list[DetectionResult] = []
        project_info: Optional[DetectionResult] = None
        recommended: list[str] = []

        for result in self._collect(DetectorCategory.MCP, project_root, errors):
            if is_recommendation(result):
                server = recommended_server(result)
                if server not in recommended:
                    recommended.append(server)
            elif result.name in MCP_PROJECT_NAMES:
                if project_info is None:
                    project_info = result
            else:
                detected.append(result)

        is_project = None
        if project_info is not None:
            is_project = project_info.name == "MCP Server Project"
        if not detected and project_info is None and not recommended:
            return None

        return MCPStack(
            detected=detected or None,
            is_project=is_project,
            project_info=project_info,
            recommended=recommended or None,
        )


def _testing_slot(result: DetectionResult) -> str:
    if result.variant in ("unit", "e2e"):
        return result.variant
    return "unit" if result.name in UNIT_TEST_NAMES else "e2e"


def _pick_highest(results: list[DetectionResult]) -> Optional[DetectionResult]:
    best: Optional[DetectionResult] = None
    for result in results:
        if best is None or result.confidence > best.confidence:
            best = result
    return best


def _pick_unit(results: list[DetectionResult]) -> Optional[DetectionResult]:
    for preferred in UNIT_TEST_PREFERENCE:
        for result in results:
            if result.name == preferred:
                return result
    return _pick_highest(results)


def _describe(value) -> str:
    if value is None:
        return "none"
    if isinstance(value, list):
        return ", ".join(r.name for r in value)
    if isinstance(value, DetectionResult):
        return f"{value.name} ({value.confidence}%)"
    return type(value).__name__


def create_default_registry() -> DetectorRegistry:
    """A registry holding every built-in detector."""
    registry = DetectorRegistry()
    registry.register_all(ALL_DETECTORS)
    return registry
