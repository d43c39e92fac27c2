"""Scanner: the public entry point for tech stack detection.

scan() flow:
1. Resolve the project root (a missing root is the only hard failure)
2. Run every registered detector through the registry
3. Drop results below min_confidence
4. Return a ScanResult with the stack, timing and any errors
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from stackscan.registry import DetectorRegistry, RegistryRun, create_default_registry
from stackscan.types import DetectedStack, DetectionResult, ScanResult, TestingStack

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONFIDENCE = 40


class ScannerOptions(BaseModel):
    """Options applied uniformly to the whole stack."""

    include_low_confidence: bool = False
    min_confidence: int = Field(default=DEFAULT_MIN_CONFIDENCE, ge=0, le=100)


class ProjectRootNotFoundError(FileNotFoundError):
    """Raised by Scanner.scan() when the project root does not exist."""


def _filter_list(
    results: Optional[list[DetectionResult]], min_confidence: int
) -> Optional[list[DetectionResult]]:
    if results is None:
        return None
    kept = [r for r in results if r.confidence >= min_confidence]
    return kept or None


def _filter_single(
    result: Optional[DetectionResult], min_confidence: int
) -> Optional[DetectionResult]:
    if result is not None and result.confidence >= min_confidence:
        return result
    return None


def _filter_testing(
    testing: Optional[TestingStack], min_confidence: int
) -> Optional[TestingStack]:
    if testing is None:
        return None
    unit = _filter_single(testing.unit, min_confidence)
    e2e = _filter_single(testing.e2e, min_confidence)
    if unit is None and e2e is None:
        return None
    return TestingStack(unit=unit, e2e=e2e)


def filter_by_confidence(stack: DetectedStack, min_confidence: int) -> DetectedStack:
    """Project the stack onto results with confidence >= min_confidence.

    Returns a new stack; the input is not modified. Emptied lists collapse
    to None and mcp passes through untouched. Filtering twice at the same
    threshold gives the same stack.
    """
    return DetectedStack(
        framework=_filter_single(stack.framework, min_confidence),
        package_manager=_filter_single(stack.package_manager, min_confidence),
        testing=_filter_testing(stack.testing, min_confidence),
        styling=_filter_single(stack.styling, min_confidence),
        database=_filter_single(stack.database, min_confidence),
        orm=_filter_single(stack.orm, min_confidence),
        api=_filter_list(stack.api, min_confidence),
        state_management=_filter_single(stack.state_management, min_confidence),
        ui_components=_filter_list(stack.ui_components, min_confidence),
        form_handling=_filter_list(stack.form_handling, min_confidence),
        auth=_filter_single(stack.auth, min_confidence),
        analytics=_filter_list(stack.analytics, min_confidence),
        payments=_filter_single(stack.payments, min_confidence),
        email=_filter_single(stack.email, min_confidence),
        deployment=_filter_list(stack.deployment, min_confidence),
        monorepo=_filter_single(stack.monorepo, min_confidence),
        mcp=stack.mcp,
    )


class Scanner:
    """Scans a project directory and reports its tech stack.

    Holds no per-scan state, so one instance can scan many projects.
    """

    def __init__(
        self,
        options: Optional[ScannerOptions] = None,
        registry: Optional[DetectorRegistry] = None,
    ) -> None:
        self.options = options or ScannerOptions()
        self.registry = registry or create_default_registry()

    def scan(self, project_root: Union[str, Path]) -> ScanResult:
        """Scan a project and return the detected stack.

        Raises ProjectRootNotFoundError if the root does not exist. Any
        other failure is recorded in ScanResult.errors instead of raised.
        """
        start = time.monotonic()
        root = Path(project_root).resolve()

        if not root.exists():
            raise ProjectRootNotFoundError(f"Project root does not exist: {root}")

        errors: list[str] = []
        try:
            run = self.registry.run_all_detectors(root)
        except Exception as exc:
            logger.exception("Detection failed for %s", root)
            run = RegistryRun()
            errors.append(f"Detection error: {exc}")
        errors.extend(run.errors)

        stack = run.stack
        if not self.options.include_low_confidence and self.options.min_confidence > 0:
            stack = filter_by_confidence(stack, self.options.min_confidence)

        duration_ms = (time.monotonic() - start) * 1000
        logger.info(
            "Scan complete: %d categories detected in %s in %.1fms (%d errors)",
            len(stack.to_dict()), root, duration_ms, len(errors),
        )

        return ScanResult(
            project_root=root,
            stack=stack,
            scan_time_ms=duration_ms,
            errors=errors or None,
        )

    def get_registry(self) -> DetectorRegistry:
        """The registry backing this scanner, for registering custom detectors."""
        return self.registry


def scan_project(
    project_root: Union[str, Path],
    options: Optional[ScannerOptions] = None,
) -> ScanResult:
    """Scan a project with a fresh default scanner."""
    return Scanner(options).scan(project_root)
