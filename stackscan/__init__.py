"""Tech stack scanner for JavaScript/TypeScript projects.

Public API:
    scan_project(project_root, options=None) -> ScanResult
    Scanner(options=None, registry=None).scan(project_root) -> ScanResult
    format_scan_result(result) -> str
"""

from stackscan.registry import DetectorRegistry, create_default_registry
from stackscan.report import format_scan_result
from stackscan.scanner import (
    ProjectRootNotFoundError,
    Scanner,
    ScannerOptions,
    filter_by_confidence,
    scan_project,
)
from stackscan.types import (
    DetectedStack,
    DetectionResult,
    Detector,
    DetectorCategory,
    MCPStack,
    ScanResult,
    TestingStack,
)

__all__ = [
    "DetectedStack",
    "DetectionResult",
    "Detector",
    "DetectorCategory",
    "DetectorRegistry",
    "MCPStack",
    "ProjectRootNotFoundError",
    "ScanResult",
    "Scanner",
    "ScannerOptions",
    "TestingStack",
    "create_default_registry",
    "filter_by_confidence",
    "format_scan_result",
    "scan_project",
]
