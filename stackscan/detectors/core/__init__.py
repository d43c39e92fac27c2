"""Core detectors: framework, package manager, testing, styling."""

from stackscan.detectors.core.framework import detect_framework, framework_detector
from stackscan.detectors.core.package_manager import (
    detect_package_manager,
    package_manager_detector,
)
from stackscan.detectors.core.styling import detect_styling, styling_detector
from stackscan.detectors.core.testing import detect_testing, testing_detector

__all__ = [
    "detect_framework",
    "detect_package_manager",
    "detect_styling",
    "detect_testing",
    "framework_detector",
    "package_manager_detector",
    "styling_detector",
    "testing_detector",
]
