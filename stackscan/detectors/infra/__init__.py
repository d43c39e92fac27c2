"""Infrastructure detectors: deployment targets, monorepo tooling."""

from stackscan.detectors.infra.deployment import deployment_detector, detect_deployment
from stackscan.detectors.infra.monorepo import detect_monorepo, monorepo_detector

__all__ = [
    "deployment_detector",
    "detect_deployment",
    "detect_monorepo",
    "monorepo_detector",
]
