"""Analytics detector.

Projects often run product analytics next to traffic analytics, so every
provider found is reported.
"""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    find_matching_deps,
    first_version,
    get_dependencies,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

GOOGLE_ANALYTICS_PACKAGES: list[tuple[tuple[str, ...], int, str]] = [
    (("@google-analytics/data",), 70, "@google-analytics/data found"),
    (("react-ga4", "react-ga"), 70, "React GA package found"),
    (("ga-4-react",), 70, "ga-4-react found"),
    (("gtag",), 60, "gtag found"),
]


def _detect_posthog(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    if "posthog-js" in deps:
        score.add(80, f"posthog-js@{deps['posthog-js']} in dependencies")
        variant = "browser"
    if "posthog-node" in deps:
        score.add(80, f"posthog-node@{deps['posthog-node']} in dependencies")
        variant = "full-stack" if variant else "server"
    if "posthog-react" in deps:
        score.add(10, "posthog-react found")

    return score.result(
        "PostHog", version=first_version(deps, "posthog-js", "posthog-node"), variant=variant
    )


def _detect_mixpanel(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    packages = find_matching_deps(deps, "mixpanel")
    if packages:
        score.add(80, f"Mixpanel packages found: {', '.join(packages)}")

    scoped = find_matching_deps(deps, "@mixpanel/")
    if scoped:
        score.add(80, f"@mixpanel packages found: {', '.join(scoped)}")

    return score.result("Mixpanel", version=first_version(deps, "mixpanel", "mixpanel-browser"))


def _detect_vercel_analytics(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@vercel/analytics" in deps:
        score.add(80, f"@vercel/analytics@{deps['@vercel/analytics']} in dependencies")
    if "@vercel/speed-insights" in deps:
        score.add(10, "@vercel/speed-insights found")

    return score.result("Vercel Analytics", version=deps.get("@vercel/analytics"))


def _detect_google_analytics(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    for packages, points, reason in GOOGLE_ANALYTICS_PACKAGES:
        if any(package in deps for package in packages):
            score.add(points, reason)

    return score.result(
        "Google Analytics", version=first_version(deps, "react-ga4", "@google-analytics/data")
    )


def _detect_amplitude(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    packages = find_matching_deps(deps, "@amplitude/")
    if packages:
        score.add(80, f"Amplitude packages found: {', '.join(packages)}")
    if "amplitude-js" in deps:
        score.add(80, f"amplitude-js@{deps['amplitude-js']} in dependencies")

    return score.result(
        "Amplitude", version=first_version(deps, "@amplitude/analytics-browser", "amplitude-js")
    )


def _detect_plausible(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "plausible-tracker" in deps:
        score.add(80, f"plausible-tracker@{deps['plausible-tracker']} in dependencies")
    if "next-plausible" in deps:
        score.add(80, "next-plausible found")

    return score.result(
        "Plausible", version=first_version(deps, "plausible-tracker", "next-plausible")
    )


ANALYTICS_CANDIDATES = [
    _detect_posthog,
    _detect_mixpanel,
    _detect_vercel_analytics,
    _detect_google_analytics,
    _detect_amplitude,
    _detect_plausible,
]


def detect_analytics(project_root: Path) -> Optional[list[DetectionResult]]:
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    results = [result for candidate in ANALYTICS_CANDIDATES if (result := candidate(deps))]
    return results or None


analytics_detector = Detector(
    category=DetectorCategory.ANALYTICS,
    name="Analytics Detector",
    probe=detect_analytics,
)
