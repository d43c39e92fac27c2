"""Payments provider detector: Stripe, Lemon Squeezy, Paddle, PayPal."""

import logging
from pathlib import Path
from typing import Optional

from stackscan.detectors.utils import (
    DependencyMap,
    Score,
    find_matching_deps,
    first_version,
    get_dependencies,
    pick_best,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40


def _detect_stripe(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    if "stripe" in deps:
        score.add(70, f"stripe@{deps['stripe']} in dependencies")
        variant = "server"

    packages = find_matching_deps(deps, "@stripe/")
    if packages:
        score.add(20, f"Stripe packages found: {', '.join(packages)}")
        if "@stripe/stripe-js" in deps:
            variant = "full-stack" if variant == "server" else "client"
        if "@stripe/react-stripe-js" in deps:
            score.add(10, "React Stripe.js integration detected")

    return score.result(
        "Stripe", version=first_version(deps, "stripe", "@stripe/stripe-js"), variant=variant
    )


def _scoped_provider(
    deps: DependencyMap,
    name: str,
    scope: str,
    legacy_package: str,
    legacy_points: int,
    version_from: str,
) -> Optional[DetectionResult]:
    """Providers detected by an npm scope plus one unscoped package."""
    score = Score()

    packages = find_matching_deps(deps, scope)
    if packages:
        score.add(80, f"{name} packages found: {', '.join(packages)}")
    if legacy_package in deps:
        score.add(legacy_points, f"{legacy_package}@{deps[legacy_package]} in dependencies")

    return score.result(name, version=first_version(deps, version_from, legacy_package))


def _detect_lemon_squeezy(deps: DependencyMap) -> Optional[DetectionResult]:
    return _scoped_provider(
        deps, "Lemon Squeezy", "@lemonsqueezy/", "lemonsqueezy.js", 80,
        "@lemonsqueezy/lemonsqueezy.js",
    )


def _detect_paddle(deps: DependencyMap) -> Optional[DetectionResult]:
    return _scoped_provider(deps, "Paddle", "@paddle/", "paddle-sdk", 70, "@paddle/paddle-js")


def _detect_paypal(deps: DependencyMap) -> Optional[DetectionResult]:
    return _scoped_provider(
        deps, "PayPal", "@paypal/", "paypal-rest-sdk", 70, "@paypal/paypal-js"
    )


PAYMENTS_CANDIDATES = [
    _detect_stripe,
    _detect_lemon_squeezy,
    _detect_paddle,
    _detect_paypal,
]


def detect_payments(project_root: Path) -> Optional[DetectionResult]:
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    best = pick_best([candidate(deps) for candidate in PAYMENTS_CANDIDATES])
    if best and best.confidence >= MIN_CONFIDENCE:
        return best
    return None


payments_detector = Detector(
    category=DetectorCategory.PAYMENTS,
    name="Payments Provider Detector",
    probe=detect_payments,
)
