"""Auth provider detector: Clerk, NextAuth.js, Auth0, Lucia, Better Auth, Supabase Auth."""

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

CLERK_VARIANTS = [
    ("@clerk/nextjs", "nextjs"),
    ("@clerk/clerk-react", "react"),
    ("@clerk/express", "express"),
]


def _detect_clerk(deps: DependencyMap) -> Optional[DetectionResult]:
    packages = find_matching_deps(deps, "@clerk/")
    if not packages:
        return None

    score = Score()
    score.add(80, f"Clerk packages found: {', '.join(packages)}")

    variant = next((variant for package, variant in CLERK_VARIANTS if package in deps), None)
    version = first_version(deps, *(package for package, _ in CLERK_VARIANTS))
    return score.result("Clerk", version=version, variant=variant)


def _detect_nextauth(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    if "next-auth" in deps:
        score.add(80, f"next-auth@{deps['next-auth']} in dependencies")
        variant = "v4"

    # Auth.js (v5) ships under the @auth scope
    packages = find_matching_deps(deps, "@auth/")
    if packages:
        score.add(80, f"Auth.js packages found: {', '.join(packages)}")
        variant = "v5"

    return score.result(
        "NextAuth.js", version=first_version(deps, "next-auth", "@auth/core"), variant=variant
    )


def _detect_auth0(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    variant = None

    packages = find_matching_deps(deps, "@auth0/")
    if packages:
        score.add(70, f"Auth0 packages found: {', '.join(packages)}")
        if "@auth0/nextjs-auth0" in deps:
            score.add(10, "@auth0/nextjs-auth0 integration detected")
            variant = "nextjs"
        elif "@auth0/auth0-react" in deps:
            score.add(10, "@auth0/auth0-react integration detected")
            variant = "react"

    if "auth0" in deps:
        score.add(60, f"auth0@{deps['auth0']} in dependencies")
        variant = "node"

    version = first_version(deps, "@auth0/nextjs-auth0", "@auth0/auth0-react", "auth0")
    return score.result("Auth0", version=version, variant=variant)


def _detect_lucia(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "lucia" in deps:
        score.add(80, f"lucia@{deps['lucia']} in dependencies")

    adapters = find_matching_deps(deps, "@lucia-auth/")
    if adapters:
        score.add(10, f"Lucia adapters found: {', '.join(adapters)}")

    return score.result("Lucia", version=deps.get("lucia"))


def _detect_better_auth(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if "better-auth" in deps:
        score.add(80, f"better-auth@{deps['better-auth']} in dependencies")
    return score.result("Better Auth", version=deps.get("better-auth"))


def _detect_supabase_auth(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    helpers = find_matching_deps(deps, "@supabase/auth-helpers-")
    if helpers:
        score.add(70, f"Supabase auth helpers found: {', '.join(helpers)}")
    if "@supabase/ssr" in deps:
        score.add(70, f"@supabase/ssr@{deps['@supabase/ssr']} in dependencies")
    if "@supabase/auth-ui-react" in deps:
        score.add(20, "@supabase/auth-ui-react found")

    return score.result("Supabase Auth", version=first_version(deps, "@supabase/ssr", *helpers))


AUTH_CANDIDATES = [
    _detect_clerk,
    _detect_nextauth,
    _detect_auth0,
    _detect_lucia,
    _detect_better_auth,
    _detect_supabase_auth,
]


def detect_auth(project_root: Path) -> Optional[DetectionResult]:
    """Detect the primary auth provider. Dedicated providers win ties."""
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    best = pick_best([candidate(deps) for candidate in AUTH_CANDIDATES])
    if best and best.confidence >= MIN_CONFIDENCE:
        return best
    return None


auth_detector = Detector(
    category=DetectorCategory.AUTH,
    name="Auth Provider Detector",
    probe=detect_auth,
)
