"""Email provider detector: Resend, SendGrid, Postmark, Mailgun, AWS SES, Nodemailer.

Nodemailer is checked last: it is usually a transport in front of one of
the hosted providers rather than a provider itself.
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
    pick_best,
    read_package_json,
)
from stackscan.types import DetectionResult, Detector, DetectorCategory

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 40


def _detect_resend(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "resend" in deps:
        score.add(80, f"resend@{deps['resend']} in dependencies")
    if "react-email" in deps or "@react-email/components" in deps:
        score.add(10, "React Email detected (commonly paired with Resend)")

    return score.result("Resend", version=deps.get("resend"))


def _detect_sendgrid(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@sendgrid/mail" in deps:
        score.add(80, f"@sendgrid/mail@{deps['@sendgrid/mail']} in dependencies")

    packages = find_matching_deps(deps, "@sendgrid/")
    if len(packages) > 1:
        score.add(10, f"Multiple SendGrid packages found: {', '.join(packages)}")

    return score.result("SendGrid", version=deps.get("@sendgrid/mail"))


def _detect_postmark(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()
    if "postmark" in deps:
        score.add(80, f"postmark@{deps['postmark']} in dependencies")
    return score.result("Postmark", version=deps.get("postmark"))


def _detect_mailgun(deps: DependencyMap) -> Optional[DetectionResult]:
    version = first_version(deps, "mailgun.js", "mailgun-js")
    if version is None:
        return None

    score = Score()
    score.add(80, f"Mailgun package@{version} in dependencies")
    return score.result("Mailgun", version=version)


def _detect_aws_ses(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "@aws-sdk/client-ses" in deps:
        score.add(80, f"@aws-sdk/client-ses@{deps['@aws-sdk/client-ses']} in dependencies")
    elif "aws-sdk" in deps:
        # The v2 SDK bundles every service, so SES use is only a guess.
        score.add(40, "aws-sdk found (may include SES)")

    return score.result("AWS SES", version=deps.get("@aws-sdk/client-ses"))


def _detect_nodemailer(deps: DependencyMap) -> Optional[DetectionResult]:
    score = Score()

    if "nodemailer" in deps:
        score.add(80, f"nodemailer@{deps['nodemailer']} in dependencies")
    if "@types/nodemailer" in deps:
        score.add(10, "@types/nodemailer found")

    return score.result("Nodemailer", version=deps.get("nodemailer"))


EMAIL_CANDIDATES = [
    _detect_resend,
    _detect_sendgrid,
    _detect_postmark,
    _detect_mailgun,
    _detect_aws_ses,
    _detect_nodemailer,
]


def detect_email(project_root: Path) -> Optional[DetectionResult]:
    pkg = read_package_json(project_root)
    if pkg is None:
        return None

    deps = get_dependencies(pkg)
    best = pick_best([candidate(deps) for candidate in EMAIL_CANDIDATES])
    if best and best.confidence >= MIN_CONFIDENCE:
        return best
    return None


email_detector = Detector(
    category=DetectorCategory.EMAIL,
    name="Email Provider Detector",
    probe=detect_email,
)
