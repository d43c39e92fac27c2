"""Third-party service detectors: auth, analytics, payments, email."""

from stackscan.detectors.services.analytics import analytics_detector, detect_analytics
from stackscan.detectors.services.auth import auth_detector, detect_auth
from stackscan.detectors.services.email import detect_email, email_detector
from stackscan.detectors.services.payments import detect_payments, payments_detector

__all__ = [
    "analytics_detector",
    "auth_detector",
    "detect_analytics",
    "detect_auth",
    "detect_email",
    "detect_payments",
    "email_detector",
    "payments_detector",
]
