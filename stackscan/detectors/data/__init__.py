"""Data layer detectors: database, ORM, API patterns."""

from stackscan.detectors.data.api import api_detector, detect_api_patterns
from stackscan.detectors.data.database import database_detector, detect_database
from stackscan.detectors.data.orm import detect_orm, orm_detector

__all__ = [
    "api_detector",
    "database_detector",
    "detect_api_patterns",
    "detect_database",
    "detect_orm",
    "orm_detector",
]
