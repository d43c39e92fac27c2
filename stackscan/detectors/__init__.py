"""Built-in category detectors.

Public API:
    ALL_DETECTORS -- every built-in Detector, in registration order
"""

from stackscan.detectors.core import (
    framework_detector,
    package_manager_detector,
    styling_detector,
    testing_detector,
)
from stackscan.detectors.data import api_detector, database_detector, orm_detector
from stackscan.detectors.frontend import (
    form_handling_detector,
    state_management_detector,
    ui_components_detector,
)
from stackscan.detectors.infra import deployment_detector, monorepo_detector
from stackscan.detectors.mcp import (
    mcp_project_detector,
    mcp_servers_detector,
    recommendations_detector,
)
from stackscan.detectors.services import (
    analytics_detector,
    auth_detector,
    email_detector,
    payments_detector,
)

ALL_DETECTORS = [
    # Core
    framework_detector,
    package_manager_detector,
    testing_detector,
    styling_detector,
    # Data layer
    database_detector,
    orm_detector,
    api_detector,
    # Frontend
    state_management_detector,
    ui_components_detector,
    form_handling_detector,
    # Services
    auth_detector,
    analytics_detector,
    payments_detector,
    email_detector,
    # Infrastructure
    deployment_detector,
    monorepo_detector,
    # MCP
    mcp_servers_detector,
    mcp_project_detector,
    recommendations_detector,
]

__all__ = ["ALL_DETECTORS"]
