"""Frontend detectors: state management, UI components, form handling."""

from stackscan.detectors.frontend.form_handling import (
    detect_form_handling,
    form_handling_detector,
)
from stackscan.detectors.frontend.state_management import (
    detect_state_management,
    state_management_detector,
)
from stackscan.detectors.frontend.ui_components import (
    detect_ui_components,
    ui_components_detector,
)

__all__ = [
    "detect_form_handling",
    "detect_state_management",
    "detect_ui_components",
    "form_handling_detector",
    "state_management_detector",
    "ui_components_detector",
]
