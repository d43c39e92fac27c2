"""Shared types for the stack scanner.

Every detector emits DetectionResult values. The registry folds them into a
DetectedStack, and the scanner wraps that in a ScanResult together with the
scan duration and any errors collected along the way.
"""

from dataclasses import dataclass, field, fields, replace
from enum import StrEnum
from pathlib import Path
from typing import Callable, Optional, Union


class DetectorCategory(StrEnum):
    """The fixed set of stack dimensions a detector can belong to."""

    # Core
    FRAMEWORK = "framework"
    PACKAGE_MANAGER = "packageManager"
    TESTING = "testing"
    STYLING = "styling"
    # Data layer
    DATABASE = "database"
    ORM = "orm"
    API = "api"
    # Frontend
    STATE_MANAGEMENT = "stateManagement"
    UI_COMPONENTS = "uiComponents"
    FORM_HANDLING = "formHandling"
    # Services
    AUTH = "auth"
    ANALYTICS = "analytics"
    PAYMENTS = "payments"
    EMAIL = "email"
    # Infrastructure
    DEPLOYMENT = "deployment"
    MONOREPO = "monorepo"
    # MCP
    MCP = "mcp"


ALL_CATEGORIES: tuple[DetectorCategory, ...] = tuple(DetectorCategory)


@dataclass(frozen=True)
class DetectionResult:
    """A single detected technology.

    confidence is clamped to 0-100 on construction. evidence lists, in the
    order the points were added, every signal that contributed to the score.
    version is the raw manifest string (e.g. "^15.0.0"), never parsed.
    """

    name: str
    confidence: int
    evidence: tuple[str, ...] = ()
    version: Optional[str] = None
    variant: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", max(0, min(100, int(self.confidence))))
        object.__setattr__(self, "evidence", tuple(self.evidence))
        if self.confidence > 0 and not self.evidence:
            raise ValueError(f"{self.name}: confidence {self.confidence} without evidence")

    def with_variant(self, variant: Optional[str]) -> "DetectionResult":
        return replace(self, variant=variant)

    def to_dict(self) -> dict:
        data: dict = {"name": self.name}
        if self.version is not None:
            data["version"] = self.version
        if self.variant is not None:
            data["variant"] = self.variant
        data["confidence"] = self.confidence
        data["evidence"] = list(self.evidence)
        return data


ProbeOutput = Union[DetectionResult, list[DetectionResult], None]
Probe = Callable[[Path], ProbeOutput]


@dataclass(frozen=True)
class Detector:
    """A named probe bound to exactly one category.

    Lower priority values run first within a category. Detectors with equal
    priority keep their registration order.
    """

    category: DetectorCategory
    name: str
    probe: Probe
    priority: int = 100

    def detect(self, project_root: Path) -> ProbeOutput:
        return self.probe(project_root)


@dataclass
class TestingStack:
    """Unit and end-to-end test frameworks, one per slot."""

    __test__ = False  # keep pytest from collecting this as a test class

    unit: Optional[DetectionResult] = None
    e2e: Optional[DetectionResult] = None

    def to_dict(self) -> dict:
        data: dict = {}
        if self.unit is not None:
            data["unit"] = self.unit.to_dict()
        if self.e2e is not None:
            data["e2e"] = self.e2e.to_dict()
        return data


@dataclass
class MCPStack:
    """Model Context Protocol findings.

    detected: servers declared in MCP config files.
    is_project / project_info: whether the project itself is an MCP server
    (or only an MCP client).
    recommended: server names suggested from the dependency map. These are
    not confidence-scored for consumers and are never threshold-filtered.
    """

    detected: Optional[list[DetectionResult]] = None
    is_project: Optional[bool] = None
    project_info: Optional[DetectionResult] = None
    recommended: Optional[list[str]] = None

    def to_dict(self) -> dict:
        data: dict = {}
        if self.detected is not None:
            data["detected"] = [r.to_dict() for r in self.detected]
        if self.is_project is not None:
            data["is_project"] = self.is_project
        if self.project_info is not None:
            data["project_info"] = self.project_info.to_dict()
        if self.recommended is not None:
            data["recommended"] = list(self.recommended)
        return data


@dataclass
class DetectedStack:
    """The assembled tech stack, one slot per category.

    A slot is None when nothing was detected (or nothing survived the
    confidence filter). Multi-result slots are never empty lists.
    """

    # Core
    framework: Optional[DetectionResult] = None
    package_manager: Optional[DetectionResult] = None
    testing: Optional[TestingStack] = None
    styling: Optional[DetectionResult] = None
    # Data layer
    database: Optional[DetectionResult] = None
    orm: Optional[DetectionResult] = None
    api: Optional[list[DetectionResult]] = None
    # Frontend
    state_management: Optional[DetectionResult] = None
    ui_components: Optional[list[DetectionResult]] = None
    form_handling: Optional[list[DetectionResult]] = None
    # Services
    auth: Optional[DetectionResult] = None
    analytics: Optional[list[DetectionResult]] = None
    payments: Optional[DetectionResult] = None
    email: Optional[DetectionResult] = None
    # Infrastructure
    deployment: Optional[list[DetectionResult]] = None
    monorepo: Optional[DetectionResult] = None
    # MCP
    mcp: Optional[MCPStack] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict:
        data: dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, list):
                data[f.name] = [r.to_dict() for r in value]
            else:
                data[f.name] = value.to_dict()
        return data


# Maps each category to the DetectedStack attribute that holds its result.
STACK_SLOTS: dict[DetectorCategory, str] = {
    DetectorCategory.FRAMEWORK: "framework",
    DetectorCategory.PACKAGE_MANAGER: "package_manager",
    DetectorCategory.TESTING: "testing",
    DetectorCategory.STYLING: "styling",
    DetectorCategory.DATABASE: "database",
    DetectorCategory.ORM: "orm",
    DetectorCategory.API: "api",
    DetectorCategory.STATE_MANAGEMENT: "state_management",
    DetectorCategory.UI_COMPONENTS: "ui_components",
    DetectorCategory.FORM_HANDLING: "form_handling",
    DetectorCategory.AUTH: "auth",
    DetectorCategory.ANALYTICS: "analytics",
    DetectorCategory.PAYMENTS: "payments",
    DetectorCategory.EMAIL: "email",
    DetectorCategory.DEPLOYMENT: "deployment",
    DetectorCategory.MONOREPO: "monorepo",
    DetectorCategory.MCP: "mcp",
}


@dataclass(frozen=True)
class ScanResult:
    """Complete scanner output for a project.

    errors is None when the scan ran cleanly. A non-empty list is advisory:
    the stack may still hold everything that was detected successfully.
    """

    project_root: Path
    stack: DetectedStack = field(default_factory=DetectedStack)
    scan_time_ms: float = 0.0
    errors: Optional[list[str]] = None

    def to_dict(self) -> dict:
        data = {
            "project_root": str(self.project_root),
            "stack": self.stack.to_dict(),
            "scan_time_ms": round(self.scan_time_ms, 1),
        }
        if self.errors:
            data["errors"] = list(self.errors)
        return data
