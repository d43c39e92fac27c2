"""Plain-text rendering of a ScanResult for terminals and logs."""

from typing import Optional

from stackscan.types import DetectionResult, ScanResult


def _describe(result: DetectionResult) -> str:
    version = f"@{result.version}" if result.version else ""
    variant = f" ({result.variant})" if result.variant else ""
    return f"{result.name}{version}{variant} [{result.confidence}%]"


def format_detection(label: str, result: Optional[DetectionResult], indent: str = "") -> list[str]:
    """A headline line plus its evidence line, or nothing when absent."""
    if result is None:
        return []
    return [
        f"{indent}{label}: {_describe(result)}",
        f"{indent}  Evidence: {', '.join(result.evidence)}",
    ]


def format_detection_list(
    label: str, results: Optional[list[DetectionResult]], indent: str = ""
) -> list[str]:
    """One bullet per result, or nothing when absent or empty."""
    if not results:
        return []
    return [f"{indent}{label}:"] + [f"{indent}  - {_describe(r)}" for r in results]


def _section(title: str, body: list[str]) -> list[str]:
    if not body:
        return []
    return ["", f"=== {title} ==="] + body


def format_scan_result(result: ScanResult) -> str:
    """Render a scan result as a sectioned, human-readable report."""
    stack = result.stack
    lines = [
        f"Project: {result.project_root}",
        f"Scan time: {result.scan_time_ms:.0f}ms",
        "",
        "=== Core ===",
    ]

    lines += format_detection("Framework", stack.framework) or ["Framework: Not detected"]
    lines += format_detection("Package Manager", stack.package_manager) or [
        "Package Manager: Not detected"
    ]
    if stack.testing:
        lines += format_detection("Unit Testing", stack.testing.unit)
        lines += format_detection("E2E Testing", stack.testing.e2e)
    lines += format_detection("Styling", stack.styling)

    lines += _section(
        "Data Layer",
        format_detection("Database", stack.database)
        + format_detection("ORM", stack.orm)
        + format_detection_list("API Patterns", stack.api),
    )
    lines += _section(
        "Frontend",
        format_detection("State Management", stack.state_management)
        + format_detection_list("UI Components", stack.ui_components)
        + format_detection_list("Form Handling", stack.form_handling),
    )
    lines += _section(
        "Services",
        format_detection("Auth", stack.auth)
        + format_detection_list("Analytics", stack.analytics)
        + format_detection("Payments", stack.payments)
        + format_detection("Email", stack.email),
    )
    lines += _section(
        "Infrastructure",
        format_detection_list("Deployment", stack.deployment)
        + format_detection("Monorepo", stack.monorepo),
    )

    if stack.mcp:
        mcp = stack.mcp
        lines += ["", "=== MCP ==="]
        if mcp.project_info:
            lines.append(f"Type: {mcp.project_info.name}")
            lines += format_detection("Project Info", mcp.project_info, indent="  ")
        if mcp.detected:
            lines.append("Configured MCP Servers:")
            lines += [f"  - {server.name}" for server in mcp.detected]
        if mcp.recommended:
            lines.append(f"Recommended MCP Servers: {', '.join(mcp.recommended)}")

    if result.errors:
        lines += ["", "Errors:"] + [f"  - {error}" for error in result.errors]

    return "\n".join(lines)
