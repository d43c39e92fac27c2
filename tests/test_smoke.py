def test_stackscan_imports():
    """Verify all stackscan submodules can be imported without errors."""
    import stackscan
    import stackscan.cli
    import stackscan.core.config
    import stackscan.core.logging
    import stackscan.detectors
    import stackscan.detectors.core
    import stackscan.detectors.data
    import stackscan.detectors.frontend
    import stackscan.detectors.infra
    import stackscan.detectors.mcp
    import stackscan.detectors.services
    import stackscan.registry
    import stackscan.report
    import stackscan.scanner

    assert stackscan is not None
