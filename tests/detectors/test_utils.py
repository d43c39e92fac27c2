"""Unit tests for the evidence primitives shared by all detectors."""

import json
from pathlib import Path

import pytest

from stackscan.detectors.utils import (
    Score,
    file_exists,
    find_config_file,
    find_matching_deps,
    first_version,
    get_dependencies,
    has_dependency_pattern,
    has_script,
    pick_best,
    read_package_json,
    read_text_capped,
    read_yaml_file,
)
from stackscan.types import DetectionResult


def _write_pkg(tmp_repo: Path, data: dict) -> None:
    (tmp_repo / "package.json").write_text(json.dumps(data))


class TestReadPackageJson:
    def test_reads_object(self, tmp_repo):
        _write_pkg(tmp_repo, {"name": "demo"})
        assert read_package_json(tmp_repo) == {"name": "demo"}

    def test_missing_returns_none(self, tmp_repo):
        assert read_package_json(tmp_repo) is None

    def test_invalid_json_returns_none(self, tmp_repo):
        (tmp_repo / "package.json").write_text("not json {{")
        assert read_package_json(tmp_repo) is None

    def test_non_object_returns_none(self, tmp_repo):
        (tmp_repo / "package.json").write_text("[1, 2, 3]")
        assert read_package_json(tmp_repo) is None


class TestGetDependencies:
    def test_merges_dev_dependencies(self):
        pkg = {"dependencies": {"react": "19.0.0"}, "devDependencies": {"vitest": "1.0.0"}}
        assert get_dependencies(pkg) == {"react": "19.0.0", "vitest": "1.0.0"}

    def test_dev_dependencies_win_on_clash(self):
        pkg = {"dependencies": {"typescript": "5.0.0"}, "devDependencies": {"typescript": "5.4.0"}}
        assert get_dependencies(pkg)["typescript"] == "5.4.0"

    def test_ignores_malformed_sections(self):
        pkg = {"dependencies": ["react"], "devDependencies": {"jest": "29.0.0"}}
        assert get_dependencies(pkg) == {"jest": "29.0.0"}

    def test_none_returns_empty(self):
        assert get_dependencies(None) == {}


class TestLookups:
    def test_find_matching_deps_keeps_manifest_order(self):
        deps = {"@radix-ui/react-dialog": "1", "react": "19", "@radix-ui/react-slot": "1"}
        assert find_matching_deps(deps, "@radix-ui/") == [
            "@radix-ui/react-dialog",
            "@radix-ui/react-slot",
        ]

    def test_has_dependency_pattern_returns_version(self):
        assert has_dependency_pattern({"@clerk/nextjs": "5.0.0"}, "@clerk/") == "5.0.0"
        assert has_dependency_pattern({"react": "19"}, "@clerk/") is None

    def test_first_version(self):
        deps = {"postgres": "3.4.0"}
        assert first_version(deps, "pg", "postgres") == "3.4.0"
        assert first_version(deps, "mysql2") is None

    def test_find_config_file_tries_extensions_in_order(self, tmp_repo):
        (tmp_repo / "vite.config.ts").write_text("")
        (tmp_repo / "vite.config.mjs").write_text("")
        assert find_config_file(tmp_repo, "vite.config", [".js", ".ts", ".mjs"]) == "vite.config.ts"

    def test_find_config_file_missing(self, tmp_repo):
        assert find_config_file(tmp_repo, "vite.config", [".js"]) is None

    def test_file_exists(self, tmp_repo):
        (tmp_repo / "fly.toml").write_text("")
        assert file_exists(tmp_repo, "fly.toml")
        assert not file_exists(tmp_repo, "render.yaml")

    def test_has_script(self):
        assert has_script({"scripts": {"test": "vitest"}}, "test")
        assert not has_script({"scripts": "oops"}, "test")


class TestFileReaders:
    def test_read_text_capped_truncates(self, tmp_repo):
        path = tmp_repo / "big.ts"
        path.write_text("x" * 100)
        assert read_text_capped(path, limit=10) == "x" * 10

    def test_read_text_capped_missing(self, tmp_repo):
        assert read_text_capped(tmp_repo / "nope.ts") is None

    def test_read_yaml_file(self, tmp_repo):
        path = tmp_repo / "pnpm-workspace.yaml"
        path.write_text("packages:\n  - apps/*\n  - packages/*\n")
        assert read_yaml_file(path) == {"packages": ["apps/*", "packages/*"]}

    def test_read_yaml_file_invalid(self, tmp_repo):
        path = tmp_repo / "broken.yaml"
        path.write_text("packages: [unclosed\n")
        assert read_yaml_file(path) is None

    def test_read_package_json_oversized_integer(self, tmp_repo):
        (tmp_repo / "package.json").write_text('{"x": ' + "9" * 5000 + "}")
        assert read_package_json(tmp_repo) is None

    def test_read_package_json_deeply_nested(self, tmp_repo):
        (tmp_repo / "package.json").write_text("[" * 100000 + "]" * 100000)
        assert read_package_json(tmp_repo) is None


class TestScore:
    def test_no_points_returns_none(self):
        assert Score().result("Nothing") is None

    def test_evidence_follows_points(self):
        score = Score()
        score.add(50, "dependency found")
        score.add(40, "config found")
        result = score.result("Tool", version="1.0.0", variant="x")
        assert result.confidence == 90
        assert result.evidence == ("dependency found", "config found")
        assert result.version == "1.0.0"
        assert result.variant == "x"

    def test_clamps_to_100(self):
        score = Score()
        score.add(80, "a")
        score.add(80, "b")
        assert score.result("Tool").confidence == 100


class TestPickBest:
    def test_picks_highest_confidence(self):
        low = DetectionResult(name="low", confidence=40, evidence=("e",))
        high = DetectionResult(name="high", confidence=90, evidence=("e",))
        assert pick_best([low, None, high]).name == "high"

    def test_tie_returns_first(self):
        first = DetectionResult(name="first", confidence=80, evidence=("e",))
        second = DetectionResult(name="second", confidence=80, evidence=("e",))
        assert pick_best([first, second]).name == "first"

    @pytest.mark.parametrize("results", [[], [None, None]])
    def test_nothing_returns_none(self, results):
        assert pick_best(results) is None
