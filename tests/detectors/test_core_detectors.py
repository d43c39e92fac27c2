"""Tests for the core detectors: framework, package manager, testing, styling."""

import json
from pathlib import Path

from stackscan.detectors.core import (
    detect_framework,
    detect_package_manager,
    detect_styling,
    detect_testing,
)


def _write_pkg(tmp_repo: Path, data: dict) -> None:
    (tmp_repo / "package.json").write_text(json.dumps(data))


class TestDetectFramework:
    def test_nextjs_app_router(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"next": "15.0.0", "react": "19.0.0"}})
        (tmp_repo / "app").mkdir()
        fw = detect_framework(tmp_repo)
        assert fw.name == "Next.js"
        assert fw.variant == "app-router"
        assert fw.confidence >= 90
        assert fw.version == "15.0.0"

    def test_nextjs_pages_router_under_src(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"next": "14.2.0"}})
        (tmp_repo / "src" / "pages").mkdir(parents=True)
        fw = detect_framework(tmp_repo)
        assert fw.variant == "pages-router"

    def test_nextjs_config_adds_evidence(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"next": "15.0.0"}})
        (tmp_repo / "next.config.mjs").write_text("export default {}")
        fw = detect_framework(tmp_repo)
        assert "next.config.mjs found" in fw.evidence
        assert fw.confidence == 100

    def test_nuxt_beats_vue(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"nuxt": "3.10.0", "vue": "3.4.0"}})
        assert detect_framework(tmp_repo).name == "Nuxt"

    def test_plain_vue_with_vite_plugin(self, tmp_repo):
        _write_pkg(tmp_repo, {
            "dependencies": {"vue": "3.4.0"},
            "devDependencies": {"@vitejs/plugin-vue": "5.0.0"},
        })
        (tmp_repo / "vite.config.ts").write_text("")
        fw = detect_framework(tmp_repo)
        assert fw.name == "Vue"
        assert fw.confidence == 70

    def test_sveltekit(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"@sveltejs/kit": "2.0.0", "svelte": "4.0.0"}})
        (tmp_repo / "svelte.config.js").write_text("")
        fw = detect_framework(tmp_repo)
        assert fw.name == "SvelteKit"
        assert fw.confidence == 100

    def test_remix_outranks_react(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"@remix-run/react": "2.8.0", "react": "18.2.0"}})
        assert detect_framework(tmp_repo).name == "Remix"

    def test_astro(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"astro": "4.5.0"}})
        fw = detect_framework(tmp_repo)
        assert fw.name == "Astro"
        assert fw.confidence == 60

    def test_react_create_react_app(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"react": "18.2.0", "react-scripts": "5.0.1"}})
        fw = detect_framework(tmp_repo)
        assert fw.name == "React"
        assert fw.variant == "create-react-app"
        assert fw.confidence == 80

    def test_react_vite(self, tmp_repo):
        _write_pkg(tmp_repo, {
            "dependencies": {"react": "18.2.0"},
            "devDependencies": {"@vitejs/plugin-react-swc": "3.5.0"},
        })
        assert detect_framework(tmp_repo).variant == "vite"

    def test_no_framework(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"lodash": "4.17.21"}})
        assert detect_framework(tmp_repo) is None

    def test_no_package_json(self, tmp_repo):
        assert detect_framework(tmp_repo) is None


class TestDetectPackageManager:
    def test_pnpm_lock(self, tmp_repo):
        (tmp_repo / "pnpm-lock.yaml").write_text("")
        pm = detect_package_manager(tmp_repo)
        assert pm.name == "pnpm"
        assert pm.confidence == 95

    def test_lock_file_priority(self, tmp_repo):
        (tmp_repo / "yarn.lock").write_text("")
        (tmp_repo / "package-lock.json").write_text("{}")
        assert detect_package_manager(tmp_repo).name == "yarn"

    def test_bun_lock(self, tmp_repo):
        (tmp_repo / "bun.lockb").write_bytes(b"")
        assert detect_package_manager(tmp_repo).name == "bun"

    def test_package_manager_field(self, tmp_repo):
        _write_pkg(tmp_repo, {"packageManager": "pnpm@9.1.0"})
        pm = detect_package_manager(tmp_repo)
        assert pm.name == "pnpm"
        assert pm.version == "9.1.0"
        assert pm.confidence == 90

    def test_unknown_package_manager_field_ignored(self, tmp_repo):
        _write_pkg(tmp_repo, {"packageManager": "deno@1.0.0"})
        assert detect_package_manager(tmp_repo) is None

    def test_node_modules_fallback(self, tmp_repo):
        (tmp_repo / "node_modules").mkdir()
        pm = detect_package_manager(tmp_repo)
        assert pm.name == "npm"
        assert pm.confidence == 30

    def test_nothing(self, tmp_repo):
        assert detect_package_manager(tmp_repo) is None


class TestDetectTesting:
    def test_tags_unit_and_e2e(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"vitest": "1.6.0", "@playwright/test": "1.44.0"}})
        results = {r.name: r for r in detect_testing(tmp_repo)}
        assert results["Vitest"].variant == "unit"
        assert results["Playwright"].variant == "e2e"

    def test_vitest_config(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"vitest": "1.6.0"}})
        (tmp_repo / "vitest.config.ts").write_text("")
        (vitest,) = detect_testing(tmp_repo)
        assert vitest.confidence == 90

    def test_vitest_inside_vite_config(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"vitest": "1.6.0"}})
        (tmp_repo / "vite.config.ts").write_text("")
        (vitest,) = detect_testing(tmp_repo)
        assert vitest.confidence == 70

    def test_jest_signals_accumulate(self, tmp_repo):
        _write_pkg(tmp_repo, {
            "devDependencies": {"jest": "29.7.0", "ts-jest": "29.1.0", "@types/jest": "29.5.0"},
            "jest": {"preset": "ts-jest"},
        })
        (jest,) = detect_testing(tmp_repo)
        assert jest.name == "Jest"
        assert jest.confidence == 90
        assert len(jest.evidence) == 4

    def test_cypress_folder(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"cypress": "13.0.0"}})
        (tmp_repo / "cypress").mkdir()
        (cypress,) = detect_testing(tmp_repo)
        assert cypress.confidence == 70
        assert cypress.variant == "e2e"

    def test_nothing(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"react": "18.2.0"}})
        assert detect_testing(tmp_repo) is None


class TestDetectStyling:
    def test_tailwind_v4(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"tailwindcss": "4.0.2"}})
        (tmp_repo / "tailwind.config.js").write_text("")
        styling = detect_styling(tmp_repo)
        assert styling.name == "Tailwind CSS"
        assert styling.variant == "v4"
        assert styling.confidence == 90

    def test_tailwind_v3_has_no_variant(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"tailwindcss": "^3.4.1"}})
        assert detect_styling(tmp_repo).variant is None

    def test_tailwind_caret_v4(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"tailwindcss": "^4.1.0"}})
        assert detect_styling(tmp_repo).variant == "v4"

    def test_styled_components_beats_sass(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"styled-components": "6.1.0", "sass": "1.70.0"}})
        assert detect_styling(tmp_repo).name == "styled-components"

    def test_tie_keeps_earlier_candidate(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"styled-components": "6.1.0", "@emotion/react": "11.0.0"}})
        assert detect_styling(tmp_repo).name == "styled-components"

    def test_css_modules(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"react": "18.2.0"}})
        (tmp_repo / "src" / "components").mkdir(parents=True)
        (tmp_repo / "src" / "components" / "Button.module.css").write_text(".btn {}")
        assert detect_styling(tmp_repo).name == "CSS Modules"

    def test_css_modules_without_manifest(self, tmp_repo):
        (tmp_repo / "styles").mkdir()
        (tmp_repo / "styles" / "home.module.scss").write_text("")
        assert detect_styling(tmp_repo).name == "CSS Modules"

    def test_css_modules_in_node_modules_ignored(self, tmp_repo):
        nested = tmp_repo / "src" / "node_modules" / "lib"
        nested.mkdir(parents=True)
        (nested / "x.module.css").write_text("")
        assert detect_styling(tmp_repo) is None
