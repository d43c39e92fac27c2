"""Tests for deployment target and monorepo tool detection."""

import json
from pathlib import Path

from stackscan.detectors.infra import detect_deployment, detect_monorepo


def _write_pkg(tmp_repo: Path, data: dict) -> None:
    (tmp_repo / "package.json").write_text(json.dumps(data))


SAM_TEMPLATE = """\
AWSTemplateFormatVersion: '2010-09-09'
Transform: AWS::Serverless-2016-10-31
Resources:
  Api:
    Type: AWS::Serverless::Function
"""


class TestDetectDeployment:
    def test_runs_without_package_json(self, tmp_repo):
        (tmp_repo / "vercel.json").write_text("{}")
        (vercel,) = detect_deployment(tmp_repo)
        assert vercel.name == "Vercel"
        assert vercel.confidence == 50

    def test_vercel_config_and_packages(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"@vercel/analytics": "1.1.0"}})
        (tmp_repo / "vercel.json").write_text("{}")
        (tmp_repo / ".vercel").mkdir()
        (vercel,) = detect_deployment(tmp_repo)
        assert vercel.confidence == 100
        assert len(vercel.evidence) == 3

    def test_docker_compose(self, tmp_repo):
        (tmp_repo / "Dockerfile").write_text("FROM node:20\n")
        (tmp_repo / "compose.yaml").write_text("services: {}\n")
        (tmp_repo / ".dockerignore").write_text("node_modules\n")
        (docker,) = detect_deployment(tmp_repo)
        assert docker.variant == "compose"
        assert docker.confidence == 100
        assert "compose.yaml found" in docker.evidence

    def test_dockerfile_only(self, tmp_repo):
        (tmp_repo / "Dockerfile").write_text("FROM node:20\n")
        (docker,) = detect_deployment(tmp_repo)
        assert docker.variant is None

    def test_several_targets(self, tmp_repo):
        (tmp_repo / "netlify.toml").write_text("")
        (tmp_repo / "fly.toml").write_text("")
        (tmp_repo / "render.yaml").write_text("")
        names = [r.name for r in detect_deployment(tmp_repo)]
        assert names == ["Netlify", "Fly.io", "Render"]

    def test_sam_template(self, tmp_repo):
        (tmp_repo / "template.yaml").write_text(SAM_TEMPLATE)
        (aws,) = detect_deployment(tmp_repo)
        assert aws.name == "AWS"
        assert aws.variant == "sam"
        assert aws.confidence == 70

    def test_plain_template_yaml_is_ignored(self, tmp_repo):
        (tmp_repo / "template.yaml").write_text("name: my-template\n")
        assert detect_deployment(tmp_repo) is None

    def test_last_aws_tool_decides_variant(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"aws-cdk-lib": "2.100.0", "sst": "2.40.0"}})
        (aws,) = detect_deployment(tmp_repo)
        assert aws.variant == "sst"
        assert aws.confidence == 100

    def test_nothing(self, tmp_repo):
        assert detect_deployment(tmp_repo) is None


class TestDetectMonorepo:
    def test_turborepo(self, tmp_repo):
        _write_pkg(tmp_repo, {"devDependencies": {"turbo": "2.0.0"}})
        (tmp_repo / "turbo.json").write_text("{}")
        monorepo = detect_monorepo(tmp_repo)
        assert monorepo.name == "Turborepo"
        assert monorepo.confidence == 100
        assert monorepo.version == "2.0.0"

    def test_pnpm_workspace_globs_in_evidence(self, tmp_repo):
        _write_pkg(tmp_repo, {"name": "root"})
        (tmp_repo / "pnpm-workspace.yaml").write_text("packages:\n  - 'apps/*'\n  - 'packages/*'\n")
        monorepo = detect_monorepo(tmp_repo)
        assert monorepo.name == "pnpm Workspaces"
        assert monorepo.evidence == ("pnpm-workspace.yaml found (packages: apps/*, packages/*)",)

    def test_malformed_pnpm_workspace_still_counts(self, tmp_repo):
        (tmp_repo / "pnpm-workspace.yaml").write_text("packages: [unclosed\n")
        monorepo = detect_monorepo(tmp_repo)
        assert monorepo.evidence == ("pnpm-workspace.yaml found",)

    def test_stronger_workspace_config_beats_weak_tool(self, tmp_repo):
        (tmp_repo / "turbo.json").write_text("{}")
        (tmp_repo / "pnpm-workspace.yaml").write_text("packages:\n  - 'apps/*'\n")
        assert detect_monorepo(tmp_repo).name == "pnpm Workspaces"

    def test_yarn_workspaces(self, tmp_repo):
        _write_pkg(tmp_repo, {"workspaces": ["packages/*"]})
        (tmp_repo / "yarn.lock").write_text("")
        monorepo = detect_monorepo(tmp_repo)
        assert monorepo.name == "Yarn Workspaces"
        assert monorepo.variant == "yarn"
        assert monorepo.confidence == 70
        assert monorepo.evidence == ("workspaces field in package.json", "yarn.lock found")

    def test_npm_workspaces_without_lock_file(self, tmp_repo):
        _write_pkg(tmp_repo, {"workspaces": ["packages/*"]})
        monorepo = detect_monorepo(tmp_repo)
        assert monorepo.name == "npm Workspaces"
        assert monorepo.variant is None

    def test_lerna_without_package_json(self, tmp_repo):
        (tmp_repo / "lerna.json").write_text("{}")
        assert detect_monorepo(tmp_repo).name == "Lerna"

    def test_nothing(self, tmp_repo):
        _write_pkg(tmp_repo, {"name": "single"})
        assert detect_monorepo(tmp_repo) is None
