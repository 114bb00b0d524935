"""Tests for the CLI module."""

from __future__ import annotations

import json
import textwrap

import pytest
from click.testing import CliRunner

from gistbadge import __version__
from gistbadge.cli import cli
from gistbadge.gist import GistError


class FakeGistClient:
    """Replaces GistClient inside the CLI; instances are kept for inspection."""

    instances = []
    files = {}
    update_error = None

    def __init__(self, token, gist_id, api_url="", timeout=10.0):
        self.token = token
        self.gist_id = gist_id
        self.api_url = api_url
        self.timeout = timeout
        self.writes = []
        self.closed = False
        FakeGistClient.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def fetch_file(self, filename):
        return FakeGistClient.files.get(filename)

    def update_file(self, filename, content):
        if FakeGistClient.update_error is not None:
            raise FakeGistClient.update_error
        self.writes.append((filename, content))


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_gist(monkeypatch):
    FakeGistClient.instances = []
    FakeGistClient.files = {}
    FakeGistClient.update_error = None
    monkeypatch.setattr("gistbadge.cli.GistClient", FakeGistClient)
    return FakeGistClient


BASE_ARGS = [
    "update", "--gist-id", "abc123", "--auth", "tok",
    "--label", "build", "--message", "passing", "--filename", "badge.json",
]


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestUpdate:
    def test_creates_file(self, runner, fake_gist):
        result = runner.invoke(cli, BASE_ARGS + ["--color", "green"])
        assert result.exit_code == 0, result.output
        assert "Success!" in result.output
        client = fake_gist.instances[0]
        assert (client.token, client.gist_id) == ("tok", "abc123")
        assert client.closed
        filename, content = client.writes[0]
        assert filename == "badge.json"
        assert json.loads(content)["color"] == "green"

    def test_unchanged_is_skipped(self, runner, fake_gist):
        fake_gist.files["badge.json"] = '{"schemaVersion":1,"label":"build","message":"passing"}'
        result = runner.invoke(cli, BASE_ARGS)
        assert result.exit_code == 0, result.output
        assert "Success!" not in result.output
        assert fake_gist.instances[0].writes == []

    def test_force_writes_unchanged(self, runner, fake_gist):
        fake_gist.files["badge.json"] = '{"schemaVersion":1,"label":"build","message":"passing"}'
        result = runner.invoke(cli, BASE_ARGS + ["--force"])
        assert result.exit_code == 0, result.output
        assert len(fake_gist.instances[0].writes) == 1

    def test_force_update_option(self, runner, fake_gist):
        fake_gist.files["badge.json"] = '{"schemaVersion":1,"label":"build","message":"passing"}'
        result = runner.invoke(cli, BASE_ARGS + ["--force-update", "true"])
        assert result.exit_code == 0, result.output
        assert len(fake_gist.instances[0].writes) == 1

    def test_inputs_from_env(self, runner, fake_gist, monkeypatch):
        monkeypatch.setenv("INPUT_GISTID", "fromenv")
        monkeypatch.setenv("INPUT_AUTH", "envtok")
        monkeypatch.setenv("INPUT_LABEL", "coverage")
        monkeypatch.setenv("INPUT_MESSAGE", "75%")
        monkeypatch.setenv("INPUT_VALCOLORRANGE", "75")
        monkeypatch.setenv("INPUT_MINCOLORRANGE", "0")
        monkeypatch.setenv("INPUT_MAXCOLORRANGE", "100")
        monkeypatch.setenv("INPUT_FILENAME", "coverage.json")
        monkeypatch.setenv("INPUT_FORCEUPDATE", "false")
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 0, result.output
        client = fake_gist.instances[0]
        assert client.gist_id == "fromenv"
        data = json.loads(client.writes[0][1])
        assert data["color"] == "hsl(90, 100%, 40%)"

    def test_config_file(self, runner, fake_gist, tmp_path):
        p = tmp_path / "badge.yaml"
        p.write_text(textwrap.dedent("""\
            gistID: abc123
            auth: tok
            label: build
            message: passing
            filename: badge.svg
            timeout: 3
        """))
        result = runner.invoke(cli, ["update", "--config", str(p), "--message", "failing", "--color", "red"])
        assert result.exit_code == 0, result.output
        client = fake_gist.instances[0]
        assert client.timeout == 3.0
        filename, content = client.writes[0]
        assert filename == "badge.svg"
        assert "failing" in content

    def test_missing_required_inputs(self, runner, fake_gist):
        result = runner.invoke(cli, ["update", "--label", "build"])
        assert result.exit_code == 1
        assert "Input required and not supplied: gistID, auth, filename" in result.output
        assert fake_gist.instances == []

    def test_bad_number(self, runner, fake_gist):
        result = runner.invoke(cli, BASE_ARGS + ["--logo-width", "wide"])
        assert result.exit_code == 1
        assert "logoWidth" in result.output

    def test_write_failure(self, runner, fake_gist):
        fake_gist.update_error = GistError(
            "Failed to update gist, response status code: 401, status message: Unauthorized", 401,
        )
        result = runner.invoke(cli, BASE_ARGS)
        assert result.exit_code == 1
        assert "Error: Failed to update gist, response status code: 401" in result.output

    def test_failure_annotation_on_actions(self, runner, fake_gist, monkeypatch):
        monkeypatch.setenv("GITHUB_ACTIONS", "true")
        fake_gist.update_error = GistError("Failed to update gist\nsecond line", 500)
        result = runner.invoke(cli, BASE_ARGS)
        assert result.exit_code == 1
        assert "::error::Failed to update gist%0Asecond line" in result.output


class TestRender:
    def test_json_to_stdout(self, runner):
        result = runner.invoke(cli, ["render", "--label", "build", "--message", "passing", "--color", "green"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "schemaVersion": 1, "label": "build", "message": "passing", "color": "green",
        }

    def test_svg_to_stdout(self, runner):
        result = runner.invoke(cli, [
            "render", "--label", "build", "--message", "passing", "--filename", "badge.svg",
        ])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("<svg")

    def test_output_file(self, runner, tmp_path):
        out = tmp_path / "badge.svg"
        result = runner.invoke(cli, [
            "render", "--label", "build", "--message", "passing", "--style", "flat-square",
            "--output", str(out),
        ])
        assert result.exit_code == 0, result.output
        assert out.read_text().startswith("<svg")
        assert f"Badge written to {out}" in result.output

    def test_bad_style(self, runner):
        result = runner.invoke(cli, [
            "render", "--label", "a", "--message", "b", "--style", "shiny", "--filename", "b.svg",
        ])
        assert result.exit_code == 1
        assert "Unknown badge style" in result.output

    def test_render_has_no_gist_options(self, runner):
        result = runner.invoke(cli, ["render", "--gist-id", "abc"])
        assert result.exit_code == 2
