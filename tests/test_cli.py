"""Tests for the envscope command line."""

import json

import pytest

from envscope.cli import EXIT_CONFIG, EXIT_NOT_FOUND, EXIT_OK, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ENVSCOPE_ENV",
        "ENVSCOPE_CONFIG_PATH",
        "ENVSCOPE_RESOURCE_PATH",
        "ENVSCOPE_DEFAULT_ENV",
        "ENVSCOPE_ENV_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(write_properties, config_dir):
    write_properties("production", "email=prod@example.com\n")
    write_properties("environment", "email=dev@example.com\nname=shop\n")
    return str(config_dir)


class TestShow:
    def test_table(self, config, capsys):
        assert main(["--config-path", config, "show"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "Environment: DEVELOPMENT (source: default)" in out
        assert "email" in out
        assert "dev@example.com" in out

    def test_json(self, config, capsys, monkeypatch):
        monkeypatch.setenv("ENVSCOPE_ENV", "production")

        assert main(["--config-path", config, "show", "--format", "json"]) == EXIT_OK

        data = json.loads(capsys.readouterr().out)
        assert data == {
            "environment": "PRODUCTION",
            "source": "os",
            "properties": {"email": "prod@example.com", "name": "shop"},
        }

    def test_no_properties(self, config_dir, capsys):
        assert main(["--config-path", str(config_dir), "show"]) == EXIT_OK
        assert "No properties defined" in capsys.readouterr().out


class TestGet:
    def test_value(self, config, capsys):
        assert main(["--config-path", config, "get", "name"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "shop"

    def test_process_setting_overrides(self, config, capsys):
        assert main(["--config-path", config, "-D", "name=outlet", "get", "name"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "outlet"

    def test_process_setting_selects_environment(self, config, capsys):
        argv = ["--config-path", config, "-D", "envscope.environment=production", "get", "email"]
        assert main(argv) == EXIT_OK
        assert capsys.readouterr().out.strip() == "prod@example.com"

    def test_container_entry_selects_environment(self, config, capsys):
        argv = ["--config-path", config, "--container", "envscope.environment=production", "get", "email"]
        assert main(argv) == EXIT_OK
        assert capsys.readouterr().out.strip() == "prod@example.com"

    def test_missing_key(self, config, capsys):
        assert main(["--config-path", config, "get", "nope"]) == EXIT_NOT_FOUND
        assert "MISSING_KEY" in capsys.readouterr().err

    def test_default(self, config, capsys):
        assert main(["--config-path", config, "get", "nope", "--default", "x"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "x"

    def test_env_file(self, config, tmp_path, capsys):
        env_file = tmp_path / "settings.env"
        env_file.write_text("name=from-dotenv\n")

        assert main(["--config-path", config, "--env-file", str(env_file), "get", "name"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "from-dotenv"

    def test_bad_setting_syntax(self, config):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config-path", config, "-D", "novalue", "get", "name"])
        assert exc_info.value.code == 2


class TestResource:
    def test_environment_scoped(self, config, write_resource, capsys, monkeypatch):
        path = write_resource("production/app.xml")
        monkeypatch.setenv("ENVSCOPE_ENV", "production")

        assert main(["--config-path", config, "resource", "/app.xml"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == f"{path} (environment)"

    def test_separate_resource_path(self, config, tmp_path, capsys):
        resources = tmp_path / "res"
        resources.mkdir()
        (resources / "app.xml").write_text("")

        argv = ["--config-path", config, "--resource-path", str(resources), "resource", "app.xml"]
        assert main(argv) == EXIT_OK
        assert capsys.readouterr().out.strip() == f"{resources / 'app.xml'} (default)"

    def test_not_found(self, config, capsys):
        assert main(["--config-path", config, "resource", "/app.xml"]) == EXIT_NOT_FOUND
        assert "RESOURCE_NOT_FOUND" in capsys.readouterr().err

    def test_invalid_path(self, config):
        assert main(["--config-path", config, "resource", "../etc/passwd"]) == EXIT_CONFIG


class TestFailures:
    def test_malformed_properties(self, write_properties, config_dir, capsys):
        write_properties("environment", "=broken\n")

        assert main(["--config-path", str(config_dir), "show"]) == EXIT_CONFIG
        assert "PROPERTIES_PARSE_ERROR" in capsys.readouterr().err

    def test_path_like_environment_name(self, config, capsys, monkeypatch):
        monkeypatch.setenv("ENVSCOPE_ENV", "../secret")

        assert main(["--config-path", config, "show"]) == EXIT_CONFIG
        assert "INVALID_ENVIRONMENT_NAME" in capsys.readouterr().err

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
