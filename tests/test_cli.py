from __future__ import annotations

import pytest
from click.testing import CliRunner

from lostbot import __main__ as cli


@pytest.fixture
def runner(monkeypatch, config):
    monkeypatch.setattr(cli, "get_config", lambda: config)
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    return CliRunner()


def test_check_passes_with_complete_config(runner):
    result = runner.invoke(cli.main, ["check"])
    assert result.exit_code == 0, result.output
    assert "LOST FAMILY BOT CONFIGURATION" in result.output
    assert "Configuration check complete" in result.output


def test_check_fails_on_missing_token(runner, config):
    config.discord.token = ""
    result = runner.invoke(cli.main, ["check"])
    assert result.exit_code == 1
    assert "Discord token not set" in result.output


def test_run_refuses_without_token(runner, config):
    config.discord.token = ""
    result = runner.invoke(cli.main, ["run", "--no-keepalive"])
    assert result.exit_code == 1
    assert "DISCORD_TOKEN" in result.output


def test_log_file_option_overrides_config(monkeypatch, config, tmp_path):
    seen = {}
    monkeypatch.setattr(cli, "get_config", lambda: config)
    monkeypatch.setattr(cli, "setup_logging", lambda verbose, log_file, quiet: seen.update(log_file=log_file))

    result = CliRunner().invoke(cli.main, ["--log-file", str(tmp_path / "bot.log"), "check"])

    assert result.exit_code == 0, result.output
    assert seen["log_file"] == tmp_path / "bot.log"



def test_check_passes_without_optional_channel(runner, config):
    config.discord.global_channel_id = None
    result = runner.invoke(cli.main, ["check"])
    assert result.exit_code == 0, result.output
    assert "daily announcement will be skipped" in result.output
