from pathlib import PosixPath

import pytest

from awsctx.services.aws.constants import AWS_CONFIG_FILE_PATH, AWS_CREDENTIAL_FILE_PATH
from awsctx.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("AWS_CONFIG_FILE", "AWS_SHARED_CREDENTIALS_FILE"):
        monkeypatch.delenv(var, raising=False)


def test_from_env__defaults():
    settings = Settings.from_env(environ={})
    assert settings.config_file == AWS_CONFIG_FILE_PATH
    assert settings.credentials_file == AWS_CREDENTIAL_FILE_PATH
    assert settings.marker_file == PosixPath("~/.aws/awsctx").expanduser()
    assert settings.sso_cache_dir == PosixPath("~/.aws/sso/cache").expanduser()
    assert settings.shell == "/bin/sh"
    assert settings.aws_executable == "aws"
    assert settings.debug is False


def test_from_env__aws_cli_file_variables(monkeypatch, tmp_path):
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "my-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "my-creds"))
    settings = Settings.from_env(environ={})
    assert settings.config_file == tmp_path / "my-config"
    assert settings.credentials_file == tmp_path / "my-creds"


def test_from_env__overrides(tmp_path):
    settings = Settings.from_env(
        environ={
            "AWSCTX_PROFILE_FILE": str(tmp_path / "marker"),
            "AWSCTX_SSO_CACHE_DIR": str(tmp_path / "cache"),
            "AWSCTX_AWS_CLI": "/opt/aws/bin/aws",
            "SHELL": "/usr/bin/fish",
            "AWSCTX_DEBUG": "true",
        }
    )
    assert settings.marker_file == tmp_path / "marker"
    assert settings.sso_cache_dir == tmp_path / "cache"
    assert settings.aws_executable == "/opt/aws/bin/aws"
    assert settings.shell == "/usr/bin/fish"
    assert settings.debug is True


@pytest.mark.parametrize(
    "value,expected", [("1", True), ("YES", True), ("0", False), ("", False)]
)
def test_from_env__debug(value, expected):
    assert Settings.from_env(environ={"AWSCTX_DEBUG": value}).debug is expected


def test_with_debug():
    assert Settings().with_debug(True).debug is True
    assert Settings(debug=True).with_debug(False).debug is True
    assert Settings().with_debug(False) == Settings()
