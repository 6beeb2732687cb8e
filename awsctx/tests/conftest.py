import json
from pathlib import PosixPath

import pytest
from pytest_mock import MockerFixture

from awsctx.settings import Settings

DUMMY_CREDENTIALS = """\
[dev]
aws_access_key_id = AKIAEXAMPLEDEV
aws_secret_access_key = secret-dev

[prod]
aws_access_key_id = AKIAEXAMPLEPROD
aws_secret_access_key = secret-prod
"""

DUMMY_CONFIG = """\
[profile dev]
region = us-east-2
output = yaml

[profile staging]
sso_start_url = https://dev_tools.apps.com/start
sso_region = us-east-2
sso_account_id = 012345678903
sso_role_name = Stage-Developer
region = us-east-2
"""


@pytest.fixture
def aws_dir(tmp_path: PosixPath) -> PosixPath:
    path = tmp_path / ".aws"
    path.mkdir()
    return path


@pytest.fixture
def settings(aws_dir: PosixPath) -> Settings:
    return Settings(
        config_file=aws_dir / "config",
        credentials_file=aws_dir / "credentials",
        marker_file=aws_dir / "awsctx",
        sso_cache_dir=aws_dir / "sso/cache",
        shell="/bin/zsh",
        aws_executable="aws",
    )


@pytest.fixture
def write_aws_files(settings: Settings):
    def _write_aws_files(credentials=DUMMY_CREDENTIALS, config=DUMMY_CONFIG):
        if credentials is not None:
            settings.credentials_file.write_text(credentials)
        if config is not None:
            settings.config_file.write_text(config)
        return settings

    return _write_aws_files


@pytest.fixture
def sso_cache(settings: Settings):
    def _sso_cache(name, data):
        settings.sso_cache_dir.mkdir(parents=True, exist_ok=True)
        file = settings.sso_cache_dir / name
        file.write_text(data if isinstance(data, str) else json.dumps(data))
        return file

    return _sso_cache



@pytest.fixture
def mock_settings(mocker: MockerFixture, settings: Settings):
    return mocker.patch(
        "awsctx.main.Settings.from_env",
        return_value=settings,
    )
