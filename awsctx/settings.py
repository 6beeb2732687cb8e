import os
from dataclasses import dataclass, replace
from pathlib import PosixPath
from typing import Mapping, Optional

from botocore.session import Session

from awsctx.constants import (
    AWS_CLI_ENV_VAR,
    DEBUG_ENV_VAR,
    DEFAULT_AWS_CLI,
    DEFAULT_SHELL,
    PROFILE_FILE_ENV_VAR,
    PROFILE_FILE_NAME,
    SHELL_ENV_VAR,
    SSO_CACHE_DIR_ENV_VAR,
    TRUTHY_VALUES,
)
from awsctx.services.aws.constants import (
    AWS_ACCESS_TOKEN_CACHE_DIR_PATH,
    AWS_CONFIG_FILE_PATH,
    AWS_CREDENTIAL_FILE_PATH,
    AWS_DIR_PATH,
    BOTOCORE_CONFIG_FILE_VARIABLE,
    BOTOCORE_CREDENTIALS_FILE_VARIABLE,
)


def _expand(value) -> PosixPath:
    return PosixPath(os.path.expandvars(str(value))).expanduser()


def _is_truthy(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in TRUTHY_VALUES


def resolve_aws_file(variable: str, default: PosixPath) -> PosixPath:
    """Where the AWS CLI would look for a shared file, honouring AWS_CONFIG_FILE and friends"""
    value = Session().get_config_variable(variable)
    return _expand(value) if value else default


@dataclass(frozen=True)
class Settings:
    config_file: PosixPath = AWS_CONFIG_FILE_PATH
    credentials_file: PosixPath = AWS_CREDENTIAL_FILE_PATH
    marker_file: PosixPath = AWS_DIR_PATH / PROFILE_FILE_NAME
    sso_cache_dir: PosixPath = AWS_ACCESS_TOKEN_CACHE_DIR_PATH
    shell: str = DEFAULT_SHELL
    aws_executable: str = DEFAULT_AWS_CLI
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        return cls(
            config_file=resolve_aws_file(
                BOTOCORE_CONFIG_FILE_VARIABLE, AWS_CONFIG_FILE_PATH
            ),
            credentials_file=resolve_aws_file(
                BOTOCORE_CREDENTIALS_FILE_VARIABLE, AWS_CREDENTIAL_FILE_PATH
            ),
            marker_file=_expand(
                environ.get(PROFILE_FILE_ENV_VAR) or AWS_DIR_PATH / PROFILE_FILE_NAME
            ),
            sso_cache_dir=_expand(
                environ.get(SSO_CACHE_DIR_ENV_VAR) or AWS_ACCESS_TOKEN_CACHE_DIR_PATH
            ),
            shell=environ.get(SHELL_ENV_VAR) or DEFAULT_SHELL,
            aws_executable=environ.get(AWS_CLI_ENV_VAR) or DEFAULT_AWS_CLI,
            debug=_is_truthy(environ.get(DEBUG_ENV_VAR)),
        )

    def with_debug(self, debug: bool) -> "Settings":
        return replace(self, debug=self.debug or debug)
