from rich.theme import Theme

APP_NAME = "awsctx"

DEFAULT_PROFILE = "default"
PROFILE_FILE_NAME = APP_NAME

PICKER_MESSAGE = "Select an AWS profile:"
CURRENT_PROFILE_SUFFIX = " (current)"
SSO_PROFILE_TAG = "sso"

DEBUG_ENV_VAR = "AWSCTX_DEBUG"
PROFILE_FILE_ENV_VAR = "AWSCTX_PROFILE_FILE"
SSO_CACHE_DIR_ENV_VAR = "AWSCTX_SSO_CACHE_DIR"
AWS_CLI_ENV_VAR = "AWSCTX_AWS_CLI"
SHELL_ENV_VAR = "SHELL"

DEFAULT_SHELL = "/bin/sh"
DEFAULT_AWS_CLI = "aws"
TRUTHY_VALUES = {"1", "true", "yes", "on"}

GLOBAL_RICH_CONSOLE_THEME = Theme(
    {"subtle": "grey58", "current": "bold cyan", "sso": "magenta", "error": "red"}
)
