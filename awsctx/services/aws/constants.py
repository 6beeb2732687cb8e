from pathlib import PosixPath

AWS_DIR_PATH = PosixPath("~").expanduser() / ".aws"
AWS_ACCESS_TOKEN_CACHE_DIR_PATH = AWS_DIR_PATH / "sso/cache"
AWS_CONFIG_FILE_PATH = AWS_DIR_PATH / "config"
AWS_CREDENTIAL_FILE_PATH = AWS_DIR_PATH / "credentials"

BOTOCORE_CONFIG_FILE_VARIABLE = "config_file"
BOTOCORE_CREDENTIALS_FILE_VARIABLE = "credentials_file"

PROFILE_SECTION_PREFIX = "profile "

AWS_SSO_START_URL_KEY = "sso_start_url"
AWS_SSO_ACCOUNT_ID_KEY = "sso_account_id"
AWS_SSO_ROLE_KEY = "sso_role_name"
AWS_SSO_REQUIRED_KEYS = (
    AWS_SSO_START_URL_KEY,
    AWS_SSO_ACCOUNT_ID_KEY,
    AWS_SSO_ROLE_KEY,
)

SSO_CACHE_FILE_SUFFIX = ".json"
SSO_CACHE_ACCESS_TOKEN_KEY = "accessToken"
SSO_CACHE_START_URL_KEY = "startUrl"
SSO_CACHE_EXPIRES_AT_KEY = "expiresAt"

AWS_SSO_LOGIN_ARGS = ["sso", "login", "--profile"]

# never matches a real header, so a literal [DEFAULT] stays an ordinary profile
CONFIGPARSER_DEFAULT_SECTION = "\x00"
