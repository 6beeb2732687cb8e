import logging
from configparser import Error as ConfigParserError
from configparser import RawConfigParser
from pathlib import PosixPath

from awsctx.services.aws.constants import (
    AWS_SSO_REQUIRED_KEYS,
    CONFIGPARSER_DEFAULT_SECTION,
    PROFILE_SECTION_PREFIX,
)
from awsctx.services.aws.exceptions import ConfigParseError
from awsctx.settings import Settings
from awsctx.types import SimpleNestedDict

logger = logging.getLogger(__name__)


def load_config_from_file(file: PosixPath) -> SimpleNestedDict:
    """Parse an INI file into {section header: {key: value}}.

    A missing file reads as empty. A malformed one raises ConfigParseError; nothing is partially parsed.
    """
    if not file.exists():
        logger.debug(f"{file} does not exist, treating it as empty")
        return {}
    config = RawConfigParser(
        default_section=CONFIGPARSER_DEFAULT_SECTION, interpolation=None
    )
    try:
        with file.open(encoding="utf-8") as f:
            config.read_file(f, source=str(file))
    except (ConfigParserError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Could not parse {file}: {e}", path=file) from e
    return {
        section: {k: v for k, v in config[section].items()}
        for section in config.sections()
    }


def strip_profile_prefix(section: str) -> str:
    while section.startswith(PROFILE_SECTION_PREFIX):
        section = section.removeprefix(PROFILE_SECTION_PREFIX)
    return section


def build_profile_names(
    credentials_sections: SimpleNestedDict, config_sections: SimpleNestedDict
) -> set[str]:
    """Every profile named by either file. Credentials headers are taken as-is, config headers lose `profile `."""
    profiles = {section.strip() for section in credentials_sections}
    profiles.update(
        strip_profile_prefix(section.strip()).strip() for section in config_sections
    )
    profiles.discard("")
    return profiles


def classify_sso_profiles(config_sections: SimpleNestedDict) -> SimpleNestedDict:
    """Profiles in the config file carrying a start url, account id and role name.

    Only the config file is consulted, so it alone decides which profiles are SSO backed.
    """
    sso_profiles = {}
    for section, values in config_sections.items():
        profile_name = strip_profile_prefix(section.strip()).strip()
        if all(values.get(key) for key in AWS_SSO_REQUIRED_KEYS):
            sso_profiles[profile_name] = values
    return sso_profiles


def sort_key(display_name: str) -> str:
    return display_name.lower()


class AWSConfigService:
    """Reads the shared credentials and config files afresh on every call"""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def credentials_sections(self) -> SimpleNestedDict:
        return load_config_from_file(self.settings.credentials_file)

    @property
    def config_sections(self) -> SimpleNestedDict:
        return load_config_from_file(self.settings.config_file)

    def load(self) -> tuple[set[str], SimpleNestedDict]:
        """Parse both files once and return (profile names, sso profiles)"""
        credentials = self.credentials_sections
        config = self.config_sections
        profiles = build_profile_names(credentials, config)
        sso_profiles = classify_sso_profiles(config)
        logger.debug(
            f"Loaded {len(profiles)} profiles ({len(sso_profiles)} SSO) from"
            + f" {self.settings.credentials_file} and {self.settings.config_file}"
        )
        return profiles, sso_profiles

    @property
    def profiles(self) -> set[str]:
        profiles, _ = self.load()
        return profiles

    @property
    def sso_profiles(self) -> SimpleNestedDict:
        return classify_sso_profiles(self.config_sections)
