import logging
import os
from dataclasses import dataclass
from datetime import datetime
from subprocess import run
from typing import Iterable, Optional

import questionary

from awsctx.constants import CURRENT_PROFILE_SUFFIX, PICKER_MESSAGE
from awsctx.context.exceptions import (
    NoProfilesFound,
    NotAnSSOProfile,
    SelectionCancelled,
    UnknownProfile,
)
from awsctx.services.aws.config_service import AWSConfigService, sort_key
from awsctx.services.aws.constants import AWS_SSO_LOGIN_ARGS
from awsctx.services.aws.sso_cache import is_sso_session_valid
from awsctx.settings import Settings
from awsctx.types import SimpleNestedDict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileChoice:
    value: str
    label: str
    is_current: bool = False


def load_profiles(config: AWSConfigService) -> tuple[set[str], SimpleNestedDict]:
    profiles, sso_profiles = config.load()
    if not profiles:
        raise NoProfilesFound("No AWS profiles found.")
    return profiles, sso_profiles


def ordered_choices(profiles: Iterable[str], current: str) -> list[ProfileChoice]:
    """Profiles as the picker shows them: case-insensitively sorted by label, current one annotated"""
    choices = [
        ProfileChoice(
            value=profile,
            label=(
                f"{profile}{CURRENT_PROFILE_SUFFIX}" if profile == current else profile
            ),
            is_current=profile == current,
        )
        for profile in profiles
    ]
    return sorted(choices, key=lambda choice: (sort_key(choice.label), choice.label))


def _title(choice: ProfileChoice):
    if choice.is_current:
        return [("", choice.value), ("fg:ansibrightblack", CURRENT_PROFILE_SUFFIX)]
    return choice.label


def pick_profile(choices: list[ProfileChoice], message: str = PICKER_MESSAGE) -> str:
    """Ask the operator for a profile. Raises SelectionCancelled on Ctrl-C."""
    selected = questionary.select(
        message,
        choices=[
            questionary.Choice(title=_title(choice), value=choice.value)
            for choice in choices
        ],
        default=next((c.value for c in choices if c.is_current), None),
    ).ask()
    if selected is None:
        raise SelectionCancelled()
    return selected


def requires_login(
    selected_profile: str,
    sso_profiles: SimpleNestedDict,
    cache_dir,
    now: Optional[datetime] = None,
) -> bool:
    """Only SSO profiles ever need a login, and only when no cached session is still good"""
    if selected_profile not in sso_profiles:
        logger.debug(f"{selected_profile} is not an SSO profile")
        return False
    logger.debug(
        f"{selected_profile} is an SSO profile: {sso_profiles[selected_profile]}"
    )
    return not is_sso_session_valid(cache_dir, now=now)


def login(profile: str, settings: Settings) -> int:
    """Run `aws sso login` for profile on the current terminal and return its exit code"""
    logger.debug(f"Running {settings.aws_executable} sso login for {profile}")
    proc = run([settings.aws_executable, *AWS_SSO_LOGIN_ARGS, profile])
    return proc.returncode


def hand_off_to_shell(settings: Settings):
    logger.debug(f"Replacing this process with {settings.shell}")
    os.execvp(settings.shell, [settings.shell])


def choose_profile(
    profile: Optional[str], profiles: set[str], current_profile: str
) -> str:
    """PROFILE when given on the command line, otherwise whatever the operator picks"""
    if profile is None:
        return pick_profile(ordered_choices(profiles, current_profile))
    if profile not in profiles:
        raise UnknownProfile(profile)
    return profile


def sso_profile_to_refresh(
    profile: Optional[str], sso_profiles: SimpleNestedDict, current_profile: str
) -> str:
    target = profile or current_profile
    logger.debug(f"Refresh requested for {target}")
    if target not in sso_profiles:
        raise NotAnSSOProfile(target)
    return target
