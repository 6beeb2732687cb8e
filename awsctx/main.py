import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from awsctx.constants import APP_NAME, GLOBAL_RICH_CONSOLE_THEME, SSO_PROFILE_TAG
from awsctx.context.exceptions import AWSCtxException, SelectionCancelled
from awsctx.context.profile_store import CurrentProfileStore
from awsctx.context.utils import (
    choose_profile,
    hand_off_to_shell,
    load_profiles,
    login,
    ordered_choices,
    requires_login,
    sso_profile_to_refresh,
)
from awsctx.services.aws.config_service import AWSConfigService
from awsctx.services.aws.exceptions import ConfigParseError
from awsctx.settings import Settings

console = Console(theme=GLOBAL_RICH_CONSOLE_THEME)
err_console = Console(theme=GLOBAL_RICH_CONSOLE_THEME, stderr=True)

app = typer.Typer(
    name=APP_NAME,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(debug: bool):
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=err_console, show_path=debug)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)


def fail(message: str, code: int = 1):
    err_console.print(message, style="error", markup=False, highlight=False)
    raise typer.Exit(code)


def run_login(profile: str, settings: Settings):
    try:
        code = login(profile, settings)
    except OSError as e:
        fail(f"Could not run {settings.aws_executable} sso login: {e}")
    if code != 0:
        logging.debug(f"aws sso login exited with {code}")
        raise typer.Exit(code)


def print_profiles(profiles: set[str], sso_profiles: dict, current_profile: str):
    for choice in ordered_choices(profiles, current_profile):
        name = escape(choice.value)
        line = f"[current]{name}[/]" if choice.is_current else name
        if choice.value in sso_profiles:
            line += f" [sso]({SSO_PROFILE_TAG})[/]"
        console.print(line)


@app.command()
def main(
    profile: Optional[str] = typer.Argument(
        None,
        help="Switch straight to PROFILE instead of picking one",
        show_default=False,
    ),
    current: bool = typer.Option(
        False, "--current", "-c", help="Show the current profile name"
    ),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        "-r",
        help="Run aws sso login for PROFILE (default: the current profile) and exit",
    ),
    list_profiles: bool = typer.Option(
        False, "--list", "-l", help="List the profiles without prompting"
    ),
    debug: bool = typer.Option(False, "--debug", help="Log what awsctx is doing"),
):
    """Pick an AWS profile, log in to SSO if its session has expired, then open a new shell.

    With no arguments the profiles from your credentials and config files are listed for selection.
    """
    settings = Settings.from_env().with_debug(debug)
    configure_logging(settings.debug)
    config = AWSConfigService(settings)
    store = CurrentProfileStore(settings.marker_file)

    try:
        profiles, sso_profiles = load_profiles(config)
    except (ConfigParseError, AWSCtxException) as e:
        fail(f"{e}")
    current_profile = store.read()
    logging.debug(
        f"Initialized with {sorted(profiles)}, SSO profiles {sorted(sso_profiles)},"
        + f" current profile {current_profile!r} ({settings.marker_file})"
    )

    if current:
        typer.echo(current_profile)
        raise typer.Exit()

    if list_profiles:
        print_profiles(profiles, sso_profiles, current_profile)
        raise typer.Exit()

    try:
        if refresh:
            run_login(
                sso_profile_to_refresh(profile, sso_profiles, current_profile), settings
            )
            raise typer.Exit()
        selected = choose_profile(profile, profiles, current_profile)
    except SelectionCancelled:
        raise typer.Exit()
    except AWSCtxException as e:
        fail(f"{e}")

    store.write(selected)

    if requires_login(selected, sso_profiles, settings.sso_cache_dir):
        logging.debug(f"SSO session invalid, logging in with {selected}")
        run_login(selected, settings)
    else:
        logging.debug(f"No login needed for {selected}")

    hand_off_to_shell(settings)
