import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PosixPath
from typing import Optional, Union

from dateutil.parser import ParserError, isoparse, parse

from awsctx.services.aws.constants import (
    SSO_CACHE_ACCESS_TOKEN_KEY,
    SSO_CACHE_EXPIRES_AT_KEY,
    SSO_CACHE_FILE_SUFFIX,
    SSO_CACHE_START_URL_KEY,
)

logger = logging.getLogger(__name__)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def parse_expiry(raw) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    try:
        return _as_utc(isoparse(raw))
    except ValueError:
        pass
    # older CLI releases wrote timestamps like 2022-08-23T20:10:10UTC
    try:
        return _as_utc(parse(raw))
    except (ParserError, ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    expires_at: str
    kind = "access token"


@dataclass(frozen=True)
class SSOSession:
    start_url: str
    expires_at: str
    kind = "SSO session"


@dataclass(frozen=True)
class Unrecognized:
    kind = "unrecognized"


CacheEntry = Union[AccessToken, SSOSession, Unrecognized]


def decode_cache_entry(data) -> CacheEntry:
    """Access token shape first, then session shape, then nothing"""
    if not isinstance(data, dict):
        return Unrecognized()
    expires_at = data.get(SSO_CACHE_EXPIRES_AT_KEY)
    if not expires_at:
        return Unrecognized()
    if data.get(SSO_CACHE_ACCESS_TOKEN_KEY):
        return AccessToken(
            access_token=data[SSO_CACHE_ACCESS_TOKEN_KEY], expires_at=expires_at
        )
    if data.get(SSO_CACHE_START_URL_KEY):
        return SSOSession(
            start_url=data[SSO_CACHE_START_URL_KEY], expires_at=expires_at
        )
    return Unrecognized()


def is_unexpired(entry: CacheEntry, now: datetime) -> bool:
    if isinstance(entry, Unrecognized):
        return False
    expiry = parse_expiry(entry.expires_at)
    if expiry is None:
        logger.debug(f"Unparseable expiry {entry.expires_at!r} on {entry.kind}")
        return False
    return expiry > _as_utc(now)


def cache_files(cache_dir: PosixPath) -> list[PosixPath]:
    return sorted(
        f for f in cache_dir.glob(f"*{SSO_CACHE_FILE_SUFFIX}") if f.is_file()
    )


def read_cache_entry(file: PosixPath) -> CacheEntry:
    """Decode one cache file. Anything unreadable decodes as Unrecognized."""
    try:
        with file.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Failed to parse cache file {file.name}: {e}")
        return Unrecognized()
    return decode_cache_entry(data)


def is_sso_session_valid(
    cache_dir: PosixPath, now: Optional[datetime] = None
) -> bool:
    """True when any cached token or session in cache_dir expires strictly after now"""
    now = _as_utc(now or datetime.now(tz=timezone.utc))
    logger.debug(f"Checking SSO session validity in {cache_dir}")
    if not cache_dir.is_dir():
        logger.debug(f"SSO cache directory {cache_dir} does not exist")
        return False

    files = cache_files(cache_dir)
    logger.debug(f"Found {len(files)} cache files")
    valid_files = []
    for file in files:
        entry = read_cache_entry(file)
        if isinstance(entry, Unrecognized):
            logger.debug(f"{file.name} does not contain token data")
            continue
        valid = is_unexpired(entry, now)
        expiry = parse_expiry(entry.expires_at)
        time_left = expiry - now if expiry else None
        logger.debug(
            f"{entry.kind} found in {file.name}: expires {entry.expires_at},"
            + f" valid={valid}, time left {time_left}"
        )
        if valid:
            valid_files.append(file.name)

    is_valid = len(valid_files) > 0
    logger.debug(f"SSO session validation result: {is_valid} (valid: {valid_files})")
    return is_valid
