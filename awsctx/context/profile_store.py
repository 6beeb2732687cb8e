import logging
import os
import tempfile
from pathlib import PosixPath

from awsctx.constants import DEFAULT_PROFILE

logger = logging.getLogger(__name__)


class CurrentProfileStore:
    """The last profile picked, kept as the bare name in a single file"""

    def __init__(self, file: PosixPath):
        self.file = file

    def read(self) -> str:
        if not self.file.exists():
            return DEFAULT_PROFILE
        with self.file.open(encoding="utf-8", newline="") as f:
            return f.read()

    def write(self, profile: str):
        self.file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.file.parent, prefix=f".{self.file.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(profile)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.file)
        except BaseException:
            PosixPath(tmp_path).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved current profile {profile!r} to {self.file}")
