"""Advisory checks run before a release.

These are external commands, e.g. dependency staleness scanners. A failing
check is logged as a warning and reported, but never blocks the release.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckResult:
    command: str
    returncode: int
    output: str

    @property
    def passed(self) -> bool:
        return self.returncode == 0


def run_advisory_checks(commands: Sequence[str], cwd: Path) -> list[CheckResult]:
    """Run each command in ``cwd`` and collect the results."""
    results = []
    for command in commands:
        logger.info("running advisory check: %s", command)
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            result = CheckResult(command=command, returncode=-1, output=str(e))
        else:
            output = (completed.stdout + completed.stderr).strip()
            result = CheckResult(command=command, returncode=completed.returncode, output=output)

        if not result.passed:
            logger.warning(
                "advisory check failed (not blocking): %s (exit code %d)",
                command,
                result.returncode,
            )
        results.append(result)
    return results
