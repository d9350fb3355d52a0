"""Exit codes for the deploy command.

The tool reports every failure the same way to the shell: the run stops
at the first failing step and exits with a nonzero status. Callers that
need finer detail inspect the ``DeployError.kind`` instead.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are part of the command-line contract and must stay stable:
    - 0: every step (build, upload, cleanup) succeeded
    - 1: any validation, settings, credential, build, upload or cleanup failure
    """

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
