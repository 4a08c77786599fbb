"""
Mock runner — scripted test double for the command runner.

Returns configured results per program (``argv[0]``) without launching
anything, and records every argv it receives.
"""

from __future__ import annotations

from perfstep.adapters.base import BuildContext, CommandRunner


class MockRunner(CommandRunner):
    """Command runner that never spawns processes.

    By default every command succeeds. Results can be set per program
    (matched on ``argv[0]``) or per exact argv.
    """

    def __init__(self, default: bool = True):
        self._default = default
        self._by_program: dict[str, bool] = {}
        self._by_argv: dict[tuple[str, ...], bool] = {}
        self._call_log: list[list[str]] = []
        self._suppressed: list[bool] = []

    @property
    def call_log(self) -> list[list[str]]:
        """Every argv this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def suppressed(self) -> list[bool]:
        """``suppress_output`` flag of each call, parallel to ``call_log``."""
        return self._suppressed

    def set_result(self, program: str, ok: bool) -> None:
        """Configure the result for every command starting with ``program``."""
        self._by_program[program] = ok

    def set_failure(self, program: str) -> None:
        self.set_result(program, False)

    def set_argv_result(self, argv: list[str], ok: bool) -> None:
        """Configure the result for one exact argv (wins over program)."""
        self._by_argv[tuple(argv)] = ok

    def run(
        self,
        argv: list[str],
        context: BuildContext,
        suppress_output: bool,
        timeout: float | None = None,
    ) -> bool:
        self._call_log.append(list(argv))
        self._suppressed.append(suppress_output)

        key = tuple(argv)
        if key in self._by_argv:
            return self._by_argv[key]
        if argv and argv[0] in self._by_program:
            return self._by_program[argv[0]]
        return self._default

    def reset(self) -> None:
        """Clear call log and configured results."""
        self._call_log.clear()
        self._suppressed.clear()
        self._by_program.clear()
        self._by_argv.clear()
