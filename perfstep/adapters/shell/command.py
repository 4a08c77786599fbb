"""
Process runner — the SINGLE PLACE where the build step spawns processes.

Probes and provisioning run with output suppressed (``DEVNULL``). The
test run is streamed: stdout is relayed line by line from a drain
thread while the caller waits, and stderr is relayed after a non-zero
exit. The child never gets input; its stdin is closed from the start.

Each child leads its own session, so a stop (timeout or interrupt)
signals the whole process group: bzt together with the JMeter or
Gatling workers it spawned, which share its output pipes.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
import threading
import time
from typing import IO

from perfstep.adapters.base import BuildContext, CommandRunner

logger = logging.getLogger(__name__)

# Seconds a process group gets to exit after SIGTERM before it is killed
TERMINATE_GRACE = 5.0

# Seconds to wait for output relays once the group has been stopped
DRAIN_GRACE = 5.0


class ProcessRunner(CommandRunner):
    """Run commands with ``subprocess.Popen`` and relay their output.

    Never raises: launch errors, non-zero exits, timeouts, and
    interrupted waits all come back as False. On timeout or interrupt
    the child's process group is stopped rather than left running.
    """

    def run(
        self,
        argv: list[str],
        context: BuildContext,
        suppress_output: bool,
        timeout: float | None = None,
    ) -> bool:
        log = context.log
        if not argv:
            logger.warning("Refusing to run an empty command")
            return False

        sink = subprocess.DEVNULL if suppress_output else subprocess.PIPE
        logger.debug("Executing: %s (cwd=%s)", argv, context.working_dir)

        # ── Launch ──
        try:
            proc = subprocess.Popen(
                argv,
                cwd=str(context.working_dir),
                stdin=subprocess.DEVNULL,
                stdout=sink,
                stderr=sink,
                text=True,
                errors="replace",
                start_new_session=True,
            )
        except OSError as e:
            if not suppress_output:
                log.error("Cannot start %s: %s", argv[0], e)
            return False
        except Exception:
            logger.exception("Subprocess error: %s", argv)
            if not suppress_output:
                log.error("Cannot start %s", argv[0])
            return False

        drain: threading.Thread | None = None
        if not suppress_output:
            drain = threading.Thread(
                target=relay_stream,
                args=(proc.stdout, log, logging.INFO),
                name=f"drain-{proc.pid}",
                daemon=True,
            )
            drain.start()

        # ── Wait (exit, then the full stdout) ──
        deadline = None if timeout is None else time.monotonic() + timeout
        try:
            code = proc.wait(timeout=timeout)
            if drain is not None:
                # A worker that outlives bzt can keep stdout open
                drain.join(_remaining(deadline))
                if drain.is_alive():
                    raise subprocess.TimeoutExpired(argv, timeout)
            if code != 0 and not suppress_output:
                log.error("%s exited with code %d", argv[0], code)
                relay_stream(proc.stderr, log, logging.WARNING)
            elif proc.stderr is not None:
                proc.stderr.close()
        except subprocess.TimeoutExpired:
            _stop(proc)
            if not suppress_output:
                log.error("%s did not finish within %ss, killed", argv[0], timeout)
                _abandon(proc, drain, log)
            return False
        except KeyboardInterrupt:
            _stop(proc)
            if not suppress_output:
                log.error("Interrupted while waiting for %s, terminated", argv[0])
                _abandon(proc, drain, log)
            return False

        return code == 0


def relay_stream(source: IO[str] | None, log: logging.Logger, level: int) -> None:
    """Copy every line of ``source`` to ``log``, then close it."""
    if source is None:
        return
    try:
        for line in source:
            log.log(level, line.rstrip("\r\n"))
    except (OSError, ValueError) as e:
        log.error("Reading of process output caused next exception: %s", e)
    finally:
        source.close()


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


def _signal_group(proc: subprocess.Popen, sig: int) -> None:
    """Send ``sig`` to every process in the child's session."""
    if sys.platform == "win32":
        # no process groups here; only the direct child can be reached
        if proc.poll() is None:
            proc.terminate()
        return
    try:
        os.killpg(proc.pid, sig)
    except (ProcessLookupError, PermissionError):
        # group already gone
        pass


def _stop(proc: subprocess.Popen) -> None:
    """Terminate the child's process group, escalating to kill.

    The group is signalled even when the direct child has already
    exited, since its workers may still be running.
    """
    _signal_group(proc, signal.SIGTERM)
    try:
        proc.wait(timeout=TERMINATE_GRACE)
    except subprocess.TimeoutExpired:
        logger.warning("pid %d ignored SIGTERM, killing", proc.pid)
    if sys.platform != "win32":
        _signal_group(proc, signal.SIGKILL)
    elif proc.poll() is None:
        proc.kill()
    proc.wait()


def _abandon(
    proc: subprocess.Popen,
    drain: threading.Thread | None,
    log: logging.Logger,
) -> None:
    """Flush what the stopped group left behind into the build log.

    Both relays are bounded: a process outside the group may still
    hold the pipes open.
    """
    if drain is not None:
        drain.join(DRAIN_GRACE)
    if proc.stderr is None or proc.stderr.closed:
        return
    errors = threading.Thread(
        target=relay_stream,
        args=(proc.stderr, log, logging.WARNING),
        name=f"stderr-{proc.pid}",
        daemon=True,
    )
    errors.start()
    errors.join(DRAIN_GRACE)
