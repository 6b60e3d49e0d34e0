"""
Command execution: the process runner.

Spawns one external process, captures its stdout and stderr on dedicated
reader threads, optionally mirrors the bytes live to this process's own
stdout/stderr, and returns a single RunResult.

One call is one attempt; nothing here retries.
"""

import logging
import subprocess
import sys
import threading
from typing import IO, Optional, Sequence

from ..models.process import ProcessInvocation, RunResult
from ..validation import SpawnFailure, handle_subprocess_error, ErrorSeverity
from .processes import terminate_process_tree
from .streams import DEFAULT_CHUNK_SIZE, SharedLog, StreamReader, terminal_sink

logger = logging.getLogger(__name__)


def spawn(invocation: ProcessInvocation, **popen_kwargs) -> subprocess.Popen:
    """
    Start a process, converting every start-up failure into SpawnFailure.

    Raises:
        SpawnFailure: If the executable is missing or cannot be executed
    """
    logger.debug(f"Spawning: {invocation.describe()}")
    try:
        return subprocess.Popen(invocation.argv, **popen_kwargs)
    except (OSError, ValueError) as e:
        error = SpawnFailure(invocation.executable, e)
        handle_subprocess_error(
            error,
            invocation.describe(),
            severity=ErrorSeverity.DEBUG,
            reraise=False,
            logger=logger,
        )
        raise error from e


def _feed_stdin(process: subprocess.Popen, payload: bytes) -> None:
    try:
        process.stdin.write(payload)
    except (BrokenPipeError, OSError) as e:
        logger.debug(f"Child closed stdin early: {e}")
    finally:
        try:
            process.stdin.close()
        except (BrokenPipeError, OSError):
            pass


class ProcessRunner:
    """
    Runs external processes and captures their output.

    Args:
        chunk_size: Bytes per pipe read
        stdout: Text stream receiving mirrored stdout (defaults to sys.stdout)
        stderr: Text stream receiving mirrored stderr (defaults to sys.stderr)
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE,
                 stdout: Optional[IO] = None, stderr: Optional[IO] = None):
        self.chunk_size = chunk_size
        self._stdout = stdout
        self._stderr = stderr

    def run(self, executable: str, args: Sequence[str] = (), stdin: Optional[bytes] = None,
            timeout: Optional[float] = None) -> RunResult:
        """
        Run a process to completion without mirroring.

        Raises:
            SpawnFailure: If the process could not be started
            subprocess.TimeoutExpired: If ``timeout`` elapsed; the process tree is terminated first
        """
        return self._run(ProcessInvocation(executable, tuple(args), stdin), mirror=False, timeout=timeout)

    def run_streaming(self, executable: str, args: Sequence[str] = (),
                      stdin: Optional[bytes] = None) -> RunResult:
        """
        Run a process while mirroring its output live to the terminal.

        Raises:
            SpawnFailure: If the process could not be started
        """
        return self._run(ProcessInvocation(executable, tuple(args), stdin), mirror=True, timeout=None)

    def run_invocation(self, invocation: ProcessInvocation, mirror: bool = False,
                       timeout: Optional[float] = None) -> RunResult:
        return self._run(invocation, mirror=mirror, timeout=timeout)

    def _run(self, invocation: ProcessInvocation, mirror: bool,
             timeout: Optional[float]) -> RunResult:
        process = spawn(
            invocation,
            stdin=subprocess.PIPE if invocation.stdin is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

        raw_log = SharedLog()
        stdout_sinks = [raw_log.append]
        stderr_sinks = [raw_log.append]
        if mirror:
            stdout_sinks.append(terminal_sink(self._stdout or sys.stdout))
            stderr_sinks.append(terminal_sink(self._stderr or sys.stderr))

        stdout_reader = StreamReader(
            process.stdout, "stdout",
            sinks=stdout_sinks,
            chunk_size=self.chunk_size,
        ).start()
        stderr_reader = StreamReader(
            process.stderr, "stderr",
            sinks=stderr_sinks,
            chunk_size=self.chunk_size,
        ).start()

        writer = None
        if invocation.stdin is not None:
            writer = threading.Thread(
                target=_feed_stdin, args=(process, invocation.stdin),
                name="stdin-writer", daemon=True,
            )
            writer.start()

        try:
            exit_code = process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.debug(f"Timed out after {timeout}s: {invocation.describe()}")
            terminate_process_tree(process.pid, invocation.executable)
            process.wait()
            self._finish(stdout_reader, stderr_reader, writer)
            raise

        self._finish(stdout_reader, stderr_reader, writer)
        logger.debug(f"{invocation.executable} exited with code {exit_code}")
        return RunResult(
            exit_code=exit_code,
            stdout=stdout_reader.text(),
            stderr=stderr_reader.text(),
            raw_log=raw_log.text(),
        )

    @staticmethod
    def _finish(stdout_reader: StreamReader, stderr_reader: StreamReader,
                writer: Optional[threading.Thread]) -> None:
        if writer is not None:
            writer.join()
        for reader in (stdout_reader, stderr_reader):
            reader.join()
            reader.drain()


_default_runner: Optional[ProcessRunner] = None


def get_process_runner() -> ProcessRunner:
    global _default_runner
    if _default_runner is None:
        _default_runner = ProcessRunner()
    return _default_runner


def run_process(executable: str, args: Sequence[str] = (), stdin: Optional[bytes] = None,
                timeout: Optional[float] = None) -> RunResult:
    """Run a process with the shared default runner."""
    return get_process_runner().run(executable, args, stdin=stdin, timeout=timeout)


def run_process_streaming(executable: str, args: Sequence[str] = ()) -> RunResult:
    """Run a process with live output mirroring using the shared default runner."""
    return get_process_runner().run_streaming(executable, args)
