"""
Streaming build pipeline.

Runs the primary build tool and feeds its combined output into an optional
formatter process. Three artifacts come out of every run: the raw log (the
primary tool's untouched output), the pretty log (the formatter's output,
only when a formatter ran) and one normalized RunResult.

Threading model: one StreamReader thread per pipe, each owning its own
capture buffer. The raw and pretty logs are SharedLog instances fed by two
readers each. All readers are joined and drained before the result is built.
"""

import logging
import subprocess
import sys
from typing import IO, Optional, Sequence

from ..config import get_config
from ..models.config import EngineConfig
from ..models.process import ProcessInvocation, RunResult
from ..system.commands import ProcessRunner, spawn
from ..system.streams import (
    DEFAULT_CHUNK_SIZE,
    PipeForwarder,
    SharedLog,
    StreamReader,
    terminal_sink,
)
from ..validation import ErrorSeverity, SpawnFailure, handle_subprocess_error
from .diagnostics import extract_errors
from .formatter import FormatterLocator

logger = logging.getLogger(__name__)

_AUTO = object()


class StreamingPipeline:
    """
    Primary tool plus optional formatter, connected by pipes.

    Args:
        formatter_path: Formatter executable; None disables formatting, the
            default resolves it through ``locator``
        locator: Formatter lookup used when no path is given
        runner: Process runner for the unformatted fallback
        chunk_size: Bytes per pipe read
        stdout: Terminal stream receiving mirrored output
        stderr: Terminal stream receiving mirrored error output
    """

    def __init__(self, formatter_path=_AUTO, locator: Optional[FormatterLocator] = None,
                 runner: Optional[ProcessRunner] = None, chunk_size: int = DEFAULT_CHUNK_SIZE,
                 stdout: Optional[IO] = None, stderr: Optional[IO] = None):
        self._formatter_path = formatter_path
        self.chunk_size = chunk_size
        self._stdout = stdout
        self._stderr = stderr
        self.runner = runner or ProcessRunner(chunk_size=chunk_size, stdout=stdout, stderr=stderr)
        self.locator = locator

    @classmethod
    def from_config(cls, config: Optional[EngineConfig] = None, **kwargs) -> "StreamingPipeline":
        config = config or get_config()
        if not config.use_formatter:
            kwargs.setdefault("formatter_path", None)
        kwargs.setdefault("chunk_size", config.chunk_size)
        kwargs.setdefault("locator", FormatterLocator(
            name=config.formatter_name,
            candidates=config.formatter_candidates,
            locator=config.locator,
        ))
        return cls(**kwargs)

    def resolve_formatter(self) -> Optional[str]:
        if self._formatter_path is not _AUTO:
            return self._formatter_path
        locator = self.locator or FormatterLocator(runner=self.runner)
        return locator.resolve()

    def run(self, executable: str, args: Sequence[str] = ()) -> RunResult:
        """
        Run the primary tool to completion.

        The exit code is always the primary tool's; the formatter's status is
        ignored. Non-zero exits come back as a RunResult with diagnostics.

        Raises:
            SpawnFailure: If either process could not be started
        """
        invocation = ProcessInvocation(executable, tuple(args))
        formatter_path = self.resolve_formatter()
        logger.info(f"Running {invocation.executable} ({len(invocation.args)} args), "
                    f"formatter: {formatter_path or 'none'}")

        try:
            if formatter_path:
                result = self._run_formatted(invocation, formatter_path)
            else:
                result = self._run_unformatted(invocation)
        except SpawnFailure as e:
            handle_subprocess_error(e, invocation.describe(), severity=ErrorSeverity.ERROR,
                                    reraise=True, logger=logger)
            raise

        if result.exit_code != 0:
            source = result.pretty_log if result.pretty_log else result.raw_log
            result.errors = extract_errors(source or "")
            logger.info(f"{invocation.executable} failed with exit code {result.exit_code} "
                        f"({len(result.errors)} errors)")
        else:
            logger.info(f"{invocation.executable} finished successfully")
        return result

    def _run_unformatted(self, invocation: ProcessInvocation) -> RunResult:
        result = self.runner.run_invocation(invocation, mirror=True)
        return RunResult(
            exit_code=result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
            raw_log=result.raw_log,
            pretty_log=None,
        )

    def _run_formatted(self, invocation: ProcessInvocation, formatter_path: str) -> RunResult:
        formatter = spawn(
            ProcessInvocation(formatter_path),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        forwarder = PipeForwarder(formatter.stdin)
        pretty_log = SharedLog()
        formatter_readers = [
            StreamReader(formatter.stdout, "formatter-stdout",
                         sinks=[pretty_log.append, terminal_sink(self._stdout or sys.stdout)],
                         chunk_size=self.chunk_size).start(),
            StreamReader(formatter.stderr, "formatter-stderr",
                         sinks=[pretty_log.append, terminal_sink(self._stderr or sys.stderr)],
                         chunk_size=self.chunk_size).start(),
        ]

        try:
            primary = spawn(
                invocation,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except SpawnFailure:
            forwarder.close()
            formatter.wait()
            self._join_and_drain(formatter_readers)
            raise

        raw_log = SharedLog()
        primary_stdout = StreamReader(primary.stdout, "stdout",
                                      sinks=[raw_log.append, forwarder.write],
                                      chunk_size=self.chunk_size).start()
        primary_stderr = StreamReader(primary.stderr, "stderr",
                                      sinks=[raw_log.append, forwarder.write],
                                      chunk_size=self.chunk_size).start()

        exit_code = primary.wait()
        primary_stdout.join()
        primary_stderr.join()

        forwarder.close()
        formatter_code = formatter.wait()
        if formatter_code != 0:
            logger.debug(f"Formatter exited with code {formatter_code}")

        self._join_and_drain([primary_stdout, primary_stderr, *formatter_readers])

        return RunResult(
            exit_code=exit_code,
            stdout=primary_stdout.text(),
            stderr=primary_stderr.text(),
            raw_log=raw_log.text(),
            pretty_log=pretty_log.text(),
        )

    @staticmethod
    def _join_and_drain(readers) -> None:
        for reader in readers:
            reader.join()
            reader.drain()


def run_pipeline(executable: Optional[str] = None, args: Sequence[str] = (),
                 config: Optional[EngineConfig] = None) -> RunResult:
    """
    Run a build tool through the configured pipeline.

    The executable defaults to the configured ``build_tool``.

    Raises:
        SpawnFailure: If the build tool or formatter could not be started
    """
    config = config or get_config()
    return StreamingPipeline.from_config(config).run(executable or config.build_tool, args)
