from __future__ import annotations

import errno
import os
import signal
import sys

import pytest

from dipstick.domain.errors import (
    ErrorKind,
    LaunchFailedError,
    ProcessFailedError,
    RetrievalError,
)
from dipstick.infrastructure.abstract import GenerationSource
from dipstick.infrastructure.retriever import LIST_GENERATIONS_COMMAND, GenerationRetriever

EXIT_FAILURE = 1


def test_default_command_is_the_json_listing() -> None:
    retriever = GenerationRetriever()

    assert retriever.command == ("nixos-rebuild", "list-generations", "--json")
    assert retriever.command == LIST_GENERATIONS_COMMAND


def test_retriever_satisfies_source_protocol() -> None:
    assert isinstance(GenerationRetriever(), GenerationSource)


def test_empty_override_is_rejected() -> None:
    with pytest.raises(ValueError):
        GenerationRetriever(command_override=[])


def test_fetch_returns_stdout_bytes_unchanged(fake_command) -> None:
    payload = b'[{"generation": 1}]\n\xff raw bytes are not touched'
    retriever = GenerationRetriever(command_override=fake_command(stdout=payload))

    assert retriever.fetch() == payload


def test_fetch_does_not_mix_stderr_into_stdout(fake_command) -> None:
    retriever = GenerationRetriever(
        command_override=fake_command(stdout=b"[]", stderr=b"warning: something")
    )

    assert retriever.fetch() == b"[]"


def test_fetch_provides_no_stdin() -> None:
    script = "import sys; data = sys.stdin.read(); sys.stdout.write(repr(data))"
    retriever = GenerationRetriever(command_override=[sys.executable, "-c", script])

    assert retriever.fetch() == b"''"


def test_failed_exit_raises_process_failed_and_discards_stdout(fake_command) -> None:
    retriever = GenerationRetriever(
        command_override=fake_command(
            stdout=b"[]",
            stderr=b"error: permission denied\n",
            returncode=EXIT_FAILURE,
        )
    )

    with pytest.raises(ProcessFailedError) as excinfo:
        retriever.fetch()

    error = excinfo.value
    assert error.kind is ErrorKind.PROCESS_FAILED
    assert error.returncode == EXIT_FAILURE
    assert "permission denied" in error.stderr
    assert "status 1" in error.message
    assert "stdout" not in error.details
    assert isinstance(error, RetrievalError)


@pytest.mark.parametrize("returncode", [1, 2, 127])
def test_any_non_zero_status_is_a_process_failure(fake_command, returncode: int) -> None:
    retriever = GenerationRetriever(command_override=fake_command(returncode=returncode))

    with pytest.raises(ProcessFailedError) as excinfo:
        retriever.fetch()

    assert excinfo.value.returncode == returncode


@pytest.mark.skipif(os.name != "posix", reason="signals are POSIX-only")
def test_killed_process_is_a_process_failure() -> None:
    script = "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"
    retriever = GenerationRetriever(command_override=[sys.executable, "-c", script])

    with pytest.raises(ProcessFailedError) as excinfo:
        retriever.fetch()

    assert excinfo.value.returncode == -signal.SIGKILL
    assert "signal" in excinfo.value.message


def test_missing_binary_raises_launch_failed_with_os_cause(tmp_path) -> None:
    missing = tmp_path / "no-such-nixos-rebuild"
    retriever = GenerationRetriever(command_override=[str(missing), "list-generations", "--json"])

    with pytest.raises(LaunchFailedError) as excinfo:
        retriever.fetch()

    error = excinfo.value
    assert error.kind is ErrorKind.LAUNCH_FAILED
    assert isinstance(error.os_error, FileNotFoundError)
    assert error.__cause__ is error.os_error
    assert error.details["errno"] == errno.ENOENT
    assert error.command[0] == str(missing)


@pytest.mark.skipif(
    os.name != "posix" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="root ignores file permission bits",
)
def test_non_executable_binary_raises_launch_failed(tmp_path) -> None:
    script = tmp_path / "nixos-rebuild"
    script.write_text("#!/bin/sh\necho '[]'\n")
    script.chmod(0o644)
    retriever = GenerationRetriever(command_override=[str(script)])

    with pytest.raises(LaunchFailedError) as excinfo:
        retriever.fetch()

    assert isinstance(excinfo.value.os_error, PermissionError)


def test_each_fetch_spawns_a_fresh_process(tmp_path) -> None:
    counter = tmp_path / "count"
    script = (
        "import pathlib, sys\n"
        f"p = pathlib.Path({str(counter)!r})\n"
        "n = int(p.read_text()) + 1 if p.exists() else 1\n"
        "p.write_text(str(n))\n"
        "sys.stdout.write(str(n))\n"
    )
    retriever = GenerationRetriever(command_override=[sys.executable, "-c", script])

    assert retriever.fetch() == b"1"
    assert retriever.fetch() == b"2"
