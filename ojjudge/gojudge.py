"""HTTP client for the sandbox service and the commands sent to it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from ojjudge.judge_types import GoJudgeStatus, JudgeLanguage, JudgeStatus

SPECIAL_JUDGE_EXIT_WA = 1
SPECIAL_JUDGE_EXIT_PE = 2

_ENV = ["PATH=/usr/bin:/bin"]
_STDERR_LIMIT = 10240
_PROC_LIMIT = 50
_TIMEOUT = 60


class GoJudgeError(RuntimeError):
    """The sandbox could not be reached or answered unexpectedly."""


def _status(value: Any) -> GoJudgeStatus | str:
    try:
        return GoJudgeStatus(value)
    except ValueError:
        return str(value)


@dataclass
class RunResult:
    """What the sandbox reports for one finished command."""

    status: GoJudgeStatus | str
    exit_status: int = 0
    stdout: str = ""
    stderr: str = ""
    time: int = 0
    memory: int = 0
    file_ids: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RunResult":
        """Build a result from one element of the sandbox's JSON reply."""
        files = raw.get("files") or {}
        return cls(
            status=_status(raw.get("status", "")),
            exit_status=int(raw.get("exitStatus", 0) or 0),
            stdout=str(files.get("stdout", "")),
            stderr=str(files.get("stderr", "")),
            time=int(raw.get("time", 0) or 0),
            memory=int(raw.get("memory", 0) or 0),
            file_ids=dict(raw.get("fileIds") or {}),
        )


def _join(base: str, *parts: str) -> str:
    return "/".join([base.rstrip("/"), *(part.strip("/") for part in parts)])


class GoJudgeClient:
    """Talks to the sandbox's run and file endpoints."""

    def __init__(self, base_url: str, session: requests.Session | None = None) -> None:
        self.base_url = base_url
        self.session = session if session is not None else requests.Session()

    def run(self, command: dict[str, Any]) -> RunResult:
        """Run a single command and return its result."""
        url = _join(self.base_url, "run")
        try:
            response = self.session.post(url, json={"cmd": [command]}, timeout=_TIMEOUT)
        except requests.RequestException as exc:
            raise GoJudgeError(f"run request failed: {exc}") from exc
        if response.status_code != 200:
            raise GoJudgeError(f"unexpected status code: {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise GoJudgeError("failed to decode response") from exc
        if not isinstance(payload, list):
            raise GoJudgeError("failed to decode response")
        if len(payload) != 1:
            raise GoJudgeError(f"unexpected response length: {len(payload)}")
        if not isinstance(payload[0], dict):
            raise GoJudgeError("failed to decode response")
        return RunResult.from_dict(payload[0])

    def delete_file(self, file_id: str) -> None:
        """Remove a cached file from the sandbox."""
        try:
            self.session.delete(_join(self.base_url, "file", file_id), timeout=_TIMEOUT)
        except requests.RequestException as exc:
            raise GoJudgeError(f"failed to delete file: {exc}") from exc

    def clean(self) -> list[str]:
        """Delete every cached file and return the ids that were removed."""
        try:
            response = self.session.get(_join(self.base_url, "file"), timeout=_TIMEOUT)
        except requests.RequestException as exc:
            raise GoJudgeError(f"failed to list files: {exc}") from exc
        try:
            files = response.json()
        except ValueError as exc:
            raise GoJudgeError("failed to decode file list") from exc
        if not isinstance(files, dict):
            raise GoJudgeError("failed to decode file list")
        removed = []
        for file_id in files:
            self.delete_file(file_id)
            removed.append(file_id)
        return removed


def _command(
    args: list[str],
    input_content: str,
    out_limit: int,
    cpu_limit: int,
    memory_limit: int,
    copy_in: dict[str, Any],
) -> dict[str, Any]:
    return {
        "args": args,
        "env": list(_ENV),
        "files": [
            {"content": input_content},
            {"name": "stdout", "max": out_limit},
            {"name": "stderr", "max": _STDERR_LIMIT},
        ],
        "cpuLimit": cpu_limit,
        "memoryLimit": memory_limit,
        "procLimit": _PROC_LIMIT,
        "copyIn": copy_in,
    }


def build_run_command(
    language: JudgeLanguage,
    code: str,
    exec_file_ids: dict[str, str] | None,
    input_content: str,
    out_limit: int,
    cpu_limit: int,
    memory_limit: int,
) -> dict[str, Any]:
    """Build the sandbox command that runs a submission on one input."""
    exec_file_ids = exec_file_ids or {}
    if language in (JudgeLanguage.C, JudgeLanguage.CPP, JudgeLanguage.PASCAL):
        if "a" not in exec_file_ids:
            raise GoJudgeError("fileId not found")
        args = ["a"]
        copy_in: dict[str, Any] = {"a": {"fileId": exec_file_ids["a"]}}
    elif language == JudgeLanguage.JAVA:
        if "Main.class" not in exec_file_ids:
            raise GoJudgeError("fileId not found")
        args = ["java", "Main"]
        copy_in = {"Main.class": {"fileId": exec_file_ids["Main.class"]}}
    elif language == JudgeLanguage.PYTHON:
        args = ["python3", "a.py"]
        copy_in = {"a.py": {"content": code}}
    else:
        raise GoJudgeError(f"language not support: {language}")
    return _command(args, input_content, out_limit, cpu_limit, memory_limit, copy_in)


def build_special_command(
    special_file_id: str,
    input_content: str,
    expected: str,
    actual: str,
    cpu_limit: int,
    memory_limit: int,
) -> dict[str, Any]:
    """Build the command that runs a checker on input, answer and output."""
    copy_in = {
        "spj": {"fileId": special_file_id},
        "test.in": {"content": input_content},
        "test.out": {"content": expected},
        "user.out": {"content": actual},
    }
    return _command(
        ["spj", "test.in", "test.out", "user.out"],
        input_content,
        _STDERR_LIMIT,
        cpu_limit,
        memory_limit,
        copy_in,
    )


_RUN_STATUSES = {
    GoJudgeStatus.ACCEPTED: JudgeStatus.AC,
    GoJudgeStatus.SIGNALLED: JudgeStatus.RE,
    GoJudgeStatus.NONZERO_EXIT: JudgeStatus.RE,
    GoJudgeStatus.INTERNAL_ERROR: JudgeStatus.JUDGE_FAIL,
    GoJudgeStatus.OUTPUT_LIMIT: JudgeStatus.OLE,
    GoJudgeStatus.FILE_ERROR: JudgeStatus.OLE,
    GoJudgeStatus.MEMORY_LIMIT: JudgeStatus.MLE,
    GoJudgeStatus.TIME_LIMIT: JudgeStatus.TLE,
}


def map_run_status(status: GoJudgeStatus | str) -> JudgeStatus:
    """Translate a sandbox status of a submission run into a verdict."""
    return _RUN_STATUSES.get(_status(status), JudgeStatus.JUDGE_FAIL)


def map_special_status(status: GoJudgeStatus | str, exit_status: int) -> JudgeStatus:
    """Translate a checker's sandbox status and exit code into a verdict."""
    status = _status(status)
    if status == GoJudgeStatus.ACCEPTED:
        return JudgeStatus.AC
    if status == GoJudgeStatus.NONZERO_EXIT:
        if exit_status == SPECIAL_JUDGE_EXIT_WA:
            return JudgeStatus.WA
        if exit_status == SPECIAL_JUDGE_EXIT_PE:
            return JudgeStatus.PE
        return JudgeStatus.RE
    return JudgeStatus.JUDGE_FAIL