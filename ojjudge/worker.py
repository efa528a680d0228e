"""Judging a submission against a problem's test data through the sandbox."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from ojjudge.checker import (
    HINT_LIMIT,
    TaskConfig,
    TaskResult,
    combine_status,
    compare_output,
    ellipsis,
    resolve_job_config,
    resource_limits,
)
from ojjudge.config import ConfigError, load_config
from ojjudge.gojudge import (
    GoJudgeClient,
    GoJudgeError,
    build_run_command,
    build_special_command,
    map_run_status,
    map_special_status,
)
from ojjudge.judge_types import GoJudgeStatus, JudgeLanguage, JudgeStatus

DEFAULT_DATA_ROOT = ".judge_data"

_SPECIAL_LANGUAGES = ("c", "cpp")
_TIMED_STATUSES = (JudgeStatus.AC, JudgeStatus.WA, JudgeStatus.PE)


@dataclass
class JudgeJob:
    """A submission waiting to be judged."""

    id: int
    problem_id: str
    language: JudgeLanguage
    code: str = ""
    author_id: int = 0


@dataclass
class Problem:
    """The limits and test data version of a problem.

    Time limit is in milliseconds, memory limit in kilobytes.
    """

    id: str
    time_limit: int
    memory_limit: int
    judge_md5: str | None = None
    special: bool = False


@dataclass
class JudgeOutcome:
    """The final verdict of a judged submission."""

    status: JudgeStatus
    score: int = 0
    time: int = 0
    memory: int = 0
    tasks: list[TaskResult] = field(default_factory=list)


TaskCallback = Callable[[JudgeJob, TaskResult], Any]


def _read(directory: Path, name: str) -> str:
    if not name:
        return ""
    return (directory / name).read_text(encoding="utf-8", errors="replace")


class Judger:
    """Runs submissions task by task and folds the results into a verdict."""

    def __init__(
        self,
        client: GoJudgeClient,
        data_root: str | Path = DEFAULT_DATA_ROOT,
        on_task: TaskCallback | None = None,
    ) -> None:
        self.client = client
        self.data_root = Path(data_root)
        self.on_task = on_task

    def _report(self, job: JudgeJob, result: TaskResult) -> None:
        if self.on_task is not None:
            self.on_task(job, result)

    def run_task(
        self,
        job: JudgeJob,
        task: TaskConfig,
        data_dir: str | Path,
        special_file_id: str | None,
        exec_file_ids: dict[str, str] | None,
        cpu_limit: int,
        memory_limit: int,
    ) -> TaskResult:
        """Run one task and return its result.

        A task that cannot be run is reported as a judge failure and the
        error is raised.
        """
        directory = Path(data_dir)
        result = TaskResult(task_id=task.key)
        try:
            input_content = _read(directory, task.in_file)
            command = build_run_command(
                job.language,
                job.code,
                exec_file_ids,
                input_content,
                task.out_limit,
                cpu_limit,
                memory_limit,
            )
            run = self.client.run(command)
        except (OSError, GoJudgeError):
            self._report(job, result)
            raise

        result.content = ellipsis(run.stderr, HINT_LIMIT)
        if run.status != GoJudgeStatus.ACCEPTED:
            result.status = map_run_status(run.status)
            self._report(job, result)
            return result

        expected = _read(directory, task.out_file)
        result.time = run.time
        result.memory = run.memory

        if not special_file_id:
            result.status, result.wa_hint = compare_output(expected, run.stdout)
        else:
            try:
                checker = self.client.run(
                    build_special_command(
                        special_file_id,
                        input_content,
                        expected,
                        run.stdout,
                        cpu_limit,
                        memory_limit,
                    )
                )
            except GoJudgeError:
                self._report(job, result)
                raise
            if result.content:
                result.content += "\n"
            result.content += checker.stderr
            result.wa_hint = ellipsis(checker.stdout, HINT_LIMIT)
            result.status = map_special_status(checker.status, checker.exit_status)

        if result.status == JudgeStatus.AC:
            result.score = task.score
        self._report(job, result)
        return result

    def judge(
        self,
        job: JudgeJob,
        problem: Problem,
        exec_file_ids: dict[str, str] | None = None,
        special_file_id: str | None = None,
    ) -> JudgeOutcome:
        """Judge a submission on every task of the problem.

        A problem with a special judge needs the sandbox file id of the
        compiled checker.
        """
        if problem.judge_md5 is None:
            raise ValueError(f"problem judge md5 is nil: {problem.id}")
        data_dir = self.data_root / problem.id / problem.judge_md5
        config = resolve_job_config(data_dir, problem.special)

        checker_id = None
        if config.special_judge is not None:
            if config.special_judge.language not in _SPECIAL_LANGUAGES:
                raise ValueError(
                    f"language {config.special_judge.language} not c/cpp"
                )
            if not special_file_id:
                raise ValueError("special judge compile failed")
            checker_id = special_file_id

        cpu_limit, memory_limit = resource_limits(
            problem.time_limit, problem.memory_limit, job.language
        )

        status = JudgeStatus.AC
        results: list[TaskResult] = []
        for task in config.tasks:
            result = self.run_task(
                job, task, data_dir, checker_id, exec_file_ids, cpu_limit, memory_limit
            )
            status = combine_status(status, result.status)
            results.append(result)

        outcome = JudgeOutcome(
            status=status,
            score=sum(result.score for result in results),
            tasks=results,
        )
        if status in _TIMED_STATUSES:
            outcome.time = sum(result.time for result in results) // len(results)
            outcome.memory = sum(result.memory for result in results) // len(results)
        return outcome


def _outcome_dict(outcome: JudgeOutcome) -> dict[str, Any]:
    tasks = []
    for result in outcome.tasks:
        entry = asdict(result)
        entry["status"] = result.status.value
        tasks.append(entry)
    return {
        "status": outcome.status.value,
        "score": outcome.score,
        "time": outcome.time,
        "memory": outcome.memory,
        "tasks": tasks,
    }


def _parse_file_ids(pairs: list[str]) -> dict[str, str]:
    file_ids: dict[str, str] = {}
    for pair in pairs:
        name, sep, file_id = pair.partition("=")
        if not sep or not name or not file_id:
            raise ValueError(f"exec file must be NAME=ID: {pair}")
        file_ids[name] = file_id
    return file_ids


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ojjudge", description="Judge a submission with the sandbox service."
    )
    parser.add_argument("--config", default="config.yaml", help="configuration file")
    parser.add_argument("--data-root", default=DEFAULT_DATA_ROOT, help="test data root")
    parser.add_argument("--clean", action="store_true", help="delete cached sandbox files")
    parser.add_argument("--problem", help="problem id")
    parser.add_argument("--md5", help="version of the problem's test data")
    parser.add_argument(
        "--language",
        choices=[language.value for language in JudgeLanguage],
        default=JudgeLanguage.CPP.value,
    )
    parser.add_argument("--source", help="file holding the submitted code")
    parser.add_argument("--time-limit", type=int, default=1000, help="milliseconds")
    parser.add_argument("--memory-limit", type=int, default=65536, help="kilobytes")
    parser.add_argument("--special", action="store_true", help="problem uses a checker")
    parser.add_argument("--special-file-id", help="sandbox file id of the checker")
    parser.add_argument(
        "--exec-file", action="append", default=[], help="compiled file as NAME=ID"
    )
    parser.add_argument("--job-id", type=int, default=0)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command entry point: judge one submission and print the outcome as JSON."""
    args = _build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
        if not config.go_judge.url:
            raise ConfigError("go-judge url is not configured")
        client = GoJudgeClient(config.go_judge.url)
        if args.clean:
            removed = client.clean()
            print(json.dumps({"removed": removed}))
        if args.problem is None:
            return 0
        code = Path(args.source).read_text(encoding="utf-8") if args.source else ""
        job = JudgeJob(
            id=args.job_id,
            problem_id=args.problem,
            language=JudgeLanguage(args.language),
            code=code,
        )
        problem = Problem(
            id=args.problem,
            time_limit=args.time_limit,
            memory_limit=args.memory_limit,
            judge_md5=args.md5,
            special=args.special,
        )
        judger = Judger(client, args.data_root)
        outcome = judger.judge(
            job, problem, _parse_file_ids(args.exec_file), args.special_file_id
        )
    except (ValueError, GoJudgeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(_outcome_dict(outcome), ensure_ascii=False))
    return 0