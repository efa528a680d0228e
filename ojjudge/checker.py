"""Test data layout, answer comparison and verdict bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ojjudge.judge_types import JudgeLanguage, JudgeStatus

RULE_FILE = "rule.yaml"
TOTAL_SCORE = 100
MIN_OUT_LIMIT = 1024
HINT_LIMIT = 1000

_SPECIAL_SOURCES = (("spj.c", "c"), ("spj.cc", "cpp"), ("spj.cpp", "cpp"))


@dataclass
class TaskConfig:
    """One test case: its key, data files, output limit and score."""

    key: str
    in_file: str = ""
    out_file: str = ""
    out_limit: int = 0
    score: int = 0


@dataclass
class SpecialJudgeConfig:
    """A checker program shipped with the test data."""

    language: str
    source: str


@dataclass
class JobConfig:
    """How a problem is judged: its tasks and an optional special judge."""

    tasks: list[TaskConfig] = field(default_factory=list)
    special_judge: SpecialJudgeConfig | None = None


@dataclass
class TaskResult:
    """The outcome of running one task."""

    task_id: str
    status: JudgeStatus = JudgeStatus.JUDGE_FAIL
    time: int = 0
    memory: int = 0
    score: int = 0
    content: str = ""
    wa_hint: str = ""


def ellipsis(text: str, limit: int) -> str:
    """Cut text to at most limit characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def compare_output(expected: str, actual: str) -> tuple[JudgeStatus, str]:
    """Compare a program's output with the expected answer.

    Returns AC, PE or WA together with a hint for wrong answers.
    """
    expected_tokens = expected.split()
    actual_tokens = actual.split()
    hint = ""
    for position, token in enumerate(expected_tokens):
        if position >= len(actual_tokens):
            hint = f"{token} not found"
            break
        if token != actual_tokens[position]:
            hint = f"{token} != {actual_tokens[position]}"
    if hint:
        return JudgeStatus.WA, ellipsis(hint, HINT_LIMIT)
    if expected.removesuffix("\n") == actual.removesuffix("\n"):
        return JudgeStatus.AC, ""
    return JudgeStatus.PE, ""


def _get(raw: dict[str, Any], name: str, default: Any = None) -> Any:
    for candidate in (name, name.replace("-", "_")):
        if candidate in raw:
            return raw[candidate]
    return default


def _parse_task(raw: Any) -> TaskConfig:
    if not isinstance(raw, dict):
        raise ValueError("each task in the rule file must be a mapping")
    return TaskConfig(
        key=str(_get(raw, "key", "")),
        in_file=str(_get(raw, "in-file", "") or ""),
        out_file=str(_get(raw, "out-file", "") or ""),
        out_limit=int(_get(raw, "out-limit", 0) or 0),
        score=int(_get(raw, "score", 0) or 0),
    )


def load_rule(data_dir: str | Path) -> JobConfig:
    """Read rule.yaml from a test data directory; an absent file gives an empty config."""
    path = Path(data_dir) / RULE_FILE
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return JobConfig()
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"unmarshal config file error: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError("rule file must be a mapping")
    special = _get(raw, "special-judge")
    special_config = None
    if special is not None:
        if not isinstance(special, dict):
            raise ValueError("special-judge must be a mapping")
        special_config = SpecialJudgeConfig(
            language=str(special.get("language", "")),
            source=str(special.get("source", "")),
        )
    tasks = [_parse_task(task) for task in (_get(raw, "tasks") or [])]
    return JobConfig(tasks=tasks, special_judge=special_config)


def detect_special_judge(data_dir: str | Path) -> SpecialJudgeConfig | None:
    """Find a conventionally named checker source in the test data."""
    directory = Path(data_dir)
    for file_name, language in _SPECIAL_SOURCES:
        if (directory / file_name).exists():
            return SpecialJudgeConfig(language=language, source=file_name)
    return None


def build_tasks_from_directory(data_dir: str | Path) -> list[TaskConfig]:
    """Derive tasks from the .in/.out files of a test data directory.

    Scores share 100 evenly; the last task takes the remainder.
    """
    directory = Path(data_dir)
    out_names: list[str] = []
    in_names: set[str] = set()
    for entry in directory.iterdir():
        if entry.name.endswith(".out"):
            out_names.append(entry.name.removesuffix(".out"))
        elif entry.name.endswith(".in"):
            in_names.add(entry.name.removesuffix(".in"))
    if not out_names:
        return []
    out_names.sort()
    average = TOTAL_SCORE // len(out_names)
    last = len(out_names) - 1
    tasks: list[TaskConfig] = []
    for position, name in enumerate(out_names):
        try:
            size = (directory / f"{name}.out").stat().st_size
        except OSError:
            continue
        score = TOTAL_SCORE - average * last if position == last else average
        tasks.append(
            TaskConfig(
                key=name,
                in_file=f"{name}.in" if name in in_names else "",
                out_file=f"{name}.out",
                out_limit=max(size * 2, MIN_OUT_LIMIT),
                score=score,
            )
        )
    return tasks


def resolve_job_config(data_dir: str | Path, special: bool) -> JobConfig:
    """Work out the full judging configuration of a problem's test data.

    Raises ValueError when no task can be found.
    """
    config = load_rule(data_dir)
    if special and config.special_judge is None:
        config.special_judge = detect_special_judge(data_dir)
    if not config.tasks:
        config.tasks = build_tasks_from_directory(data_dir)
    if not config.tasks:
        raise ValueError("no job task found")
    return config


def combine_status(current: JudgeStatus, task_status: JudgeStatus) -> JudgeStatus:
    """Fold a task verdict into the job verdict: the first failure sticks."""
    if current == JudgeStatus.AC:
        return task_status
    return current


def resource_limits(
    time_limit: int, memory_limit: int, language: JudgeLanguage
) -> tuple[int, int]:
    """Turn milliseconds and kilobytes into sandbox nanoseconds and bytes.

    Java gets two extra seconds and 64 MiB extra.
    """
    cpu_limit = time_limit * 1_000_000
    memory_bytes = memory_limit * 1024
    if language == JudgeLanguage.JAVA:
        cpu_limit += 2000 * 1_000_000
        memory_bytes += 1024 * 1024 * 64
    return cpu_limit, memory_bytes