"""Judge languages, verdicts and the mappings from legacy judge systems."""

from __future__ import annotations

import enum


class JudgeLanguage(str, enum.Enum):
    """Languages a submission can be written in, keyed by their short name."""

    UNKNOWN = "unknown"
    C = "c"
    CPP = "cpp"
    PASCAL = "pascal"
    JAVA = "java"
    PYTHON = "python"


class JudgeStatus(str, enum.Enum):
    """Lifecycle states and verdicts of a judge job or a single task."""

    INIT = "init"
    REJUDGE = "rejudge"
    QUEUING = "queuing"
    COMPILING = "compiling"
    RUNNING = "running"
    AC = "ac"
    PE = "pe"
    WA = "wa"
    TLE = "tle"
    MLE = "mle"
    OLE = "ole"
    RE = "re"
    CE = "ce"
    CLE = "cle"
    JUDGE_FAIL = "judge_fail"
    SUBMIT_FAIL = "submit_fail"
    UNKNOWN = "unknown"


class GoJudgeStatus(str, enum.Enum):
    """Status strings reported by the sandbox for a finished command."""

    ACCEPTED = "Accepted"
    MEMORY_LIMIT = "Memory Limit Exceeded"
    TIME_LIMIT = "Time Limit Exceeded"
    OUTPUT_LIMIT = "Output Limit Exceeded"
    FILE_ERROR = "File Error"
    NONZERO_EXIT = "Nonzero Exit Status"
    SIGNALLED = "Signalled"
    INTERNAL_ERROR = "Internal Error"


_CODEOJ_LANGUAGES = {
    0: JudgeLanguage.C,
    1: JudgeLanguage.CPP,
    2: JudgeLanguage.PASCAL,
    3: JudgeLanguage.JAVA,
    6: JudgeLanguage.PYTHON,
    10: JudgeLanguage.CPP,
    14: JudgeLanguage.CPP,
    16: JudgeLanguage.CPP,
}

_VHOJ_LANGUAGES = {
    "C": JudgeLanguage.C,
    "CPP": JudgeLanguage.CPP,
    "JAVA": JudgeLanguage.JAVA,
    "PYTHON": JudgeLanguage.PYTHON,
}

_CODEOJ_STATUSES = {
    0: JudgeStatus.INIT,
    1: JudgeStatus.REJUDGE,
    2: JudgeStatus.COMPILING,
    3: JudgeStatus.RUNNING,
    4: JudgeStatus.AC,
    5: JudgeStatus.PE,
    6: JudgeStatus.WA,
    7: JudgeStatus.TLE,
    8: JudgeStatus.MLE,
    9: JudgeStatus.OLE,
    10: JudgeStatus.RE,
    11: JudgeStatus.CE,
    12: JudgeStatus.CLE,
    13: JudgeStatus.JUDGE_FAIL,
}

_VHOJ_STATUSES = {
    "PENDING": JudgeStatus.INIT,
    "SUBMITTED": JudgeStatus.QUEUING,
    "QUEUEING": JudgeStatus.QUEUING,
    "COMPILING": JudgeStatus.COMPILING,
    "JUDGING": JudgeStatus.RUNNING,
    "AC": JudgeStatus.AC,
    "PE": JudgeStatus.PE,
    "WA": JudgeStatus.WA,
    "TLE": JudgeStatus.TLE,
    "MLE": JudgeStatus.MLE,
    "OLE": JudgeStatus.OLE,
    "RE": JudgeStatus.RE,
    "CE": JudgeStatus.CE,
    "CLE": JudgeStatus.CLE,
    "SUBMIT_FAILED_TEMP": JudgeStatus.SUBMIT_FAIL,
    "SUBMIT_FAILED_PERM": JudgeStatus.SUBMIT_FAIL,
    "FAILED_OTHER": JudgeStatus.JUDGE_FAIL,
}

_COMPILED_LANGUAGES = frozenset(
    {JudgeLanguage.C, JudgeLanguage.CPP, JudgeLanguage.PASCAL, JudgeLanguage.JAVA}
)


def language_from_codeoj(language: int) -> JudgeLanguage:
    """Map a CodeOJ numeric language code to a language."""
    return _CODEOJ_LANGUAGES.get(language, JudgeLanguage.UNKNOWN)


def language_from_vhoj(language: str) -> JudgeLanguage:
    """Map a Vhoj canonical language name to a language."""
    return _VHOJ_LANGUAGES.get(language, JudgeLanguage.UNKNOWN)


def status_from_codeoj(status: int) -> JudgeStatus:
    """Map a CodeOJ numeric result code to a status."""
    return _CODEOJ_STATUSES.get(status, JudgeStatus.UNKNOWN)


def status_from_vhoj(status: str) -> JudgeStatus:
    """Map a Vhoj canonical status name to a status."""
    return _VHOJ_STATUSES.get(status, JudgeStatus.UNKNOWN)


def language_needs_compile(language: JudgeLanguage) -> bool:
    """Whether submissions in this language are compiled before running."""
    return language in _COMPILED_LANGUAGES