import json

import pytest
import responses

from ojjudge.gojudge import (
    SPECIAL_JUDGE_EXIT_PE,
    SPECIAL_JUDGE_EXIT_WA,
    GoJudgeClient,
    GoJudgeError,
    RunResult,
    build_run_command,
    build_special_command,
    map_run_status,
    map_special_status,
)
from ojjudge.judge_types import GoJudgeStatus, JudgeLanguage, JudgeStatus

BASE = "http://localhost:5050"


def test_run_returns_result_and_sends_command():
    command = {"args": ["a"]}
    reply = [
        {
            "status": "Accepted",
            "exitStatus": 0,
            "files": {"stdout": "3\n", "stderr": ""},
            "time": 5,
            "memory": 7,
        }
    ]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/run", json=reply, status=200)
        result = GoJudgeClient(BASE).run(command)
        body = json.loads(rsps.calls[0].request.body)
    assert body == {"cmd": [command]}
    assert result == RunResult(status=GoJudgeStatus.ACCEPTED, stdout="3\n", time=5, memory=7)


def test_run_rejects_bad_status_code():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/run", json=[], status=500)
        with pytest.raises(GoJudgeError):
            GoJudgeClient(BASE).run({"args": ["a"]})


def test_run_rejects_wrong_length():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/run", json=[{}, {}], status=200)
        with pytest.raises(GoJudgeError):
            GoJudgeClient(BASE).run({"args": ["a"]})


def test_run_rejects_undecodable_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/run", body="not json", status=200)
        with pytest.raises(GoJudgeError):
            GoJudgeClient(BASE + "/").run({"args": ["a"]})


def test_delete_file_uses_file_endpoint():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, f"{BASE}/file/abc", status=200)
        GoJudgeClient(BASE).delete_file("abc")
        assert rsps.calls[0].request.method == "DELETE"
        assert rsps.calls[0].request.url == f"{BASE}/file/abc"


def test_clean_deletes_every_file():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/file", json={"f1": "a", "f2": "b"}, status=200)
        rsps.add(responses.DELETE, f"{BASE}/file/f1", status=200)
        rsps.add(responses.DELETE, f"{BASE}/file/f2", status=200)
        removed = GoJudgeClient(BASE).clean()
    assert sorted(removed) == ["f1", "f2"]


def test_run_result_unknown_status_kept_as_text():
    result = RunResult.from_dict({"status": "Strange"})
    assert result.status == "Strange"
    assert result.file_ids == {}


def test_build_run_command_compiled():
    command = build_run_command(JudgeLanguage.CPP, "", {"a": "id-a"}, "1 2", 4096, 10, 20)
    assert command["args"] == ["a"]
    assert command["copyIn"] == {"a": {"fileId": "id-a"}}
    assert command["files"][0] == {"content": "1 2"}
    assert command["files"][1] == {"name": "stdout", "max": 4096}
    assert command["files"][2] == {"name": "stderr", "max": 10240}
    assert command["env"] == ["PATH=/usr/bin:/bin"]
    assert (command["cpuLimit"], command["memoryLimit"], command["procLimit"]) == (10, 20, 50)


def test_build_run_command_java():
    command = build_run_command(JudgeLanguage.JAVA, "", {"Main.class": "id-j"}, "", 1024, 1, 1)
    assert command["args"] == ["java", "Main"]
    assert command["copyIn"] == {"Main.class": {"fileId": "id-j"}}


def test_build_run_command_python_ships_source():
    code = "print(1)"
    command = build_run_command(JudgeLanguage.PYTHON, code, None, "", 1024, 1, 1)
    assert command["args"] == ["python3", "a.py"]
    assert command["copyIn"] == {"a.py": {"content": code}}


def test_build_run_command_missing_file_id():
    with pytest.raises(GoJudgeError):
        build_run_command(JudgeLanguage.C, "", {}, "", 1024, 1, 1)


def test_build_run_command_unknown_language():
    with pytest.raises(GoJudgeError):
        build_run_command(JudgeLanguage.UNKNOWN, "", {}, "", 1024, 1, 1)


def test_build_special_command():
    command = build_special_command("spj-id", "in", "exp", "act", 3, 4)
    assert command["args"] == ["spj", "test.in", "test.out", "user.out"]
    assert command["copyIn"]["spj"] == {"fileId": "spj-id"}
    assert command["copyIn"]["test.in"] == {"content": "in"}
    assert command["copyIn"]["test.out"] == {"content": "exp"}
    assert command["copyIn"]["user.out"] == {"content": "act"}
    assert command["files"][1] == {"name": "stdout", "max": 10240}


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (GoJudgeStatus.ACCEPTED, JudgeStatus.AC),
        (GoJudgeStatus.SIGNALLED, JudgeStatus.RE),
        (GoJudgeStatus.NONZERO_EXIT, JudgeStatus.RE),
        (GoJudgeStatus.INTERNAL_ERROR, JudgeStatus.JUDGE_FAIL),
        (GoJudgeStatus.OUTPUT_LIMIT, JudgeStatus.OLE),
        (GoJudgeStatus.FILE_ERROR, JudgeStatus.OLE),
        (GoJudgeStatus.MEMORY_LIMIT, JudgeStatus.MLE),
        (GoJudgeStatus.TIME_LIMIT, JudgeStatus.TLE),
        ("Something Else", JudgeStatus.JUDGE_FAIL),
    ],
)
def test_map_run_status(status, expected):
    assert map_run_status(status) == expected


def test_map_special_status():
    assert map_special_status(GoJudgeStatus.ACCEPTED, 0) == JudgeStatus.AC
    assert map_special_status(GoJudgeStatus.NONZERO_EXIT, SPECIAL_JUDGE_EXIT_WA) == JudgeStatus.WA
    assert map_special_status(GoJudgeStatus.NONZERO_EXIT, SPECIAL_JUDGE_EXIT_PE) == JudgeStatus.PE
    assert map_special_status("Nonzero Exit Status", 99) == JudgeStatus.RE
    assert map_special_status(GoJudgeStatus.TIME_LIMIT, 0) == JudgeStatus.JUDGE_FAIL