# ojjudge

A judging worker for an online judge. Given a submission and a problem's test
data, it runs the submission task by task inside a go-judge sandbox server
(reached over HTTP through its `/run` and `/file` endpoints), compares the
output with the expected answers or hands it to a checker program, and
produces a verdict, a score and the average time and memory used.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The command reads a YAML file (`ojjudge.config.load_config`). The fields it
understands are:

```yaml
judger:
  key: judger-1
  name: Judger One
go-judge:
  url: http://localhost:5050
max-job: 4
judge-data: {}
mongo: {}
cf-r2: {}
```

Only `go-judge.url` is needed by the command; it stops with an error when it is
missing. The other sections are parsed into `JudgeConfig` and kept as given.
A malformed file or a value of the wrong shape raises `ConfigError`.

## Running the command

```
ojjudge --help
```

Judge one submission:

```
ojjudge --config config.yaml --problem 1 --md5 v1 --language python --source a.py
```

The test data is looked up in `DATA_ROOT/PROBLEM/MD5` (`--data-root` defaults
to `.judge_data`). Options:

- `--language` is one of `unknown`, `c`, `cpp`, `pascal`, `java`, `python`
  (default `cpp`).
- `--time-limit` in milliseconds (default 1000) and `--memory-limit` in
  kilobytes (default 65536). Java gets two extra seconds and 64 MiB extra.
- `--exec-file NAME=ID`, repeatable: sandbox file ids of already compiled
  programs. C, C++ and Pascal need `a`; Java needs `Main.class`. Python
  submissions are sent as source.
- `--special` marks a problem judged by a checker; `--special-file-id` gives
  the sandbox file id of the compiled checker, which is then required.
- `--job-id` is carried on the job.
- `--clean` first deletes every cached file in the sandbox and prints
  `{"removed": [...]}`. Without `--problem` the command stops there.

The outcome is printed as JSON with `status`, `score`, `time`, `memory` and one
entry per task. On an error the command prints `error: ...` to standard error
and exits with status 1.

## Test data layout

If the directory holds a `rule.yaml`, its `tasks` (each with `key`, `in-file`,
`out-file`, `out-limit`, `score`) and its optional `special-judge`
(`language`, `source`) are used. Otherwise every `NAME.out` file becomes one
task, with `NAME.in` as its input when present and an output limit of twice
the answer's size, at least 1024 bytes; the 100 points are shared evenly and
the last task takes the remainder. For a special problem without a
`special-judge` entry, a `spj.c`, `spj.cc` or `spj.cpp` file names the checker.
Only C and C++ checkers are accepted.

Without a checker, answers are compared token by token: a differing or
missing token gives Wrong Answer with a hint, equal tokens with other spacing
give Presentation Error, and equal text (ignoring one trailing newline) gives
Accepted. A checker's exit code 1 means Wrong Answer and 2 Presentation Error.
The job's verdict is that of its first failing task.

## Using it as a library

- `ojjudge.judge_types`: `JudgeLanguage`, `JudgeStatus`, `GoJudgeStatus`, the
  mappings from older judge systems' codes (`language_from_codeoj`,
  `language_from_vhoj`, `status_from_codeoj`, `status_from_vhoj`) and
  `language_needs_compile`.
- `ojjudge.accounts`: `is_valid_username`, `is_valid_password`, and the salted
  password format `base64(sha1(md5hex(password) + salt) + salt)` through
  `encode_password` and `verify_password`, which also accepts a plain MD5 hex
  digest and raises `PasswordFormatError` for an undecodable stored value.
- `ojjudge.status`: `NodeConfig`, `NodeStatus` (with `to_dict` and `to_json`),
  `collect_status` for this machine's CPU, memory and load, and `status_key`.
- `ojjudge.config`: `JudgeConfig`, `GoJudgeConfig`, `load_config`.
- `ojjudge.checker`: `compare_output`, `load_rule`, `detect_special_judge`,
  `build_tasks_from_directory`, `resolve_job_config`, `combine_status`,
  `resource_limits`, `ellipsis`.
- `ojjudge.gojudge`: `GoJudgeClient` (`run`, `delete_file`, `clean`),
  `build_run_command`, `build_special_command`, `map_run_status`,
  `map_special_status`; failures raise `GoJudgeError`.
- `ojjudge.worker`: `Judger`, which judges a `JudgeJob` against a `Problem`
  and returns a `JudgeOutcome`; an optional `on_task` callback receives each
  `TaskResult` as it is produced.

## What it does not do

- It does not compile submissions or checkers; compiled programs must already
  be in the sandbox and their file ids passed in.
- It does not fetch test data; the directory must already be present locally.
- It does not poll a queue of pending jobs, store results in a database, or
  run jobs in parallel; `max-job` is read but not used by the command.
- It does not upload status reports; `collect_status` only builds them.