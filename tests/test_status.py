import json
from datetime import datetime, timedelta, timezone

import pytest

from ojjudge.status import NodeConfig, NodeStatus, collect_status, status_key


def _sample(moment):
    return NodeStatus(
        name="judger-a",
        cpu_usage=12.5,
        mem_usage=1024,
        mem_total=4096,
        avg_message="0.10 0.20 0.30",
        update_time=moment,
    )


def test_to_dict_keys_in_wire_order():
    status = _sample(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))
    assert list(status.to_dict()) == [
        "name",
        "cpu_usage",
        "mem_usage",
        "mem_total",
        "avg_message",
        "update_time",
    ]


def test_utc_time_uses_z_suffix():
    status = _sample(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))
    assert status.to_dict()["update_time"] == "2024-05-01T12:00:00Z"


def test_fraction_trailing_zeros_trimmed_and_offset_kept():
    tz = timezone(timedelta(hours=8))
    status = _sample(datetime(2024, 5, 1, 12, 0, 0, 500000, tzinfo=tz))
    assert status.to_dict()["update_time"] == "2024-05-01T12:00:00.5+08:00"


def test_to_json_round_trips_fields():
    status = _sample(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))
    parsed = json.loads(status.to_json())
    assert parsed == status.to_dict()
    assert " " not in status.to_json().replace("0.10 0.20 0.30", "")


def test_collect_status_invariants():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    status = collect_status("judger-a", now)
    assert status.name == "judger-a"
    assert status.update_time == now
    assert 0 <= status.mem_usage <= status.mem_total
    assert 0.0 <= status.cpu_usage
    assert len(status.avg_message.split()) == 3


def test_status_key_for_judger():
    assert status_key("judger", "node1") == "status/judger/node1.json"


def test_status_key_rejects_empty():
    with pytest.raises(ValueError):
        status_key("judger", "")


def test_node_config_holds_identity():
    config = NodeConfig(key="node1", name="Node One")
    assert (config.key, config.name) == ("node1", "Node One")