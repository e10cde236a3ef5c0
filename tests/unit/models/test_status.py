"""Unit tests for the NodeStatus model."""

from adactl.models.status import NodeStatus


def test_running_when_pids_found() -> None:
    status = NodeStatus(port=6002, pids=(101, 102), port_listening=True, port_source="stored")

    assert status.is_running


def test_not_running_without_pids() -> None:
    status = NodeStatus(port=6002)

    assert not status.is_running
    assert not status.port_listening
    assert status.port_source == "default"
