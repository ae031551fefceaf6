#!/usr/bin/env python3
"""
测试 Ready 条件状态转换：成功路径边沿触发，错误路径每轮触发
"""

import asyncio

from mesh_readiness_checker.collectors.models import AggregateOutcome
from mesh_readiness_checker.collectors.readiness_collector import calculate_not_ready_state
from mesh_readiness_checker.status.conditions import (
    Condition,
    ConditionReason,
    ConditionStatus,
)
from mesh_readiness_checker.status.events import (
    EVENT_REASON_NOT_READY,
    EVENT_REASON_READY,
    EVENT_TYPE_NORMAL,
    EVENT_TYPE_WARNING,
)
from mesh_readiness_checker.status.transition import update_readiness_status
from mesh_readiness_checker.utils.errors import ProbeFetchError

from fakes import (
    DEPLOYMENTS,
    NAMESPACE,
    OPERATOR_NAMESPACE,
    FakeKubectl,
    RecordingRecorder,
    make_instance,
    make_resource,
)


def _transition(instance, outcome, recorder):
    return asyncio.run(update_readiness_status(instance, outcome, recorder))


def _ready(instance):
    return instance.status.get_condition("Ready")


def test_istiod_empty_conditions_example():
    """istiod 的 status.conditions 为空 → 未就绪 → Ready=False"""
    client = FakeKubectl()
    client.add(DEPLOYMENTS, make_resource("Deployment", "istiod", "istiod", {"conditions": []}))

    outcome = asyncio.run(calculate_not_ready_state(client, NAMESPACE, False, OPERATOR_NAMESPACE))
    assert outcome.not_ready_state["istiod"] is True

    instance = make_instance()
    recorder = RecordingRecorder()
    result = _transition(instance, outcome, recorder)

    condition = _ready(instance)
    assert result.should_persist is True
    assert result.error is None
    assert condition.status == ConditionStatus.FALSE
    assert condition.reason == ConditionReason.COMPONENTS_NOT_READY.value
    assert "istiod" in condition.message

    assert len(recorder.events) == 1
    event_type, reason, message = recorder.events[0]
    assert event_type == EVENT_TYPE_WARNING
    assert reason == EVENT_REASON_NOT_READY
    assert "istiod" in message


def test_all_ready_from_unknown():
    """没有 Ready 条件时，全部就绪 → Ready=True 并发出 Normal 事件"""
    instance = make_instance()
    recorder = RecordingRecorder()

    result = _transition(instance, AggregateOutcome({"pilot": False, "cni": False}), recorder)

    condition = _ready(instance)
    assert result.should_persist is True
    assert condition.status == ConditionStatus.TRUE
    assert condition.reason == ConditionReason.COMPONENTS_READY.value
    assert recorder.events == [(EVENT_TYPE_NORMAL, EVENT_REASON_READY, condition.message)]


def test_steady_state_has_no_writes_or_events():
    """状态不变时不写回、不发事件"""
    instance = make_instance()
    recorder = RecordingRecorder()
    not_ready = AggregateOutcome({"pilot": True, "cni": False})

    results = [_transition(instance, not_ready, recorder) for _ in range(5)]

    assert [r.should_persist for r in results] == [True, False, False, False, False]
    assert len(recorder.events) == 1

    ready = AggregateOutcome({"pilot": False, "cni": False})
    results = [_transition(instance, ready, recorder) for _ in range(3)]

    assert [r.should_persist for r in results] == [True, False, False]
    assert len(recorder.events) == 2


def test_true_to_false_happens_once():
    """就绪组件变为未就绪时只转换一次"""
    instance = make_instance([
        Condition(type="Ready", status=ConditionStatus.TRUE, reason="ComponentsReady")
    ])
    recorder = RecordingRecorder()
    outcome = AggregateOutcome({"pilot": False, "grafana": True})

    first = _transition(instance, outcome, recorder)
    second = _transition(instance, outcome, recorder)

    assert first.should_persist is True
    assert second.should_persist is False
    assert _ready(instance).reason == ConditionReason.COMPONENTS_NOT_READY.value
    assert "grafana" in _ready(instance).message
    assert [e[0] for e in recorder.events] == [EVENT_TYPE_WARNING]


def test_unready_components_are_sorted():
    instance = make_instance()
    recorder = RecordingRecorder()

    _transition(instance, AggregateOutcome({"zipkin": True, "alpha": True, "pilot": False}), recorder)

    assert _ready(instance).message.endswith("alpha, zipkin")
    assert recorder.events[0][2].endswith("alpha, zipkin")


def test_probe_error_fires_every_pass():
    """探测错误每轮都写回并发出 Warning，即使条件完全相同"""
    instance = make_instance()
    recorder = RecordingRecorder()
    error = ProbeFetchError("context deadline exceeded", kind="Deployment", namespace=NAMESPACE)
    outcome = AggregateOutcome({}, error)

    results = [_transition(instance, outcome, recorder) for _ in range(3)]

    assert all(r.should_persist for r in results)
    assert all(r.error is error for r in results)
    assert len(recorder.events) == 3
    assert all(e[0] == EVENT_TYPE_WARNING for e in recorder.events)

    condition = _ready(instance)
    assert condition.status == ConditionStatus.UNKNOWN
    assert condition.reason == ConditionReason.PROBE_ERROR.value
    assert condition.message.startswith("Error collecting ready state:")
    assert "context deadline exceeded" in condition.message


def test_recovery_after_probe_error():
    """探测恢复后从 Unknown 转为 True"""
    instance = make_instance()
    recorder = RecordingRecorder()

    _transition(instance, AggregateOutcome({}, ProbeFetchError("timeout")), recorder)
    result = _transition(instance, AggregateOutcome({"pilot": False}), recorder)

    assert result.should_persist is True
    assert _ready(instance).status == ConditionStatus.TRUE


def test_single_ready_condition():
    """多次转换后实例上仍只有一条 Ready 条件，其它条件保留"""
    instance = make_instance([
        Condition(type="Reconciled", status=ConditionStatus.TRUE, reason="InstallSuccessful"),
    ])
    recorder = RecordingRecorder()

    for state in ({"a": True}, {"a": False}, {"a": True}):
        _transition(instance, AggregateOutcome(state), recorder)
    _transition(instance, AggregateOutcome({}, ProbeFetchError("timeout")), recorder)

    types = [c.type for c in instance.status.conditions]
    assert types.count("Ready") == 1
    assert "Reconciled" in types
