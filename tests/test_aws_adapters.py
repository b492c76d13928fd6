"""
DynamoDB state store and SNS alert broadcast, with in-memory fakes for boto3.
"""
import logging

import pytest

from db.dynamo import DynamoKeyValueStore
from models.alert import Alert
from services import sns_alerts
from services.incident_state import ALERTS_KEY, IncidentStateManager

TOPIC = "arn:aws:sns:eu-north-1:123456789012:oasis-alerts"


class FakeTable:
    def __init__(self):
        self.items = {}

    def get_item(self, Key, **kwargs):
        item = self.items.get(Key["key"])
        return {"Item": dict(item)} if item else {}

    def put_item(self, Item):
        self.items[Item["key"]] = dict(Item)

    def delete_item(self, Key):
        self.items.pop(Key["key"], None)


class FakeSns:
    def __init__(self, fail=False):
        self.published = []
        self.fail = fail

    def publish(self, **kwargs):
        if self.fail:
            raise RuntimeError("throttled")
        self.published.append(kwargs)
        return {"MessageId": f"msg-{len(self.published)}"}


@pytest.fixture
def table():
    return FakeTable()


def test_dynamo_store_get_set_remove(table):
    store = DynamoKeyValueStore(table=table)
    assert store.get_item("oasis-alerts") is None

    store.set_item("oasis-alerts", "[]")
    assert store.get_item("oasis-alerts") == "[]"
    assert "updated_at" in table.items["oasis-alerts"]

    store.remove_item("oasis-alerts")
    assert store.get_item("oasis-alerts") is None


def test_dynamo_store_backs_state_manager(table, clock, lot_a):
    manager = IncidentStateManager(DynamoKeyValueStore(table=table), clock=clock)
    manager.add_incident({"type": "emergency", "description": "fire", "reporter": "Jane", "location": lot_a})

    restarted = IncidentStateManager(DynamoKeyValueStore(table=table), clock=clock)
    assert restarted.incidents == manager.incidents
    assert restarted.alerts == manager.alerts
    assert ALERTS_KEY in table.items


# ---------------- SNS ----------------

def _alert(**overrides):
    data = dict(id="x", title="Gas leak", description="Evacuate lab", severity="high",
                type="emergency", time="2026-10-19T12:00:00Z",
                location={"lat": 0, "lng": 0, "name": "Chem Lab"}, status="active")
    data.update(overrides)
    return Alert.model_validate(data)


def test_build_alert_message():
    msg = sns_alerts.build_alert_message(_alert())
    assert "Gas leak" in msg
    assert "Severity: high" in msg
    assert "Where: Chem Lab" in msg
    assert "Where: N/A" in sns_alerts.build_alert_message(_alert(location=None))


@pytest.mark.parametrize("overrides, expected", [
    ({}, True),
    ({"severity": "medium"}, False),
    ({"status": "resolved"}, False),
])
def test_should_broadcast(overrides, expected):
    assert sns_alerts.should_broadcast(_alert(**overrides)) is expected


def test_publish_alert_returns_message_id():
    sns = FakeSns()
    assert sns_alerts.publish_alert(_alert(), TOPIC, sns) == "msg-1"
    assert sns.published[0]["TopicArn"] == TOPIC


def test_broadcast_publishes_new_high_alerts_once(manager, lot_a):
    sns = FakeSns()
    sns_alerts.subscribe_alert_broadcast(manager, TOPIC, client=sns)

    # seeded alert "1" is already high/active but must not be re-sent
    manager.add_incident({"type": "emergency", "description": "fire", "reporter": "Jane", "location": lot_a})
    assert len(sns.published) == 1
    assert "Emergency incident reported" in sns.published[0]["Message"]

    manager.add_alert({"title": "Rain", "description": "d", "severity": "medium", "type": "weather"})
    manager.resolve_alert("1")
    assert len(sns.published) == 1


def test_broadcast_unsubscribe(manager, lot_a):
    sns = FakeSns()
    unsubscribe = sns_alerts.subscribe_alert_broadcast(manager, TOPIC, client=sns)
    unsubscribe()
    manager.add_incident({"type": "emergency", "description": "fire", "reporter": "Jane", "location": lot_a})
    assert sns.published == []


def test_broadcast_failure_is_logged(manager, lot_a, caplog):
    sns_alerts.subscribe_alert_broadcast(manager, TOPIC, client=FakeSns(fail=True))
    with caplog.at_level(logging.ERROR):
        manager.add_incident({"type": "emergency", "description": "fire", "reporter": "Jane", "location": lot_a})
    assert len(manager.alerts) == 6
    assert "Failed to publish alert" in caplog.text


def test_broadcast_requires_topic(manager):
    with pytest.raises(ValueError):
        sns_alerts.subscribe_alert_broadcast(manager, "", client=FakeSns())
