# backend/api/services/sns_alerts.py
from __future__ import annotations

import logging
import os
from typing import Any, Callable, Optional, Set

import boto3

from models.alert import Alert

log = logging.getLogger(__name__)

# Pull from env if you like
REGION = os.getenv("AWS_REGION", "eu-north-1")
ALERT_TOPIC_ARN = os.getenv("OASIS_ALERT_TOPIC_ARN", "").strip()


# ----------------------------
# Formatters
# ----------------------------

def build_alert_message(alert: Alert) -> str:
    parts = [
        "⚠️ Oasis alert",
        alert.title,
        f"Severity: {alert.severity}",
        f"Type: {alert.type}",
        f"Where: {alert.location.name if alert.location else 'N/A'}",
    ]
    if alert.description:
        parts.append(alert.description)
    return " | ".join(parts)


# ----------------------------
# Decision helpers
# ----------------------------

def should_broadcast(alert: Alert) -> bool:
    """Only active, high-severity alerts go out to the campus topic."""
    return alert.status == "active" and alert.severity == "high"


# ----------------------------
# Publishers
# ----------------------------

def publish_alert(alert: Alert, topic_arn: str, client: Optional[Any] = None) -> str:
    """Publish to the SNS topic. Returns SNS MessageId."""
    sns = client or boto3.client("sns", region_name=REGION)
    resp = sns.publish(
        TopicArn=topic_arn,
        Message=build_alert_message(alert),
        Subject="Oasis Campus Alert",
    )
    return resp["MessageId"]


# ----------------------------
# State listener
# ----------------------------

def subscribe_alert_broadcast(
    manager,
    topic_arn: str = ALERT_TOPIC_ARN,
    client: Optional[Any] = None,
) -> Callable[[], None]:
    """
    Subscribe to an IncidentStateManager and publish each new broadcastable
    alert once. Alerts the manager already holds are not published.
    Returns the unsubscribe callable.
    """
    if not topic_arn:
        raise ValueError("OASIS_ALERT_TOPIC_ARN is not set")

    sns = client or boto3.client("sns", region_name=REGION)
    seen: Set[str] = {a.id for a in manager.alerts}

    def listener(mgr) -> None:
        for alert in mgr.alerts:
            if alert.id in seen:
                continue
            seen.add(alert.id)
            if not should_broadcast(alert):
                continue
            try:
                message_id = publish_alert(alert, topic_arn, sns)
                log.info("Published alert %s to SNS (MessageId=%s)", alert.id, message_id)
            except Exception:
                log.exception("Failed to publish alert %s", alert.id)

    return manager.subscribe(listener)
