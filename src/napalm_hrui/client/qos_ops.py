"""QoS operations for HRUI switches.

Payloads:

    PORT QUEUE: POST /qos.cgi?page=port_pri
        cmd=portprio&portid=<wire id>&port_priority=<queue - 1>

    QUEUE WEIGHT: POST /qos.cgi?page=que_weight
        cmd=qweight&queueid=<queue - 1>&weight=<0-15>
        Weight 0 selects strict priority.
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.port import PortRef
from napalm_hrui.model.qos import QoSPortQueue, QoSQueueWeight
from napalm_hrui.parser.qos import parse_port_queues, parse_queue_weights
from napalm_hrui.vendor.hrui.endpoints import (
    PAGE_QOS_PORT_PRIORITY,
    PAGE_QOS_QUEUE_WEIGHT,
    PAGE_QOS_SCHEDULER,
    QOS,
    page,
)

logger = logging.getLogger(__name__)

STRICT_PRIORITY_WEIGHT: int = 0
MAX_QUEUE_WEIGHT: int = 15


def list_qos_port_queues(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[QoSPortQueue]:
    return parse_port_queues(session.get(QOS, page(PAGE_QOS_PORT_PRIORITY), ctx=ctx))


def read_qos_port_queue(
    session: HRUISession,
    port: PortRef,
    *,
    ctx: RequestContext | None = None,
) -> QoSPortQueue:
    """Return the queue assigned to one port.

    Raises:
        HRUIPortNotFoundError: If the port is unknown or has no row.
    """
    name = PortResolver(session).snapshot(ctx=ctx).name_of(port)
    for entry in list_qos_port_queues(session, ctx=ctx):
        if entry.port == name:
            return entry
    raise HRUIPortNotFoundError(name)


def set_qos_port_queue(
    session: HRUISession,
    port: PortRef,
    queue: int,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Assign 1-based *queue* to *port*.

    Raises:
        ValueError: If *queue* is below 1.
        HRUIPortNotFoundError: If the port does not exist.
    """
    if queue < 1:
        raise ValueError(f"queue must be 1 or higher, got {queue}")
    wire = PortResolver(session).wire_id(port, ctx=ctx)
    payload = {"cmd": "portprio", "portid": str(wire), "port_priority": str(queue - 1)}
    logger.debug("Setting QoS queue on port %s: %s", port, payload)
    session.submit_form(QOS, payload, page(PAGE_QOS_PORT_PRIORITY), ctx=ctx)
    logger.info("Port %s assigned to queue %d", port, queue)


def list_qos_queue_weights(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[QoSQueueWeight]:
    return parse_queue_weights(session.get(QOS, page(PAGE_QOS_SCHEDULER), ctx=ctx))


def set_qos_queue_weight(
    session: HRUISession,
    queue: int,
    weight: int | None,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Set the scheduler weight of 1-based *queue*.

    Args:
        session: Active session.
        queue: 1-based queue number.
        weight: 1-15, or ``None`` for strict priority.
        ctx: Optional deadline/cancellation context.

    Raises:
        ValueError: If *queue* or *weight* is out of range.
    """
    if queue < 1:
        raise ValueError(f"queue must be 1 or higher, got {queue}")
    wire_weight = STRICT_PRIORITY_WEIGHT if weight is None else weight
    if not STRICT_PRIORITY_WEIGHT <= wire_weight <= MAX_QUEUE_WEIGHT:
        raise ValueError(f"weight must be 1-{MAX_QUEUE_WEIGHT} or None, got {weight}")
    payload = {"cmd": "qweight", "queueid": str(queue - 1), "weight": str(wire_weight)}
    logger.debug("Setting queue weight: %s", payload)
    session.submit_form(QOS, payload, page(PAGE_QOS_QUEUE_WEIGHT), ctx=ctx)
    logger.info(
        "Queue %d weight set to %s",
        queue,
        "strict priority" if weight is None else weight,
    )
