"""Parser for HRUI QoS pages (qos.cgi)."""

from __future__ import annotations

import logging

from napalm_hrui.model.qos import QoSPortQueue, QoSQueueWeight
from napalm_hrui.parser.html import ParseOptions, extract_table, parse_html, parse_int

logger = logging.getLogger(__name__)

STRICT_PRIORITY: str = "Strict priority"

_QUEUE_OPTIONS: ParseOptions = ParseOptions().with_special_cases("N/A", none=True)
_WEIGHT_OPTIONS: ParseOptions = ParseOptions().with_special_cases(STRICT_PRIORITY, none=True)


def parse_port_queues(html: str | bytes) -> list[QoSPortQueue]:
    """Parse the port-to-queue table (last table on ``qos.cgi?page=port_pri``).

    Columns: Port, Queue (1-based, or ``"N/A"``).
    """
    doc = parse_html(html)
    return [
        QoSPortQueue(port=cells[0], queue=parse_int(cells[1], _QUEUE_OPTIONS))
        for cells in extract_table(doc, skip_rows=1, min_cells=2)
        if cells[0] and cells[1]
    ]


def parse_queue_weights(html: str | bytes) -> list[QoSQueueWeight]:
    """Parse the scheduler table (last table on ``qos.cgi?page=pkt_sch``).

    Columns: Queue, Weight (``"Strict priority"`` or 1-15).
    """
    doc = parse_html(html)
    weights: list[QoSQueueWeight] = []
    for cells in extract_table(doc, skip_rows=1, min_cells=2):
        queue = parse_int(cells[0], ParseOptions().with_default(-1).quiet())
        if queue is None or queue < 1:
            logger.debug("Skipping scheduler row %r", cells)
            continue
        weights.append(QoSQueueWeight(queue=queue, weight=parse_int(cells[1], _WEIGHT_OPTIONS)))
    return weights
