import logging
from collections import defaultdict

import httpx

from gridsearch.grid import Grid
from gridsearch.solver import SearchReport

logger = logging.getLogger("gridsearch")


def build_notification_body(report: SearchReport, words_per_group: int = 10) -> str:
    """Words grouped by length, shortest group first, then a per-length count line."""
    by_length: dict[int, list[str]] = defaultdict(list)
    for w in report.unique_words:
        by_length[len(w)].append(w)

    selected = []
    for length in sorted(by_length):
        selected.extend(by_length[length][:words_per_group])

    counts = " | ".join(f"{l}L:{len(g)}" for l, g in sorted(by_length.items()))
    return ",".join(selected) + "\n\n" + counts


async def send_notification(
    report: SearchReport,
    grid: Grid,
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    words_per_group: int = 10,
    transport: httpx.AsyncBaseTransport | None = None,
):
    """Send a search summary to ntfy. Best-effort: failures are logged, not raised."""
    try:
        title = f"Grid {grid.size}x{grid.size} - {report.unique_word_count} words"
        body = build_notification_body(report, words_per_group)

        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Tags": "mag",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except httpx.HTTPError as e:
        logger.error("Failed to send notification: %s", e)
