"""Event log endpoints.

These endpoints expose the mutation history and check that replaying it
reproduces the live tree.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from api.dependencies import FileSystemDep
from api.models import EventEntry, EventListResponse, ReplayVerificationResponse
from vfs.errors import VFSError
from vfs.event import FileSystemEventType

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/events",
    tags=["events"],
)


@router.get("", response_model=EventListResponse)
async def list_events(
    fs: FileSystemDep,
    event_type: Optional[int] = Query(
        default=None,
        ge=int(min(FileSystemEventType)),
        le=int(max(FileSystemEventType)),
    ),
    limit: Optional[int] = None,
    offset: int = 0,
):
    """Query the event log, oldest first.

    Args:
        event_type: Only return events of this type (wire value 0-3).
        limit: Maximum number of events to return.
        offset: Number of events to skip (for pagination).

    Returns:
        EventListResponse with the matching events and the total log size.
    """
    indexed = list(enumerate(fs.event_log.events))
    if event_type is not None:
        indexed = [(i, e) for i, e in indexed if e.event_type == event_type]

    if limit:
        indexed = indexed[offset : offset + limit]
    else:
        indexed = indexed[offset:]

    entries = [EventEntry.from_event(i, e) for i, e in indexed]
    return EventListResponse(
        events=entries,
        count=len(entries),
        total_count=len(fs.event_log),
    )


@router.post("/verify", response_model=ReplayVerificationResponse)
async def verify_replay(fs: FileSystemDep):
    """Replay the log into a fresh tree and compare it with the live tree.

    The comparison covers names, node kinds and file contents. Timestamps
    and the working directory are not compared.
    """
    live_structure = fs.tree.structure()
    try:
        rebuilt = fs.rebuild()
    except VFSError as e:
        logger.warning(f"Replay verification failed: {e}")
        return ReplayVerificationResponse(
            consistent=False,
            events_replayed=len(fs.event_log),
            live_node_count=len(fs.tree.nodes),
            rebuilt_node_count=0,
            error=str(e),
        )

    return ReplayVerificationResponse(
        consistent=rebuilt.tree.structure() == live_structure,
        events_replayed=len(fs.event_log),
        live_node_count=len(fs.tree.nodes),
        rebuilt_node_count=len(rebuilt.tree.nodes),
    )
