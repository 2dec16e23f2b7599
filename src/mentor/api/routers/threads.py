"""Threads API router.

- GET    /threads                        - List all threads (not cached)
- POST   /threads                        - Create a thread
- GET    /threads/{thread_id}            - Get a thread (cache-aside)
- DELETE /threads/{thread_id}            - Delete a thread (idempotent)
- POST   /threads/{thread_id}/messages   - Post a message
- PATCH  /threads/{thread_id}/open       - Reopen a thread
- PATCH  /threads/{thread_id}/close      - Close a thread
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from mentor.api.deps import ThreadId, ThreadServiceDep
from mentor.api.responses import no_content, success_response
from mentor.core.model import CreateThreadRequest, SendMessageRequest

router = APIRouter(prefix="/threads", tags=["Threads"])


@router.get("")
async def get_all_threads(service: ThreadServiceDep) -> Response:
    """List every thread with author and participants resolved."""
    threads = await service.list_threads()
    return success_response({"threads": threads})


@router.post("", status_code=201)
async def create_thread(body: CreateThreadRequest, service: ThreadServiceDep) -> Response:
    """Create a thread. Participants' thread lists are invalidated."""
    thread = await service.create_thread(body.author, body.participants, body.title, body.topic)
    return success_response({"thread": thread}, status_code=201)


@router.get("/{thread_id}")
async def get_thread(thread_id: ThreadId, service: ThreadServiceDep) -> Response:
    """Get a thread with participants and messages resolved."""
    result = await service.get_thread(thread_id)
    return success_response({"thread": result.value}, from_cache=result.from_cache)


@router.delete("/{thread_id}", status_code=204)
async def delete_thread(thread_id: ThreadId, service: ThreadServiceDep) -> Response:
    await service.delete_thread(thread_id)
    return no_content()


@router.post("/{thread_id}/messages", status_code=201)
async def send_message(
    thread_id: ThreadId, body: SendMessageRequest, service: ThreadServiceDep
) -> Response:
    message = await service.send_message(thread_id, body.sender_id, body.body)
    return success_response({"message": message}, status_code=201)


@router.patch("/{thread_id}/open")
async def open_thread(thread_id: ThreadId, service: ThreadServiceDep) -> Response:
    thread = await service.open_thread(thread_id)
    return success_response({"thread": thread})


@router.patch("/{thread_id}/close")
async def close_thread(thread_id: ThreadId, service: ThreadServiceDep) -> Response:
    thread = await service.close_thread(thread_id)
    return success_response({"thread": thread})
