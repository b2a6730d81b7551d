"""
api/routes/comments.py -- Comments service endpoints.

Routes:
  GET  /posts/{post_id}/comments  -- the post's comments, [] if none
  POST /posts/{post_id}/comments  -- append {content}; 201 with the full list

content is not validated or bounded. A body without content stores null.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from api.models import CommentResponse
from api.validation import read_json_body
from comments.store import CommentStore

router = APIRouter()


@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
def list_comments(request: Request, post_id: str) -> list[CommentResponse]:
    store: CommentStore = request.app.state.comment_store
    return [CommentResponse.from_comment(c) for c in store.list_comments(post_id)]


@router.post("/posts/{post_id}/comments", response_model=list[CommentResponse], status_code=201)
async def create_comment(request: Request, post_id: str) -> list[CommentResponse]:
    body = await read_json_body(request)
    content = body.get("content") if isinstance(body, dict) else None
    store: CommentStore = request.app.state.comment_store
    comments = store.append_comment(post_id, content)
    return [CommentResponse.from_comment(c) for c in comments]
