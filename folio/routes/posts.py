"""Post routes.

Any authenticated user may read, edit or delete any post; there is no
per-post ownership check.
"""
from fastapi import APIRouter, Depends

from ..dependencies import get_repositories, require_session
from ..domain.entities import Session
from ..infrastructure.repositories import Repositories
from ..logger import logger
from ..schemas import PostInput

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("")
async def list_posts(
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    """All posts, newest first."""
    posts = await repos.posts.all()
    return [post.to_dict() for post in posts]


@router.post("", status_code=201)
async def create_post(
    data: PostInput,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    """Create a post authored by the session's user."""
    post = await repos.posts.create(data.title, data.content, session.user_id)
    logger.info("Post created: id={} author_id={}", post.id, post.author_id)
    return post.to_dict()


@router.get("/{post_id}")
async def get_post(
    post_id: str,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    post = await repos.posts.find(post_id)
    return post.to_dict()


@router.put("/{post_id}")
async def update_post(
    post_id: str,
    data: PostInput,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    post = await repos.posts.update(post_id, data.to_patch())
    logger.info("Post updated: id={} by user_id={}", post.id, session.user_id)
    return post.to_dict()


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    """Delete a post. Missing posts are reported as deleted too."""
    await repos.posts.delete(post_id)
    logger.info("Post deleted: id={} by user_id={}", post_id, session.user_id)
    return {"message": "Post deleted"}
