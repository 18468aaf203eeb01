"""Blog routers for /api/blogs (ASME) and /api/legal-blogs (ASME Abogados).

Both collections share the same endpoints; only the table differs.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.db.enums import ROLES_CAN_MANAGE_CONTENT, BlogKind
from asme.schemas.blog import BlogPostCreate, BlogPostRead, BlogPostResponse, BlogPostUpdate
from asme.services import blog_service


def _build_router(kind: BlogKind) -> APIRouter:
    router = APIRouter()
    can_manage = require_roles(ROLES_CAN_MANAGE_CONTENT)

    def get_post_or_404(db: Session, post_id: UUID):
        post = blog_service.get_post(db, kind, post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post

    @router.get("", response_model=list[BlogPostRead])
    def list_posts(
        category: str | None = Query(None),
        db: Session = Depends(get_db),
    ):
        """Public feed of non-archived posts, newest first."""
        return blog_service.list_posts(db, kind, category=category)

    @router.get(
        "/manage",
        response_model=list[BlogPostRead],
        dependencies=[Depends(can_manage)],
    )
    def list_all_posts(db: Session = Depends(get_db)):
        """Dashboard list including archived posts."""
        return blog_service.list_posts(db, kind, include_archived=True)

    @router.get("/{slug}", response_model=BlogPostRead)
    def get_post_by_slug(slug: str, db: Session = Depends(get_db)):
        post = blog_service.get_post_by_slug(db, kind, slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post

    @router.post(
        "",
        response_model=BlogPostResponse,
        status_code=201,
        dependencies=[Depends(require_csrf_header), Depends(can_manage)],
    )
    def create_post(data: BlogPostCreate, db: Session = Depends(get_db)):
        try:
            post = blog_service.create_post(db, kind, data)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return BlogPostResponse(data=post)

    @router.patch(
        "/{post_id}",
        response_model=BlogPostRead,
        dependencies=[Depends(require_csrf_header), Depends(can_manage)],
    )
    def update_post(post_id: UUID, data: BlogPostUpdate, db: Session = Depends(get_db)):
        post = get_post_or_404(db, post_id)
        try:
            return blog_service.update_post(db, post, data)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.post(
        "/{post_id}/archive",
        response_model=BlogPostRead,
        dependencies=[Depends(require_csrf_header), Depends(can_manage)],
    )
    def archive_post(post_id: UUID, db: Session = Depends(get_db)):
        post = get_post_or_404(db, post_id)
        return blog_service.set_archived(db, post, True)

    @router.post(
        "/{post_id}/unarchive",
        response_model=BlogPostRead,
        dependencies=[Depends(require_csrf_header), Depends(can_manage)],
    )
    def unarchive_post(post_id: UUID, db: Session = Depends(get_db)):
        post = get_post_or_404(db, post_id)
        return blog_service.set_archived(db, post, False)

    @router.delete(
        "/{post_id}",
        status_code=204,
        dependencies=[Depends(require_csrf_header), Depends(can_manage)],
    )
    def delete_post(post_id: UUID, db: Session = Depends(get_db)):
        """Delete the post and the Space media it referenced."""
        post = get_post_or_404(db, post_id)
        blog_service.delete_post(db, post)
        return None

    return router


router = _build_router(BlogKind.ASME)
legal_router = _build_router(BlogKind.LEGAL)
