"""Blog service - CRUD for the two blog collections."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.enums import BlogKind
from asme.db.models import BlogPost, LegalBlogPost
from asme.schemas.blog import BlogPostCreate, BlogPostUpdate
from asme.services import media_service
from asme.utils.normalization import normalize_text, slugify
from asme.utils.sanitize import sanitize_html

logger = logging.getLogger(__name__)

BLOG_MODELS = {
    BlogKind.ASME: BlogPost,
    BlogKind.LEGAL: LegalBlogPost,
}

# Fields that point at media objects in the Space
MEDIA_FIELDS = ("featured_image", "media_url")


def model_for(kind: BlogKind) -> type[BlogPost] | type[LegalBlogPost]:
    return BLOG_MODELS[kind]


def list_posts(
    db: Session,
    kind: BlogKind,
    *,
    category: str | None = None,
    include_archived: bool = False,
) -> list:
    """Posts newest first. Public callers never see archived posts."""
    model = model_for(kind)
    query = db.query(model)
    if not include_archived:
        query = query.filter(model.archived.is_(False))
    if category:
        query = query.filter(model.category == category)
    return query.order_by(model.created_at.desc()).all()


def get_post(db: Session, kind: BlogKind, post_id: UUID):
    model = model_for(kind)
    return db.query(model).filter(model.id == post_id).first()


def get_post_by_slug(db: Session, kind: BlogKind, slug: str, *, include_archived: bool = False):
    model = model_for(kind)
    query = db.query(model).filter(model.slug == slug)
    if not include_archived:
        query = query.filter(model.archived.is_(False))
    return query.first()


def create_post(db: Session, kind: BlogKind, data: BlogPostCreate):
    """
    Create a non-archived post.

    Raises:
        ValueError: Title missing or blank
    """
    title = normalize_text(data.title)
    if not title:
        raise ValueError("Title is required")

    slug = normalize_text(data.slug) or slugify(title)
    post = model_for(kind)(
        title=title,
        content=sanitize_html(data.content, rich=True) or None,
        category=normalize_text(data.category),
        type=normalize_text(data.type),
        featured_image=normalize_text(data.featured_image),
        media_url=normalize_text(data.media_url),
        media_type=normalize_text(data.media_type),
        slug=slug,
        archived=False,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Blog post %s created in %s", post.id, kind.value)
    return post


def update_post(db: Session, post, data: BlogPostUpdate):
    """
    Apply a partial update. Replaced media is removed from the Space.

    Raises:
        ValueError: Title sent but null or blank
    """
    changes = data.model_dump(exclude_unset=True)
    if "title" in changes and not normalize_text(changes["title"]):
        raise ValueError("Title is required")

    replaced_media = []
    for field, value in changes.items():
        if field == "content":
            value = sanitize_html(value, rich=True) or None
        elif isinstance(value, str):
            value = value.strip() or None
        if field in MEDIA_FIELDS and getattr(post, field) and getattr(post, field) != value:
            replaced_media.append(getattr(post, field))
        setattr(post, field, value)

    db.commit()
    db.refresh(post)
    media_service.delete_urls_quietly(replaced_media)
    return post


def set_archived(db: Session, post, archived: bool):
    post.archived = archived
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post) -> None:
    """Delete the row, then any Space media it referenced."""
    media_urls = [getattr(post, field) for field in MEDIA_FIELDS]
    post_id = post.id
    db.delete(post)
    db.commit()
    media_service.delete_urls_quietly(media_urls)
    logger.info("Blog post %s deleted", post_id)
