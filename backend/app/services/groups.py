"""Interest groups, memberships and group posts."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models import Group, GroupMember, GroupPost, GroupRole
from app.services.users import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)


def _group_options():
    return (
        selectinload(Group.creator),
        selectinload(Group.members).selectinload(GroupMember.user),
    )


def create_group(
    creator_id: str,
    name: str,
    description: str | None,
    image_url: str | None,
    db: Session,
) -> Group:
    """Create a group with its creator as the single admin member."""

    group = Group(
        name=name,
        description=description,
        image_url=image_url,
        created_by=creator_id,
        member_count=1,
    )
    try:
        db.add(group)
        db.flush()
        db.add(GroupMember(group_id=group.id, user_id=creator_id, role=GroupRole.ADMIN))
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to create group %r", name, exc_info=True)
        raise
    logger.info("User %s created group %s", creator_id, group.id)
    return get_group(group.id, db)


def get_membership(group_id: int, user_id: str, db: Session) -> GroupMember | None:
    stmt = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id,
    )
    return db.execute(stmt).scalar_one_or_none()


def join_group(user_id: str, group_id: int, db: Session) -> bool:
    """Add a member and bump ``member_count``; ``False`` if already a member."""

    if get_membership(group_id, user_id, db) is not None:
        return False
    try:
        db.add(GroupMember(group_id=group_id, user_id=user_id, role=GroupRole.MEMBER))
        db.flush()
        db.execute(
            update(Group)
            .where(Group.id == group_id)
            .values(member_count=Group.member_count + 1)
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Duplicate join by %s on group %s ignored", user_id, group_id)
        return False
    except Exception:
        db.rollback()
        logger.error("Failed to join group %s", group_id, exc_info=True)
        raise
    return True


def leave_group(user_id: str, group_id: int, db: Session) -> bool:
    """Remove a member and decrement ``member_count``; ``False`` if not a member."""

    try:
        result = db.execute(
            delete(GroupMember).where(
                GroupMember.group_id == group_id,
                GroupMember.user_id == user_id,
            )
        )
        removed = result.rowcount or 0
        if removed == 0:
            db.rollback()
            return False
        db.execute(
            update(Group)
            .where(Group.id == group_id, Group.member_count >= removed)
            .values(member_count=Group.member_count - removed)
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to leave group %s", group_id, exc_info=True)
        raise
    return True


def get_user_groups(user_id: str, db: Session) -> list[Group]:
    member_of = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
    stmt = (
        select(Group)
        .where(Group.id.in_(member_of))
        .options(*_group_options())
        .order_by(Group.created_at.desc(), Group.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def get_group(group_id: int, db: Session) -> Group | None:
    stmt = select(Group).where(Group.id == group_id).options(*_group_options())
    return db.execute(stmt).scalar_one_or_none()


def search_groups(query: str, db: Session, limit: int = 10) -> list[Group]:
    stmt = (
        select(Group)
        .where(func.lower(Group.name).like(contains_pattern(query), escape=LIKE_ESCAPE))
        .options(selectinload(Group.creator))
        .order_by(Group.member_count.desc(), Group.id)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def create_group_post(
    group_id: int,
    author_id: str,
    content: str,
    image_url: str | None,
    db: Session,
) -> GroupPost:
    post = GroupPost(group_id=group_id, user_id=author_id, content=content, image_url=image_url)
    db.add(post)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to post in group %s", group_id, exc_info=True)
        raise
    db.refresh(post)
    return post


def get_group_posts(group_id: int, db: Session, limit: int = 20, offset: int = 0) -> list[GroupPost]:
    stmt = (
        select(GroupPost)
        .where(GroupPost.group_id == group_id)
        .options(selectinload(GroupPost.author))
        .order_by(GroupPost.created_at.desc(), GroupPost.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars().all())
