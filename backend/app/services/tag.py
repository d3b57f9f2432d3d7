"""Tag service for the tattoo taxonomy."""

from __future__ import annotations

from sqlalchemy import exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.db.models import AssignmentType, Tag, TagAssignment, TagCategory, Tattoo
from app.db.scopes import tag_scopes
from app.services.scoring import popularity_score, ratchet
from app.utils.slug import slugify, unique_slug

logger = get_logger(__name__)

# Predefined taxonomy: category -> [(name, is_featured, [child names])]
DEFAULT_TAGS: dict[TagCategory, list[tuple[str, bool, list[str]]]] = {
    TagCategory.STYLE: [
        ("Traditional", True, ["Old School", "American Traditional"]),
        ("Realism", True, ["Photorealistic", "Hyperrealistic"]),
        ("Neo Traditional", True, ["New School"]),
        ("Watercolor", True, ["Aquarelle", "Paint Splash"]),
        ("Geometric", True, ["Sacred Geometry"]),
        ("Minimalist", True, ["Fine Line", "Small Tattoo"]),
        ("Japanese", True, ["Irezumi"]),
        ("Blackwork", False, ["Solid Black"]),
    ],
    TagCategory.BODY_PART: [
        ("Bras", True, ["Avant-bras", "Biceps"]),
        ("Dos", True, ["Haut du dos", "Bas du dos"]),
        ("Torse", True, ["Sternum", "Côtes"]),
        ("Jambe", True, ["Cuisse", "Mollet", "Cheville"]),
        ("Main", False, ["Doigt", "Poignet"]),
        ("Cou", False, ["Nuque"]),
    ],
    TagCategory.SUBJECT: [
        ("Animaux", True, ["Lion", "Loup", "Oiseau", "Chat"]),
        ("Fleurs", True, ["Rose", "Pivoine", "Lotus"]),
        ("Dragon", False, []),
        ("Crâne", False, []),
    ],
    TagCategory.COLOR: [
        ("Noir et gris", True, []),
        ("Couleur", True, []),
    ],
    TagCategory.SIZE: [
        ("Petit", False, []),
        ("Moyen", False, []),
        ("Grand", False, []),
    ],
}


class TagError(Exception):
    """Error during tag operations."""
    pass


class TagAssignmentExistsError(TagError):
    """The tag is already attached to the tattoo."""
    pass


class TagService:
    """Service for tags, their hierarchy and their tattoo assignments."""

    def __init__(self, db: AsyncSession):
        """Initialize the tag service.

        Args:
            db: The database session.
        """
        self.db = db

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    async def get_tag(self, tag_id: int) -> Tag | None:
        return await self.db.get(Tag, tag_id)

    async def get_by_slug(self, slug: str) -> Tag | None:
        result = await self.db.execute(select(Tag).where(Tag.slug == slug))
        return result.scalar_one_or_none()

    async def list_tags(
        self,
        category: TagCategory | None = None,
        featured: bool = False,
        trending: bool = False,
        popular: bool = False,
        approved_only: bool = False,
        roots_only: bool = False,
        q: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Tag], int]:
        """List tags through the query scopes.

        Args:
            category: Restrict to one category.
            featured: Only featured tags, by display order.
            trending: Only trending tags, by usage.
            popular: Only tags above the listing score floor, best first.
            approved_only: Hide tags awaiting approval.
            roots_only: Only top-level tags.
            q: Substring search on name and description.
            page: 1-based page number.
            page_size: Items per page.

        Returns:
            The page of tags and the total number of matches.
        """
        query = select(Tag)

        if category:
            query = tag_scopes.by_category(query, category)
        if approved_only:
            query = tag_scopes.approved(query)
        if roots_only:
            query = tag_scopes.roots(query)
        if q:
            query = tag_scopes.search(query, q)
        if featured:
            query = tag_scopes.featured(query)
        if trending:
            query = tag_scopes.trending(query)
        if popular:
            query = tag_scopes.popular(query)

        total_result = await self.db.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        total = total_result.scalar() or 0

        query = query.order_by(Tag.name)
        query = query.offset((page - 1) * page_size).limit(page_size)
        result = await self.db.execute(query)

        return list(result.scalars().all()), total

    # -------------------------------------------------------------------------
    # Hierarchy
    # -------------------------------------------------------------------------

    async def get_children(self, tag: Tag) -> list[Tag]:
        """Direct children of a tag, by display order then name."""
        result = await self.db.execute(
            select(Tag)
            .where(Tag.parent_tag_id == tag.id)
            .order_by(Tag.display_order, Tag.name)
        )
        return list(result.scalars().all())

    async def get_ancestors(self, tag: Tag) -> list[Tag]:
        """Chain of parents from the root down to the tag's direct parent."""
        ancestors: list[Tag] = []
        seen = {tag.id}
        parent_id = tag.parent_tag_id

        while parent_id is not None and parent_id not in seen:
            parent = await self.db.get(Tag, parent_id)
            if parent is None:
                break
            ancestors.append(parent)
            seen.add(parent.id)
            parent_id = parent.parent_tag_id

        ancestors.reverse()
        return ancestors

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_tag(
        self,
        name: str,
        category: TagCategory,
        slug: str | None = None,
        description: str | None = None,
        parent_tag_id: int | None = None,
        level: int | None = None,
        display_order: int = 0,
        is_featured: bool = False,
        is_trending: bool = False,
        requires_approval: bool = False,
        created_by: str | None = None,
        translations: dict[str, dict[str, str]] | None = None,
        color_code: str | None = None,
        icon_name: str | None = None,
    ) -> Tag:
        """Create a tag.

        The slug is derived from the name when not given. Without an explicit
        level, a child tag sits one level below its parent. Tags that require
        approval start unapproved.

        Raises:
            TagError: If the parent tag does not exist.
        """
        parent: Tag | None = None
        if parent_tag_id is not None:
            parent = await self.db.get(Tag, parent_tag_id)
            if parent is None:
                raise TagError(f"Parent tag {parent_tag_id} not found")

        if level is None:
            level = (parent.level or 0) + 1 if parent else 0

        if slug is None:
            slug = await unique_slug(name, self._slug_exists, fallback="tag")

        tag = Tag(
            name=name.strip(),
            slug=slug,
            description=description,
            category=category,
            parent_tag_id=parent_tag_id,
            level=level,
            display_order=display_order,
            usage_count=0,
            is_featured=is_featured,
            is_trending=is_trending,
            popularity_score=0.0,
            requires_approval=requires_approval,
            is_approved=not requires_approval,
            created_by=created_by,
            translations=translations,
            color_code=color_code,
            icon_name=icon_name,
        )
        self.db.add(tag)
        await self.db.flush()

        logger.info(
            "tag_created",
            tag_id=tag.id,
            slug=tag.slug,
            category=category.value,
            level=level,
        )

        return tag

    async def increment_usage(self, tag: Tag) -> Tag:
        """Count one more use of the tag and refresh its popularity score."""
        self._apply_usage(tag)
        await self.db.flush()

        logger.debug(
            "tag_usage_incremented",
            tag_id=tag.id,
            usage_count=tag.usage_count,
            popularity_score=tag.popularity_score,
        )

        return tag

    async def approve(self, tag: Tag, approver: str) -> Tag:
        """Mark a tag approved. Approving twice keeps the latest approver."""
        tag.is_approved = True
        tag.approved_by = approver
        await self.db.flush()

        logger.info("tag_approved", tag_id=tag.id, approved_by=approver)

        return tag

    async def set_translation(
        self,
        tag: Tag,
        locale: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Tag:
        """Merge translated fields into ``translations[locale]``.

        Fields left as None keep whatever was stored for that locale.
        """
        # Rebuild the mapping so the JSON column registers the change
        translations = {
            key: dict(value) for key, value in (tag.translations or {}).items()
        }
        entry = translations.get(locale, {})
        if name is not None:
            entry["name"] = name
        if description is not None:
            entry["description"] = description
        translations[locale] = entry
        tag.translations = translations

        await self.db.flush()

        logger.debug("tag_translation_set", tag_id=tag.id, locale=locale)

        return tag

    async def attach_to_tattoo(
        self,
        tag: Tag,
        tattoo: Tattoo,
        relevance_score: float = 1.0,
        is_primary: bool = False,
        assignment_type: AssignmentType = AssignmentType.MANUAL,
        is_approved: bool = True,
    ) -> TagAssignment:
        """Attach a tag to a tattoo and count the usage.

        The assignment row and the usage update are flushed together.

        Raises:
            TagError: If the relevance score is out of range.
            TagAssignmentExistsError: If the tag is already attached to the
                tattoo.
        """
        if not 0.0 <= relevance_score <= 1.0:
            raise TagError("Relevance score must be between 0 and 1")

        already_attached = await self.db.scalar(
            select(
                exists().where(
                    TagAssignment.tag_id == tag.id,
                    TagAssignment.tattoo_id == tattoo.id,
                )
            )
        )
        if already_attached:
            raise TagAssignmentExistsError("Tag already assigned to tattoo")

        assignment = TagAssignment(
            tag_id=tag.id,
            tattoo_id=tattoo.id,
            relevance_score=relevance_score,
            is_primary=is_primary,
            assignment_type=assignment_type,
            is_approved=is_approved,
        )
        self.db.add(assignment)
        self._apply_usage(tag)
        await self.db.flush()

        logger.info(
            "tag_attached_to_tattoo",
            tag_id=tag.id,
            tattoo_id=tattoo.id,
            relevance_score=relevance_score,
            is_primary=is_primary,
            assignment_type=assignment_type.value,
        )

        return assignment

    async def detach_from_tattoo(self, tag: Tag, tattoo: Tattoo) -> bool:
        """Remove a tag from a tattoo.

        Returns:
            True if removed, False if the tag was not attached.
        """
        result = await self.db.execute(
            select(TagAssignment).where(
                TagAssignment.tag_id == tag.id,
                TagAssignment.tattoo_id == tattoo.id,
            )
        )
        assignment = result.scalar_one_or_none()

        if not assignment:
            return False

        await self.db.delete(assignment)
        tag.usage_count = max((tag.usage_count or 0) - 1, 0)
        await self.db.flush()

        logger.debug("tag_detached_from_tattoo", tag_id=tag.id, tattoo_id=tattoo.id)

        return True

    async def seed_default_tags(self) -> int:
        """Seed the predefined taxonomy, skipping tags that already exist.

        Returns:
            Number of tags created.
        """
        created_count = 0

        for category, entries in DEFAULT_TAGS.items():
            for order, (name, is_featured, children) in enumerate(entries):
                parent = await self.get_by_slug(self._seed_slug(name))
                if parent is None:
                    parent = await self.create_tag(
                        name=name,
                        category=category,
                        display_order=order,
                        is_featured=is_featured,
                        created_by="system",
                    )
                    created_count += 1

                for child_order, child_name in enumerate(children):
                    if await self.get_by_slug(self._seed_slug(child_name)):
                        continue
                    await self.create_tag(
                        name=child_name,
                        category=category,
                        parent_tag_id=parent.id,
                        display_order=child_order,
                        created_by="system",
                    )
                    created_count += 1

        if created_count > 0:
            logger.info("default_tags_seeded", count=created_count)

        return created_count

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _apply_usage(self, tag: Tag) -> None:
        tag.usage_count = (tag.usage_count or 0) + 1
        tag.popularity_score = ratchet(
            tag.popularity_score,
            popularity_score(tag.usage_count, bool(tag.is_featured), bool(tag.is_trending)),
        )

    async def _slug_exists(self, slug: str) -> bool:
        return bool(await self.db.scalar(select(exists().where(Tag.slug == slug))))

    @staticmethod
    def _seed_slug(name: str) -> str:
        return slugify(name)
