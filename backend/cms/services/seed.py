"""Default categories and tags created on first start."""

from sqlalchemy.orm import Session

from cms.logger import db_logger
from cms.models.category import Category
from cms.models.tag import Tag
from cms.repositories.unit_of_work import UnitOfWork

DEFAULT_CATEGORIES = [
    ("Technology", "Technology related content", "#007bff"),
    ("Business", "Business and entrepreneurship", "#28a745"),
    ("Culture", "Arts and culture", "#dc3545"),
]

DEFAULT_TAGS = ["AI", "Innovation", "Startup"]


def seed_reference_data(db: Session) -> int:
    """Insert any missing default categories and tags. Returns rows added."""
    added = 0
    with UnitOfWork(db) as uow:
        for name, description, color in DEFAULT_CATEGORIES:
            if uow.categories.get_by_name(name, include_deleted=True) is None:
                uow.categories.add(
                    Category(
                        name=name,
                        description=description,
                        color=color,
                        created_by="System",
                        updated_by="System",
                    )
                )
                added += 1

        for name in DEFAULT_TAGS:
            if uow.tags.get_by_name(name, include_deleted=True) is None:
                uow.tags.add(Tag(name=name, created_by="System", updated_by="System"))
                added += 1

    if added:
        db_logger.info(f"Seeded {added} default categories/tags")
    return added
