"""Admin management of categories."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from compass.models.category import Category
from compass.services.errors import ConflictError, ContentNotFoundError

logger = logging.getLogger(__name__)


def create_category(db: Session, name: str | None) -> Category:
    """Create a category. Raises ValueError on a blank name, ConflictError on a duplicate."""
    name = (name or "").strip()
    if not name:
        raise ValueError("Category name is required.")

    duplicate = f'Category name "{name}" already exists.'
    if db.query(Category).filter(Category.name == name).first():
        raise ConflictError(duplicate)

    category = Category(name=name)
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(duplicate) from None

    logger.info("Admin created category %s (%s)", category.id, category.name)
    return category


def delete_category(db: Session, category_id: uuid.UUID) -> None:
    """Delete a category that no club or event uses."""
    category = db.get(Category, category_id)
    if category is None:
        raise ContentNotFoundError("Category not found.")

    links = []
    if category.clubs:
        links.append(f"{len(category.clubs)} clubs")
    if category.events:
        links.append(f"{len(category.events)} events")
    if links:
        logger.warning("Refused to delete category %s which is still in use", category_id)
        raise ConflictError(f"Cannot delete category: It is linked to {', '.join(links)}.")

    db.delete(category)
    db.commit()
    logger.info("Admin deleted category %s", category_id)
