from pathlib import PurePath
from typing import ClassVar

from app.routing.models import Category


class CategoryClassifier:
    """Maps an upload's content type / extension to a category."""

    CONTENT_TYPES: ClassVar[dict[str, Category]] = {
        "image/png": Category.PICTURES,
        "image/jpeg": Category.PICTURES,
        "image/jpg": Category.PICTURES,
        "application/pdf": Category.DOCUMENTS,
    }
    EXTENSIONS: ClassVar[dict[str, Category]] = {
        ".png": Category.PICTURES,
        ".jpeg": Category.PICTURES,
        ".jpg": Category.PICTURES,
        ".pdf": Category.DOCUMENTS,
    }
    GENERIC_CONTENT_TYPES: ClassVar[frozenset[str]] = frozenset(
        {"", "application/octet-stream"}
    )

    def classify(self, content_type: str | None, filename: str) -> Category | None:
        """Return the category for an upload, or None when it must be rejected.

        A recognized content type decides on its own. The extension is only
        consulted when the client sent no content type or a generic one.
        """
        media_type = (content_type or "").split(";", 1)[0].strip().lower()
        category = self.CONTENT_TYPES.get(media_type)
        if category is not None:
            return category
        if media_type not in self.GENERIC_CONTENT_TYPES:
            return None
        return self.EXTENSIONS.get(PurePath(filename).suffix.lower())
