"""Use case to seed default categories without duplicating them."""

from dataclasses import dataclass
import uuid

from finboard.application.ports.ledger_repository import CategoriesStorePort
from finboard.domain.constants import (
    BUSINESS_CATEGORIES,
    BUSINESS_USE_CASES,
    PERSONAL_CATEGORIES,
    PERSONAL_USE_CASES,
)
from finboard.domain.models import Category, CategoryType
from finboard.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SeedCategoriesResult:
    """Outcome of a seeding run."""

    inserted_count: int
    existing_count: int


class SeedDefaultCategoriesUseCase:
    """Insert default categories that are not present yet.

    Categories are matched on (name, type), so re-running the use case is a
    no-op once the defaults exist.
    """

    def __init__(
        self,
        categories_store: CategoriesStorePort,
        logger=None,
        id_factory=None,
    ) -> None:
        """Initialize the use case.

        Args:
            categories_store: Port providing category reads and inserts.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional callable returning new category ids.
        """
        self._categories_store = categories_store
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

    def execute(self, use_case: str = "personal") -> SeedCategoriesResult:
        """Seed the default set for a user profile.

        Args:
            use_case: personal, freelancer, small_business, or agency.

        Returns:
            SeedCategoriesResult: Inserted and pre-existing counts.

        Raises:
            ValueError: If the use case is unknown.
        """
        if use_case in PERSONAL_USE_CASES:
            defaults = PERSONAL_CATEGORIES
        elif use_case in BUSINESS_USE_CASES:
            defaults = BUSINESS_CATEGORIES
        else:
            raise ValueError(f"Unknown use case: {use_case}")

        existing = self._categories_store.fetch_categories()
        present = {
            (category.name.strip().lower(), category.category_type.value)
            for category in existing
        }
        missing = []
        for name, category_type, icon, color in defaults:
            identity = (name.lower(), category_type)
            if identity in present:
                continue
            present.add(identity)
            missing.append(
                Category(
                    id=self._id_factory(),
                    name=name,
                    category_type=CategoryType(category_type),
                    color=color,
                    icon=icon,
                    is_default=True,
                )
            )

        inserted = 0
        if missing:
            inserted = self._categories_store.insert_categories(missing)
        self._logger.info(
            f"Seeded {inserted} default {use_case} categories "
            f"({len(existing)} already present)"
        )
        return SeedCategoriesResult(
            inserted_count=inserted,
            existing_count=len(existing),
        )


__all__ = ["SeedDefaultCategoriesUseCase", "SeedCategoriesResult"]
