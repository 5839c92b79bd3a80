"""CLI adapter to seed default categories into the ledger database.

This module wires the SeedDefaultCategoriesUseCase to the concrete database
adapter. Re-running it does not duplicate categories.
"""

import os

from finboard.infrastructure.container import build_seed_categories_use_case
from finboard.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the default categories seeding use case."""
    logger = get_app_logger()
    use_case_name = os.getenv("FINBOARD_USE_CASE", "personal").strip().lower()
    use_case = build_seed_categories_use_case()

    try:
        result = use_case.execute(use_case_name)
    except ValueError as exc:
        logger.error(str(exc))
        return

    print(
        f"Seeded {result.inserted_count} default categories "
        f"({result.existing_count} already present)."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
