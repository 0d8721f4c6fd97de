from dailydhan.database.category_dao import CategoryDAO
from dailydhan.database.category_seeder import backfill_colors, backfill_icons
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.category import Category
from dailydhan.utils.constants import TRANSACTION_TYPES


class CategoryService:
    def __init__(self, category_dao: CategoryDAO, db: DatabaseManager):
        self._dao = category_dao
        self._db = db

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_type(self, type_: str) -> list[Category]:
        return self._dao.get_by_type(type_)

    def get_expense_categories(self) -> list[Category]:
        return self._dao.get_by_type("expense")

    def save(self, name: str, type_: str, icon: str | None = None,
             color: str | None = None) -> Category:
        """Add a category, or fill the blank icon/color of an existing (name, type).

        Never creates a second row for the same (name, type) and never
        overwrites an icon or color that is already set.
        """
        name = self._validate(name, type_)
        icon = (icon or "").strip() or None
        color = (color or "").strip() or None
        existing = self._dao.get_by_name_and_type(name, type_)
        if existing:
            category_id = self._dao.fill_blanks(existing.id, icon, color).id
        else:
            category_id = self._dao.create(name, type_, icon, color).id
        backfill_colors(self._db)
        backfill_icons(self._db)
        return self._dao.get_by_id(category_id)

    def update(self, category_id: int, name: str, type_: str,
               icon: str | None, color: str | None) -> Category:
        name = self._validate(name, type_)
        if self._dao.get_by_id(category_id) is None:
            raise ValueError("Category not found.")
        other = self._dao.get_by_name_and_type(name, type_)
        if other and other.id != category_id:
            raise ValueError(f"A {type_} category named '{name}' already exists.")
        self._dao.update(
            category_id, name, type_,
            (icon or "").strip() or None, (color or "").strip() or None,
        )
        backfill_colors(self._db)
        backfill_icons(self._db)
        return self._dao.get_by_id(category_id)

    def delete(self, category_id: int):
        cat = self._dao.get_by_id(category_id)
        if cat is None:
            raise ValueError("Category not found.")
        in_use = self._dao.count_references(category_id)
        if in_use:
            raise ValueError(
                f"Category '{cat.name}' is in use by {in_use} transaction(s) "
                "or recurring transaction(s) and cannot be deleted."
            )
        self._dao.delete(category_id)

    @staticmethod
    def _validate(name: str, type_: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        if type_ not in TRANSACTION_TYPES:
            raise ValueError("Category type must be income or expense.")
        return name
