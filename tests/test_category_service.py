import pytest

from dailydhan.utils.constants import palette_color_for


class TestSave:
    def test_existing_icon_not_overwritten(self, category_service, category_dao):
        saved = category_service.save("Salary", "income", icon="new-icon")

        rows = [c for c in category_dao.get_by_type("income") if c.name == "Salary"]
        assert len(rows) == 1
        assert saved.icon == "cash-multiple"

    def test_blank_icon_is_filled(self, category_service, db):
        conn = db.get_connection()
        conn.execute("UPDATE categories SET icon = '' WHERE name = 'Salary'")
        conn.commit()

        saved = category_service.save("Salary", "income", icon="new-icon")

        assert saved.icon == "new-icon"

    def test_new_category_gets_defaults(self, category_service):
        pets = category_service.save("Pets", "expense")
        assert pets.id is not None
        assert pets.color == palette_color_for(pets.id)
        assert pets.icon == "dots-horizontal"

    def test_name_is_trimmed(self, category_service):
        assert category_service.save("  Pets  ", "expense").name == "Pets"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, category_service, name):
        with pytest.raises(ValueError, match="cannot be empty"):
            category_service.save(name, "expense")

    def test_invalid_type_rejected(self, category_service):
        with pytest.raises(ValueError):
            category_service.save("Pets", "transfer")


class TestUpdateDelete:
    def test_rename_to_existing_name_rejected(self, category_service, food):
        with pytest.raises(ValueError, match="already exists"):
            category_service.update(food.id, "Groceries", "expense", None, None)

    def test_update_backfills_cleared_color(self, category_service, food):
        updated = category_service.update(food.id, "Food", "expense", "pizza", "")
        assert updated.icon == "pizza"
        assert updated.color == palette_color_for(food.id)

    def test_delete_in_use_rejected(self, category_service, transaction_service, food):
        transaction_service.create(10, "expense", "2024-01-01", category_id=food.id)
        with pytest.raises(ValueError, match="in use"):
            category_service.delete(food.id)

    def test_delete_removes_budgets(self, category_service, budget_service, category_dao, food):
        budget_service.save(food.id, 500, "monthly", 2024, 1)

        category_service.delete(food.id)

        assert category_dao.get_by_id(food.id) is None
        assert budget_service.get_all() == []
