"""Unit tests for PreferenceService and font-size arithmetic."""

import pytest

from services.preference_service import (
    FONT_SIZE_DEFAULT,
    PreferenceService,
    compute_font_size,
    parse_font_size,
)


class TestComputeFontSize:
    def test_increase_and_decrease_step_by_ten(self):
        assert compute_font_size(100, "increase") == 110
        assert compute_font_size(100, "decrease") == 90

    def test_increase_saturates_at_max(self):
        assert compute_font_size(300, "increase") == 300
        assert compute_font_size(295, "increase") == 300

    def test_decrease_saturates_at_min(self):
        assert compute_font_size(50, "decrease") == 50
        assert compute_font_size(55, "decrease") == 50

    def test_set_clamps_into_range(self):
        assert compute_font_size(100, "set", 175) == 175
        assert compute_font_size(100, "set", 1000) == 300
        assert compute_font_size(100, "set", 10) == 50

    def test_set_without_value_leaves_size_unchanged(self):
        assert compute_font_size(130, "set") == 130

    def test_reset_returns_default(self):
        assert compute_font_size(240, "reset") == FONT_SIZE_DEFAULT == 100

    def test_unknown_action_raises(self):
        with pytest.raises(ValueError, match="Unknown font size action"):
            compute_font_size(100, "double")


class TestPreferenceService:
    def test_get_or_create_is_idempotent(self, any_storage):
        service = PreferenceService(any_storage)

        first = service.get_or_create("user-1")
        second = service.get_or_create("user-1")

        assert first.id == second.id
        assert first.contrast_level == "normal"
        assert first.font_size == "100"
        assert first.focus_mode is False

    def test_update_creates_missing_record(self, any_storage):
        service = PreferenceService(any_storage)

        record = service.update("new-user", {"focus_mode": True, "contrast_level": "high"})

        assert record.user_id == "new-user"
        assert record.focus_mode is True
        assert record.contrast_level == "high"
        assert record.read_aloud is False

    def test_update_is_partial(self, any_storage):
        service = PreferenceService(any_storage)
        service.update("user-1", {"focus_mode": True})

        record = service.update("user-1", {"read_aloud": True})

        assert record.focus_mode is True
        assert record.read_aloud is True

    def test_adjust_font_size_persists(self, any_storage):
        service = PreferenceService(any_storage)

        result = service.adjust_font_size("user-1", "increase")

        assert result.previous_size == 100
        assert result.font_size == 110
        assert result.percentage == "110%"
        assert service.get_font_size("user-1") == 110

    def test_unparseable_stored_size_falls_back_to_default(self, any_storage):
        any_storage.create_user_preferences("user-1", font_size="large")
        record = any_storage.get_user_preferences("user-1")

        assert parse_font_size(record) == 100
