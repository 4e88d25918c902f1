"""Tests for DisplayContext settings handling."""

from __future__ import annotations

from vscsdeck.core.models.context import ContextKind, ContextMode, DisplayContext


class TestFromSettings:
    def test_defaults_to_auto(self):
        ctx = DisplayContext.from_settings("c1", ContextKind.LINE, {})
        assert ctx.mode is None
        assert ctx.effective_mode is ContextMode.AUTO

    def test_reads_sdk_keys(self):
        ctx = DisplayContext.from_settings(
            "c1",
            ContextKind.LINE,
            {"mode": "manual", "targetId": "GND_coldline", "autoAssignId": " 3 "},
        )
        assert ctx.effective_mode is ContextMode.MANUAL
        assert ctx.manual_target_id == "GND_coldline"
        assert ctx.slot == "3"

    def test_none_settings(self):
        ctx = DisplayContext.from_settings("c1", ContextKind.TOGGLE, None)
        assert ctx.toggle_name is None


class TestMergeSettings:
    def test_only_known_keys_merge(self):
        ctx = DisplayContext.from_settings("c1", ContextKind.LINE, {"targetId": "A"})
        merged = ctx.merge_settings({"autoAssignId": 2, "colour": "red"})
        assert merged.manual_target_id == "A"
        assert merged.auto_slot_id == "2"

    def test_none_clears(self):
        ctx = DisplayContext.from_settings("c1", ContextKind.LINE, {"targetId": "A"})
        assert ctx.merge_settings({"targetId": None}).manual_target_id is None

    def test_invalid_mode_ignored(self):
        ctx = DisplayContext.from_settings("c1", ContextKind.LINE, {"mode": "manual"})
        assert ctx.merge_settings({"mode": "sideways"}).mode is ContextMode.MANUAL

    def test_original_is_unchanged(self):
        ctx = DisplayContext.from_settings("c1", ContextKind.LINE, {})
        ctx.merge_settings({"targetId": "A"})
        assert ctx.manual_target_id is None


class TestToSettings:
    def test_round_trips_through_sdk_keys(self):
        settings = {"mode": "auto", "autoAssignId": "1", "toggleName": "mute"}
        ctx = DisplayContext.from_settings("c1", ContextKind.LINE, settings)
        assert ctx.to_settings() == settings

    def test_omits_unset(self):
        assert DisplayContext.from_settings("c1", ContextKind.LINE, {}).to_settings() == {}
