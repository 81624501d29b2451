"""
Tests for animation presets and name mapping.
"""
import random

import pytest


class TestPresets:
    """Tests for the curated preset list."""

    def test_thirteen_presets(self):
        from reelforge.rendering.presets import ANIMATION_PRESETS

        assert len(ANIMATION_PRESETS) == 13
        assert len({p.id for p in ANIMATION_PRESETS}) == 13

    def test_by_category(self):
        from reelforge.rendering.presets import PresetCategory, list_presets

        assert len(list_presets(PresetCategory.GENTLE)) == 3
        assert len(list_presets("dynamic")) == 3
        assert len(list_presets(PresetCategory.CINEMATIC)) == 4
        assert len(list_presets(PresetCategory.DRAMATIC)) == 3

    def test_preset_specs(self):
        """Presets expand into motion and transition specs."""
        from reelforge.rendering.models import MotionType, TransitionType
        from reelforge.rendering.presets import get_preset

        preset = get_preset("cinematic-kb-in")
        assert preset.motion.type == MotionType.KENBURNS_IN
        assert preset.motion.speed == 0.4
        assert preset.transition.type == TransitionType.FADEBLACK
        assert preset.transition.duration == 1.0
        assert get_preset("missing") is None


class TestRandomPicks:
    """Tests for the random motion and transition pickers."""

    def test_motion_never_repeats(self):
        from reelforge.rendering.presets import RANDOM_MOTION_POOL, pick_random_motion

        rng = random.Random(11)
        previous = None
        for _ in range(200):
            spec = pick_random_motion(previous, rng)
            assert spec.type != previous
            assert spec.type in RANDOM_MOTION_POOL
            assert 0.3 <= spec.speed <= 0.7
            previous = spec.type

    def test_transition_never_repeats(self):
        from reelforge.rendering.presets import RANDOM_TRANSITION_POOL, pick_random_transition

        rng = random.Random(12)
        previous = None
        for _ in range(200):
            spec = pick_random_transition(previous, rng)
            assert spec.type != previous
            assert spec.type in RANDOM_TRANSITION_POOL
            assert 0.3 <= spec.duration <= 0.8
            previous = spec.type

    def test_seeded_picks_repeat(self):
        from reelforge.rendering.presets import pick_random_motion

        assert pick_random_motion(rng=random.Random(3)) == pick_random_motion(rng=random.Random(3))

    def test_pools_exclude_static_and_none(self):
        from reelforge.rendering.models import MotionType, TransitionType
        from reelforge.rendering.presets import RANDOM_MOTION_POOL, RANDOM_TRANSITION_POOL

        assert MotionType.STATIC not in RANDOM_MOTION_POOL
        assert TransitionType.NONE not in RANDOM_TRANSITION_POOL


class TestNameMapping:
    """Tests for free-form name normalization."""

    @pytest.mark.parametrize("name,expected", [
        ("fade", "fade"),
        ("Dissolve", "dissolve"),
        ("crossfade", "dissolve"),
        ("cut", "none"),
        ("fade_to_black", "fadeblack"),
        ("  Wipe_Left ", "wipeleft"),
        ("star-wipe", "fade"),
    ])
    def test_transition_names(self, name, expected):
        from reelforge.rendering.presets import map_ai_transition_name

        assert map_ai_transition_name(name).value == expected

    @pytest.mark.parametrize("name,expected", [
        ("zoom_out", "zoom_out"),
        ("zoom", "zoom_in"),
        ("Ken_Burns", "kenburns_in"),
        ("pan", "pan_right"),
        ("spin", "kenburns_in"),
    ])
    def test_motion_names(self, name, expected):
        from reelforge.rendering.presets import map_ai_motion_name

        assert map_ai_motion_name(name).value == expected

    @pytest.mark.parametrize("motion_type,direction,expected", [
        ("zoom", "out", "zoom_out"),
        ("zoom", None, "zoom_in"),
        ("pan", "up", "pan_up"),
        ("pan", "sideways", "pan_right"),
        ("kenburns", "out", "kenburns_out"),
        (None, None, "kenburns_in"),
        ("static", None, "static"),
    ])
    def test_legacy_specs(self, motion_type, direction, expected):
        from reelforge.rendering.presets import map_legacy_motion_spec

        assert map_legacy_motion_spec(motion_type, direction).value == expected
