"""
Tests for scene assembly and transition planning.
"""
import pytest


def _scene(duration, transition=None, transition_duration=0.5, audio=b"audio"):
    from reelforge.rendering.models import AssemblyScene, TransitionSpec

    spec = None
    if transition is not None:
        spec = TransitionSpec(type=transition, duration=transition_duration)
    return AssemblyScene(video=b"video", audio=audio, duration=duration, transition=spec)


class TestTransitionPlan:
    """Tests for plan_transitions."""

    def test_three_scene_offsets(self):
        """3s/4s/3s with fade 0.5 then dissolve 0.8 -> offsets 2.5, 5.7, total 8.7."""
        from reelforge.rendering.assembly import plan_transitions

        plan = plan_transitions([
            _scene(3, "fade", 0.5),
            _scene(4, "dissolve", 0.8),
            _scene(3),
        ])

        assert plan.offsets == pytest.approx([2.5, 5.7])
        assert plan.durations == pytest.approx([0.5, 0.8])
        assert plan.total_duration == pytest.approx(8.7)
        assert [s.name for s in plan.steps] == ["fade", "dissolve"]

    def test_duration_capped_to_forty_percent(self):
        """A long transition is cut to 40% of the shorter neighbour."""
        from reelforge.rendering.assembly import plan_transitions

        plan = plan_transitions([_scene(5, "wipeleft", 2.0), _scene(1.0)])
        assert plan.durations == pytest.approx([0.4])
        assert plan.offsets == pytest.approx([4.6])

    @pytest.mark.parametrize("durations", [
        [0.1, 0.1],
        [1, 2, 3, 4],
        [10, 0.5, 10],
        [3600, 0.2],
    ])
    def test_cap_holds_for_every_pair(self, durations):
        """Every planned transition is <= 40% of min(adjacent scenes)."""
        from reelforge.rendering.assembly import plan_transitions

        scenes = [_scene(d, "circleopen", 5.0) for d in durations]
        plan = plan_transitions(scenes)
        for step in plan.steps:
            left, right = durations[step.index], durations[step.index + 1]
            assert step.duration <= 0.4 * min(left, right) + 1e-9

    def test_none_becomes_short_fade(self):
        """A 'none' transition inside a crossfade chain is a 0.001s fade."""
        from reelforge.rendering.assembly import plan_transitions

        plan = plan_transitions([_scene(2, "none"), _scene(2, "fade"), _scene(2)])
        assert plan.steps[0].name == "fade"
        assert plan.steps[0].duration == pytest.approx(0.001)
        assert plan.offsets[0] == pytest.approx(1.999)

    def test_default_transition_is_half_second_fade(self):
        """Scenes without a transition fade for 0.5s."""
        from reelforge.rendering.assembly import plan_transitions

        plan = plan_transitions([_scene(3), _scene(3)])
        assert plan.steps[0].name == "fade"
        assert plan.durations == pytest.approx([0.5])

    def test_scene_starts(self):
        """Scene start times follow the topology."""
        from reelforge.rendering.assembly import scene_starts

        assert scene_starts([_scene(3, "none"), _scene(4)]) == [0.0, 3.0]
        assert scene_starts([_scene(3, "fade"), _scene(4)]) == pytest.approx([0.0, 2.5])


class TestTopology:
    """Tests for choose_topology."""

    def test_single_scene(self):
        from reelforge.rendering.assembly import Topology, choose_topology

        assert choose_topology([_scene(5)]) == Topology.SINGLE

    def test_all_none_is_concat(self):
        """Every inter-scene transition 'none' -> concat fast path."""
        from reelforge.rendering.assembly import Topology, choose_topology

        assert choose_topology([_scene(2, "none"), _scene(2, "none"), _scene(2, "none")]) == Topology.CONCAT

    def test_last_scene_transition_ignored(self):
        """The final scene's transition does not affect the topology."""
        from reelforge.rendering.assembly import Topology, choose_topology

        assert choose_topology([_scene(2, "none"), _scene(2, "fade")]) == Topology.CONCAT

    def test_any_real_transition_is_crossfade(self):
        """One non-none transition -> crossfade path."""
        from reelforge.rendering.assembly import Topology, choose_topology

        assert choose_topology([_scene(2, "none"), _scene(2, "radial"), _scene(2)]) == Topology.CROSSFADE
        assert choose_topology([_scene(2), _scene(2)]) == Topology.CROSSFADE

    def test_missing_transition_is_fade_not_cut(self):
        """Scenes without a transition crossfade; concat needs an explicit none."""
        from reelforge.rendering.assembly import Topology, choose_topology, plan_transitions

        scenes = [_scene(3), _scene(3)]
        assert choose_topology(scenes) == Topology.CROSSFADE
        assert [s.name for s in plan_transitions(scenes).steps] == ["fade"]
        assert choose_topology([_scene(3, "none"), _scene(3)]) == Topology.CONCAT


class TestAssemble:
    """Tests for assemble() with a fake ffmpeg."""

    def test_single_scene_scale_only(self, fake_ffmpeg):
        """One 5s scene: merge, then scale; no transition filter anywhere."""
        from reelforge.rendering.assembly import Topology, assemble

        result = assemble([_scene(5)], width=1280, height=720, fps=30)

        assert result.topology == Topology.SINGLE
        assert result.duration == pytest.approx(5.0)
        assert result.video == b"fake-media-output"
        assert len(fake_ffmpeg.commands) == 2

        final = fake_ffmpeg.commands[-1]
        vf = final[final.index("-vf") + 1]
        assert vf.startswith("scale=1280:720:force_original_aspect_ratio=decrease,pad=1280:720")
        joined = " ".join(" ".join(c) for c in fake_ffmpeg.commands)
        assert "xfade" not in joined
        assert "acrossfade" not in joined
        assert "+faststart" in final

    def test_merge_step_arguments(self, fake_ffmpeg):
        """Scenes are merged with copied video and AAC audio, cut to the shorter stream."""
        from reelforge.rendering.assembly import assemble

        assemble([_scene(5)], width=640, height=360, fps=30)

        merge = fake_ffmpeg.commands[0]
        for flag in ("-c:v", "-c:a", "-shortest"):
            assert flag in merge
        assert merge[merge.index("-c:v") + 1] == "copy"
        assert merge[merge.index("-c:a") + 1] == "aac"
        assert ["-map", "0:v:0"] == merge[merge.index("-map"):merge.index("-map") + 2]

    def test_scene_without_audio_gets_silence(self, fake_ffmpeg):
        """Missing narration is replaced with anullsrc."""
        from reelforge.rendering.assembly import assemble

        assemble([_scene(4, audio=None)], width=640, height=360, fps=30)

        merge = fake_ffmpeg.commands[0]
        assert "lavfi" in merge
        assert any(a.startswith("anullsrc=") for a in merge)

    def test_concat_path(self, fake_ffmpeg):
        """All-none timelines use the concat demuxer with a 300s timeout."""
        from reelforge.rendering.assembly import Topology, assemble

        result = assemble([_scene(2, "none"), _scene(3, "none")], width=640, height=360, fps=30)

        assert result.topology == Topology.CONCAT
        assert result.duration == pytest.approx(5.0)
        final = fake_ffmpeg.commands[-1]
        assert final[final.index("-f") + 1] == "concat"
        assert fake_ffmpeg.timeouts[-1] == 300
        listing = fake_ffmpeg.files["concat.txt"]
        assert listing.count("file '") == 2
        assert "merged_0.mp4" in listing and "merged_1.mp4" in listing

    def test_crossfade_path(self, fake_ffmpeg):
        """Transitions produce an xfade/acrossfade chain with planned offsets."""
        from reelforge.rendering.assembly import Topology, assemble

        result = assemble(
            [_scene(3, "fade", 0.5), _scene(4, "dissolve", 0.8), _scene(3)],
            width=1920, height=1080, fps=30,
        )

        assert result.topology == Topology.CROSSFADE
        assert result.duration == pytest.approx(8.7)
        assert len(fake_ffmpeg.commands) == 4
        assert fake_ffmpeg.timeouts[-1] == 600

        final = fake_ffmpeg.commands[-1]
        graph = final[final.index("-filter_complex") + 1]
        assert "xfade=transition=fade:duration=0.5:offset=2.5" in graph
        assert "xfade=transition=dissolve:duration=0.8:offset=5.7" in graph
        assert graph.count("acrossfade") == 2
        assert "[vout]" in final and "[aout]" in final

    def test_watermark_drawn_on_output(self, fake_ffmpeg):
        """A watermark adds a drawtext at the requested corner."""
        from reelforge.rendering.assembly import assemble
        from reelforge.rendering.models import Watermark, WatermarkPosition

        assemble(
            [_scene(3)],
            width=640, height=360, fps=30,
            watermark=Watermark(text="reelforge", position=WatermarkPosition.TOP_LEFT, opacity=0.4),
        )

        final = fake_ffmpeg.commands[-1]
        vf = final[final.index("-vf") + 1]
        assert "drawtext=text=reelforge" in vf
        assert "fontcolor=white@0.4" in vf
        assert "x=20:y=20" in vf

    def test_failure_aborts_and_cleans_scratch(self, fake_ffmpeg, scratch_root):
        """Any ffmpeg failure raises and leaves no scratch directory behind."""
        from reelforge.exceptions import SubprocessError
        from reelforge.rendering.assembly import assemble

        before = set(scratch_root.iterdir())
        fake_ffmpeg.returncode = 1
        fake_ffmpeg.stderr = "Conversion failed!"

        with pytest.raises(SubprocessError):
            assemble([_scene(3, "fade"), _scene(3)], width=640, height=360, fps=30)

        assert len(fake_ffmpeg.commands) == 1
        assert set(scratch_root.iterdir()) == before

    def test_invalid_format_rejected(self, fake_ffmpeg):
        """Unknown containers fail before any work."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.assembly import assemble

        with pytest.raises(ValidationError):
            assemble([_scene(3)], output_format="avi")
        assert fake_ffmpeg.calls == []

    def test_invalid_scene_duration_rejected(self, fake_ffmpeg):
        """Scene durations are validated up front."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.assembly import assemble

        with pytest.raises(ValidationError) as exc:
            assemble([_scene(3), _scene(5000)], width=640, height=360, fps=30)
        assert exc.value.field == "scenes[1].duration"
        assert fake_ffmpeg.calls == []

    def test_concat_list_quotes(self, temp_dir):
        """Single quotes in paths are escaped for the concat demuxer."""
        from reelforge.rendering.assembly import concat_list

        text = concat_list([temp_dir / "it's.mp4"])
        assert text.strip().endswith("it'\\''s.mp4'")
