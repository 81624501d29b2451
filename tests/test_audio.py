"""
Tests for the audio mixer.
"""
import pytest


class TestMixGraph:
    """Tests for the voice + music filter graph."""

    def test_graph_text(self):
        """Voice and looped music are summed for the voice's duration."""
        from reelforge.rendering.audio import mix_graph

        assert mix_graph(100, 30).render() == (
            "[0:a]volume=1[voice];"
            "[1:a]volume=0.3,aloop=loop=-1:size=2e+09[music];"
            "[voice][music]amix=inputs=2:duration=first:dropout_transition=2[out]"
        )

    def test_volume_factor(self):
        """Percent volumes become linear factors."""
        from reelforge.rendering.audio import volume_factor

        assert volume_factor(100) == 1.0
        assert volume_factor(250) == 2.5
        assert volume_factor(0) == 0.0


class TestMixAudio:
    """Tests for mix_audio with a fake ffmpeg."""

    def test_with_music(self, fake_ffmpeg):
        """Two inputs, filter_complex, 120s timeout."""
        from reelforge.rendering.audio import mix_audio

        result = mix_audio(b"voice-bytes", b"music-bytes")

        assert result == b"fake-media-output"
        cmd = fake_ffmpeg.commands[0]
        assert cmd.count("-i") == 2
        assert "amix=inputs=2:duration=first:dropout_transition=2" in cmd[cmd.index("-filter_complex") + 1]
        assert cmd[cmd.index("-map") + 1] == "[out]"
        assert cmd[-1].endswith("mixed.mp3")
        assert fake_ffmpeg.timeouts == [120]

    def test_voice_only(self, fake_ffmpeg):
        """Without music only a volume filter is applied, 60s timeout."""
        from reelforge.rendering.audio import mix_audio
        from reelforge.rendering.models import AudioMixOptions

        mix_audio(b"voice-bytes", options=AudioMixOptions(voice_volume=80, output_format="wav"))

        cmd = fake_ffmpeg.commands[0]
        assert cmd.count("-i") == 1
        assert cmd[cmd.index("-af") + 1] == "volume=0.8"
        assert "-filter_complex" not in cmd
        assert cmd[-1].endswith("mixed.wav")
        assert fake_ffmpeg.timeouts == [60]

    def test_negative_volume_rejected_before_subprocess(self, fake_ffmpeg):
        """Negative volumes fail validation and spawn nothing."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.audio import mix_audio
        from reelforge.rendering.models import AudioMixOptions

        with pytest.raises(ValidationError) as exc:
            mix_audio(b"voice", b"music", AudioMixOptions(music_volume=-10))
        assert exc.value.field == "music_volume"
        assert fake_ffmpeg.calls == []

    def test_ducking_flag_is_accepted(self, fake_ffmpeg, caplog):
        """Ducking is a no-op that only logs a warning."""
        from reelforge.rendering.audio import mix_audio
        from reelforge.rendering.models import AudioMixOptions

        result = mix_audio(b"voice", b"music", AudioMixOptions(music_ducking_enabled=True))

        assert result
        assert "ducking" in caplog.text.lower()
        assert "sidechaincompress" not in fake_ffmpeg.commands[0][fake_ffmpeg.commands[0].index("-filter_complex") + 1]

    def test_ffmpeg_failure_raises_and_cleans_up(self, fake_ffmpeg, scratch_root):
        """A non-zero exit raises SubprocessError and removes scratch files."""
        from reelforge.exceptions import SubprocessError
        from reelforge.rendering.audio import mix_audio

        before = set(scratch_root.iterdir())
        fake_ffmpeg.returncode = 1
        fake_ffmpeg.stderr = "Invalid data found when processing input"

        with pytest.raises(SubprocessError) as exc:
            mix_audio(b"voice", b"music")

        assert exc.value.returncode == 1
        assert "Invalid data" in str(exc.value)
        assert set(scratch_root.iterdir()) == before

    def test_empty_voice_rejected(self, fake_ffmpeg):
        """An empty buffer is not a usable source."""
        from reelforge.exceptions import SourceError
        from reelforge.rendering.audio import mix_audio

        with pytest.raises(SourceError):
            mix_audio(b"")
        assert fake_ffmpeg.calls == []
