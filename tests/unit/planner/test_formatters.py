"""Unit tests for mux plan formatters."""

import json

from muxplan.planner import compile_mux_plan, format_human, format_json


class TestFormatHuman:
    """Tests for format_human function."""

    def test_multi_audio(self, multi_audio_fixture):
        plan = compile_mux_plan(multi_audio_fixture, "/media/Movie.mkv")
        output = format_human(plan, "/media/Movie.mkv")
        lines = output.splitlines()

        assert lines[0] == "File: /media/Movie.mkv"
        assert "  0:0 libsvtav1 crf=22 tier=hd" in lines
        assert '  0: #1 "GER 5.1" ger 6ch copy (default)' in lines
        assert '  1: generated from #1 "GER Stereo" ger 2ch libopus@192k' in lines
        assert '  0: #5 "GER Forced" ger (default+forced)' in lines
        assert "Attachments: 8" in lines
        assert "  #6 (duplicate)" in lines
        assert "Warnings:" not in lines

    def test_hdr_markers_and_warnings(self, hdr_4k_fixture):
        output = format_human(compile_mux_plan(hdr_4k_fixture))

        assert "[HDR10]" in output
        assert "filters: cas=0.5" in output
        assert "  - Attachment stream 4 skipped: no mimetype tag" in output

    def test_copy_and_empty_sections(self):
        plan = compile_mux_plan({"streams": []}, transcode_video=False)
        output = format_human(plan)

        assert "  0:v copy" in output
        assert output.count("  (none)") == 2


class TestFormatJson:
    """Tests for format_json function."""

    def test_structure(self, multi_audio_fixture):
        data = json.loads(format_json(compile_mux_plan(multi_audio_fixture)))

        assert data["default_audio_index"] == 1
        assert data["video"]["codec"] == "libsvtav1"
        assert data["video"]["hdr_type"] == "none"
        assert data["audio_tracks"][1]["map"] == "[aud_norm_1]"
        assert data["subtitle_tracks"][0]["disposition"] == "default+forced"
        assert data["dropped_subtitles"] == [{"index": 6, "reason": "duplicate"}]
        assert data["filter_graph"][0].startswith("[0:1]pan=stereo|")
        assert data["attachments"] == {"indices": [8], "skipped": []}
