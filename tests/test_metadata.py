from __future__ import annotations

import pytest

from tvmatch.matcher import DEFAULT_DICTIONARIES, MetadataDictionaries, parse_file_metadata


def test_scene_release_name() -> None:
    metadata = parse_file_metadata("The.Wire.S03E04.720p.HDTV.x264-LOL.mkv", path="/tv/The Wire")

    assert metadata.name == "The.Wire.S03E04.720p.HDTV.x264-LOL.mkv"
    assert metadata.path == "/tv/The Wire"
    assert metadata.video_codec == "x264"
    assert metadata.audio_codec is None
    assert metadata.source == "hdtv"
    assert metadata.resolution == "720p"
    assert metadata.release_group == "LOL"


def test_bluray_release_name() -> None:
    metadata = parse_file_metadata("Show.S01E01.1080p.BluRay.DTS-HD.MA.x265-SPARKS.mkv")

    assert metadata.video_codec == "x265"
    assert metadata.audio_codec == "dts-hd"
    assert metadata.source == "bluray"
    assert metadata.resolution == "1080p"
    assert metadata.release_group == "SPARKS"


@pytest.mark.parametrize(
    ("filename", "audio"),
    [
        ("show.s01e01.eac3.mkv", "eac3"),
        ("show.s01e01.ac3.mkv", "ac3"),
        ("show.s01e01.DDP5.1.mkv", "ddp5.1"),
        ("show.s01e01.TrueHD.Atmos.mkv", "truehd"),
    ],
)
def test_longer_audio_tokens_take_precedence(filename: str, audio: str) -> None:
    assert parse_file_metadata(filename).audio_codec == audio


def test_web_dl_source() -> None:
    assert parse_file_metadata("Show.S02E05.WEB-DL.mkv").source == "web-dl"


def test_release_group_is_case_sensitive() -> None:
    assert parse_file_metadata("the.wire.s03e04.x264-lol.mkv").release_group is None


def test_unrecognised_name_leaves_fields_empty() -> None:
    metadata = parse_file_metadata("home video.mkv")

    assert metadata.name == "home video.mkv"
    assert metadata.video_codec is None
    assert metadata.audio_codec is None
    assert metadata.source is None
    assert metadata.resolution is None
    assert metadata.release_group is None


class TestMetadataDictionaries:
    def test_with_release_groups_appends_new_groups(self) -> None:
        extended = DEFAULT_DICTIONARIES.with_release_groups(["-NTG", "LOL", " ", "NTG"])

        assert extended.release_groups[: len(DEFAULT_DICTIONARIES.release_groups)] == DEFAULT_DICTIONARIES.release_groups
        assert extended.release_groups.count("NTG") == 1
        assert extended.release_groups.count("LOL") == 1
        assert "NTG" not in DEFAULT_DICTIONARIES.release_groups

    def test_custom_dictionaries(self) -> None:
        dictionaries = MetadataDictionaries(resolutions=("4k",), release_groups=("ME",))

        metadata = parse_file_metadata("clip.4K-ME.mkv", dictionaries)

        assert metadata.resolution == "4k"
        assert metadata.release_group == "ME"
