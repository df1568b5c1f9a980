from __future__ import annotations

import pytest

from tvmatch.config import AppConfig, build_config, build_library, build_matcher, load_config
from tvmatch.library import CatalogLibrary
from tvmatch.trakt import TraktLibrary
from tvmatch.trakt.client import API_BASE_URL

CATALOG_DATA = {
    "library": {
        "backend": "catalog",
        "shows": [{"id": 2993, "title": "The Wire", "year": 2002}],
    }
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TRAKT_CLIENT_ID", raising=False)
    monkeypatch.delenv("TVMATCH_STRICT_NUMBERS", raising=False)
    monkeypatch.delenv("TVMATCH_RELEASE_GROUPS", raising=False)


class TestBuildConfig:
    def test_catalog_backend(self) -> None:
        config = build_config(CATALOG_DATA)

        assert isinstance(config, AppConfig)
        assert config.library.backend == "catalog"
        assert config.library.shows[0].id == 2993
        assert config.library.shows[0].year == 2002
        assert config.matcher.strict_numbers is False
        assert config.matcher.infer_show_from_folders is False

    def test_trakt_defaults(self) -> None:
        config = build_config({"trakt": {"client_id": "abc"}})

        assert config.library.backend == "trakt"
        assert config.trakt.client_id == "abc"
        assert config.trakt.base_url == API_BASE_URL
        assert config.trakt.timeout == 30.0

    def test_trakt_requires_client_id(self) -> None:
        with pytest.raises(ValueError, match="client_id"):
            build_config({})

    def test_client_id_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("TRAKT_CLIENT_ID", "from-env")

        config = build_config({"trakt": {"client_id": "from-file"}})

        assert config.trakt.client_id == "from-env"

    def test_catalog_requires_shows(self) -> None:
        with pytest.raises(ValueError, match="at least one show"):
            build_config({"library": {"backend": "catalog"}})

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="library.backend"):
            build_config({"library": {"backend": "tvdb"}})

    @pytest.mark.parametrize(
        ("show", "message"),
        [
            ({"title": "No id"}, "id' is required"),
            ({"id": "abc", "title": "Bad id"}, "id' must be an integer"),
            ({"id": 1}, "title' is required"),
            ({"id": 1, "title": "Bad year", "year": "soon"}, "year' must be an integer"),
        ],
    )
    def test_invalid_show_entries(self, show, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            build_config({"library": {"backend": "catalog", "shows": [show]}})

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError, match="trakt.timeout"):
            build_config({"trakt": {"client_id": "abc", "timeout": 0}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ValueError, match="'matcher' must be provided as a mapping"):
            build_config({**CATALOG_DATA, "matcher": ["strict"]})

    def test_matcher_settings(self) -> None:
        config = build_config(
            {
                **CATALOG_DATA,
                "matcher": {"strict_numbers": True, "infer_show_from_folders": True, "release_groups": "NTG"},
            }
        )

        assert config.matcher.strict_numbers is True
        assert config.matcher.infer_show_from_folders is True
        assert config.matcher.release_groups == ["NTG"]

    def test_strict_numbers_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("TVMATCH_STRICT_NUMBERS", "yes")

        assert build_config(CATALOG_DATA).matcher.strict_numbers is True

    def test_release_groups_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("TVMATCH_RELEASE_GROUPS", "FLUX, NTG")

        config = build_config({**CATALOG_DATA, "matcher": {"release_groups": ["NTb"]}})

        assert config.matcher.release_groups == ["NTb", "FLUX", "NTG"]


class TestLoadConfig:
    def test_expands_environment(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("WIRE_TITLE", "The Wire")
        path = tmp_path / "tvmatch.yaml"
        path.write_text(
            """
library:
  backend: catalog
  shows:
    - id: 2993
      title: ${WIRE_TITLE}
""",
            encoding="utf-8",
        )

        assert load_config(path).library.shows[0].title == "The Wire"

    def test_unset_client_id_reference(self, tmp_path) -> None:
        path = tmp_path / "tvmatch.yaml"
        path.write_text("trakt:\n  client_id: ${TRAKT_CLIENT_ID}\n", encoding="utf-8")

        with pytest.raises(ValueError, match="client_id"):
            load_config(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            load_config(tmp_path / "missing.yaml")


class TestBuilders:
    def test_build_catalog_library(self) -> None:
        library = build_library(build_config(CATALOG_DATA))

        assert isinstance(library, CatalogLibrary)
        assert len(library) == 1

    def test_build_trakt_library(self) -> None:
        library = build_library(build_config({"trakt": {"client_id": "abc", "timeout": 5}}))

        try:
            assert isinstance(library, TraktLibrary)
            assert library.client.base_url == API_BASE_URL
        finally:
            library.close()

    def test_build_matcher_applies_settings(self) -> None:
        config = build_config(
            {**CATALOG_DATA, "matcher": {"strict_numbers": True, "release_groups": ["NTG"]}}
        )

        matcher = build_matcher(config)

        assert isinstance(matcher.library, CatalogLibrary)
        assert matcher.options.strict_numbers is True
        assert "NTG" in matcher.dictionaries.release_groups
        assert "LOL" in matcher.dictionaries.release_groups

    def test_build_matcher_uses_given_library(self) -> None:
        library = CatalogLibrary([])

        assert build_matcher(build_config(CATALOG_DATA), library).library is library
