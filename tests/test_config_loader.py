import pytest

from fakenews_detector.errors import ConfigError
from fakenews_detector.service import AnalysisService
from fakenews_detector.utils.config_loader import load_source_lists

from .conftest import make_config


def write(tmp_path, body):
    path = tmp_path / "sources.yaml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadSourceLists:
    def test_valid_file(self, tmp_path):
        path = write(tmp_path, "credible:\n  - WWW.Reuters.com\n  - local.news\nunreliable:\n  - fake.example\nextra: 1\n")
        lists = load_source_lists(path)
        assert lists.credible == frozenset({"reuters.com", "local.news"})
        assert lists.unreliable == frozenset({"fake.example"})

    def test_missing_list_is_empty(self, tmp_path):
        lists = load_source_lists(write(tmp_path, "credible: [a.com]\n"))
        assert lists.unreliable == frozenset()

    @pytest.mark.parametrize(
        "body",
        [
            "- just\n- a list\n",
            "credible: reuters.com\n",
            "credible: [https://reuters.com]\n",
            "credible: [a.com]\nunreliable: [www.a.com]\n",
            "credible: [a.com\n",
        ],
    )
    def test_invalid_files(self, tmp_path, body):
        with pytest.raises(ConfigError):
            load_source_lists(write(tmp_path, body))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_source_lists(tmp_path / "nope.yaml")

    def test_service_uses_configured_lists(self, tmp_path, clock):
        path = write(tmp_path, "credible: [local.news]\nunreliable: [reuters.com]\n")
        service = AnalysisService(make_config(sources_config=str(path)), ai_client=None, clock=clock)
        assert service.check_source("https://local.news/x").credibility == "high"
        assert service.check_source("https://reuters.com/x").credibility == "low"


def test_shipped_lists_match_builtin_defaults():
    from pathlib import Path

    from fakenews_detector.analysis import DEFAULT_SOURCE_LISTS

    shipped = load_source_lists(Path(__file__).resolve().parents[1] / "config" / "sources.yaml")
    assert shipped == DEFAULT_SOURCE_LISTS
