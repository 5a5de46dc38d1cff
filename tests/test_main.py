import json

import pytest

from fakenews_detector import main as main_module

from .conftest import NEUTRAL_TEXT


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    monkeypatch.setenv("AI_BACKEND", "none")
    monkeypatch.delenv("SOURCES_CONFIG", raising=False)
    monkeypatch.setattr(main_module, "configure_logging", lambda **kwargs: None)


class TestCli:
    def test_analyze_json(self, capsys):
        assert main_module.main(["analyze", "--text", NEUTRAL_TEXT, "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["prediction"] == "REAL"
        assert payload["meta"]["cached"] is False

    def test_analyze_text_from_file(self, tmp_path, capsys):
        path = tmp_path / "article.txt"
        path.write_text(NEUTRAL_TEXT, encoding="utf-8")
        assert main_module.main(["analyze", "--file", str(path), "--url", "https://apnews.com/x"]) == 0
        out = capsys.readouterr().out
        assert "Likely real" in out
        assert "Source: apnews.com (high credibility)" in out

    def test_short_text_fails(self):
        assert main_module.main(["analyze", "--text", "tiny"]) == 1

    def test_missing_file_fails(self, tmp_path):
        assert main_module.main(["analyze", "--file", str(tmp_path / "missing.txt")]) == 1

    def test_source(self, capsys):
        assert main_module.main(["source", "https://www.theonion.com/story"]) == 0
        assert capsys.readouterr().out.startswith("theonion.com: low credibility.")

    def test_source_invalid_url(self):
        assert main_module.main(["source", "theonion"]) == 1

    def test_bad_backend_is_config_error(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "watson")
        assert main_module.main(["source", "https://reuters.com"]) == 1
