from ranker import config


def test_defaults(monkeypatch):
    for name in ("SKILL_TERMS_FILE", "RANKER_TOP_N", "LOG_LEVEL", "MATCHER_PORT"):
        monkeypatch.delenv(name, raising=False)

    s = config.load_settings()
    assert s.top_n == 10
    assert s.log_level == "INFO"
    assert s.port == 5001
    assert s.skill_terms_file == config.DEFAULT_SKILL_TERMS_FILE
    assert s.skill_terms_file.exists()


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RANKER_TOP_N", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SKILL_TERMS_FILE", str(tmp_path / "terms.txt"))

    s = config.load_settings()
    assert s.top_n == 5
    assert s.log_level == "DEBUG"
    assert s.skill_terms_file == tmp_path / "terms.txt"


def test_invalid_ints_fall_back(monkeypatch):
    monkeypatch.setenv("RANKER_TOP_N", "lots")
    monkeypatch.setenv("MATCHER_PORT", "-1")

    s = config.load_settings()
    assert s.top_n == 10
    assert s.port == 5001
