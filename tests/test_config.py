from locabridge.config import Config


def test_defaults(monkeypatch):
    for name in ("LOCABRIDGE_AI_SERVICE", "LOCABRIDGE_SOURCE_LANGUAGE", "LOCABRIDGE_BATCH_SIZE"):
        monkeypatch.delenv(name, raising=False)

    cfg = Config()

    assert cfg.ai_service == "deepseek"
    assert cfg.source_language == "en"
    assert cfg.batch_size == 20


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LOCABRIDGE_AI_SERVICE", "Gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("LOCABRIDGE_BATCH_SIZE", "5")

    cfg = Config()

    assert cfg.ai_service == "gemini"
    assert cfg.api_key_for("gemini") == "g-key"
    assert cfg.batch_size == 5
    assert cfg.validate() == []


def test_validate_reports_missing_key(monkeypatch):
    monkeypatch.delenv("DASHSCOPE_API_KEY", raising=False)

    errors = Config().validate("aliyun")

    assert errors == ["DASHSCOPE_API_KEY is not set"]


def test_validate_rejects_unknown_service():
    errors = Config().validate("babelfish")

    assert "Unknown AI service" in errors[0]


def test_language_name_falls_back_to_code():
    cfg = Config()

    assert cfg.language_name("zh-Hant") == "Traditional Chinese"
    assert cfg.language_name("xx") == "xx"
