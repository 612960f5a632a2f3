from tiss_validator.config import load_policy, DEFAULT_POLICY, RiskPolicy


def test_defaults(monkeypatch):
    for name in ("TISS_HIGH_VALUE_THRESHOLD", "TISS_ERROR_WEIGHT", "TISS_CRITICAL_WEIGHT",
                 "TISS_WARNING_WEIGHT", "TISS_SCORE_CAP"):
        monkeypatch.delenv(name, raising=False)
    assert load_policy() == DEFAULT_POLICY == RiskPolicy()
    assert DEFAULT_POLICY.high_value_threshold == 100000
    assert (DEFAULT_POLICY.error_weight, DEFAULT_POLICY.critical_weight, DEFAULT_POLICY.warning_weight) == (20, 15, 8)
    assert DEFAULT_POLICY.score_cap == 100


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TISS_HIGH_VALUE_THRESHOLD", "50000")
    monkeypatch.setenv("TISS_WARNING_WEIGHT", " 5 ")
    policy = load_policy()
    assert policy.high_value_threshold == 50000
    assert policy.warning_weight == 5
    assert policy.error_weight == 20


def test_invalid_env_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("TISS_SCORE_CAP", "cem")
    with caplog.at_level("WARNING"):
        policy = load_policy()
    assert policy.score_cap == 100
    assert "TISS_SCORE_CAP" in caplog.text
