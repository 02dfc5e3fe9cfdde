import pytest

from envlayer import Environment, EnvironmentVariableParsingError, resolve_environment


def test_unset_variable_defaults_to_local():
    assert resolve_environment("APP_ENV", {}) is Environment.LOCAL
    assert Environment.default() is Environment.LOCAL


@pytest.mark.parametrize(
    "raw, expected",
    [("local", Environment.LOCAL), ("production", Environment.PRODUCTION)],
)
def test_known_tokens_resolve(raw, expected):
    assert resolve_environment("APP_ENV", {"APP_ENV": raw}) is expected


@pytest.mark.parametrize("raw", ["staging", "Production", "LOCAL", " local", ""])
def test_unknown_tokens_fail_with_raw_value(raw):
    with pytest.raises(EnvironmentVariableParsingError) as info:
        resolve_environment("APP_ENV", {"APP_ENV": raw})
    assert info.value.value == raw
    assert info.value.variable_name == "APP_ENV"
    assert isinstance(info.value.__cause__, ValueError)


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("DEPLOY_TARGET", "production")
    assert resolve_environment("DEPLOY_TARGET") is Environment.PRODUCTION

    monkeypatch.delenv("DEPLOY_TARGET")
    assert resolve_environment("DEPLOY_TARGET") is Environment.LOCAL


def test_tokens_round_trip():
    for env in Environment:
        assert Environment.parse(str(env)) is env
    assert str(Environment.PRODUCTION) == "production"


def test_error_message_names_value():
    error = EnvironmentVariableParsingError("staging", "APP_ENV")
    assert "`staging`" in str(error)
