import pytest

from levelog import ConfigError, Severity, UnknownSeverityError


def test_ordering_and_letters():
    assert Severity.INFO < Severity.WARNING < Severity.ERROR < Severity.FATAL
    assert [s.letter for s in Severity] == ["I", "W", "E", "F"]


def test_parse_is_case_insensitive():
    assert Severity.parse("info") is Severity.INFO
    assert Severity.parse(" Warning ") is Severity.WARNING
    assert Severity.parse(Severity.ERROR) is Severity.ERROR
    assert Severity.from_letter("F") is Severity.FATAL


@pytest.mark.parametrize("name", ["WARN", "debug", "", "I"])
def test_unknown_names_are_rejected(name):
    with pytest.raises(UnknownSeverityError) as excinfo:
        Severity.parse(name)
    assert "INFO, WARNING, ERROR, FATAL" in str(excinfo.value)


def test_unknown_severity_is_a_config_error():
    assert issubclass(UnknownSeverityError, ConfigError)
    assert issubclass(ConfigError, ValueError)
