import pytest

from ballotbox.config import require_setting


def test_require_setting_returns_value(monkeypatch):
    monkeypatch.setenv("BALLOTBOX_EXAMPLE", "value")

    assert require_setting("BALLOTBOX_EXAMPLE") == "value"


@pytest.mark.parametrize("value", [None, ""])
def test_require_setting_refuses_missing_value(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("BALLOTBOX_EXAMPLE", raising=False)
    else:
        monkeypatch.setenv("BALLOTBOX_EXAMPLE", value)

    with pytest.raises(RuntimeError, match="BALLOTBOX_EXAMPLE"):
        require_setting("BALLOTBOX_EXAMPLE")
