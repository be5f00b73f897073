import pytest
from pydantic import ValidationError

from moodjournal.models import Theme
from moodjournal.schemas.configuration import ConfigurationUpdate

pytestmark = pytest.mark.integration


def test_defaults(store):
    config = store.get_configuration()

    assert config.reminder_enabled is True
    assert config.reminder_time == "08:00"
    assert config.theme == Theme.DARK


def test_partial_update_leaves_other_fields(store):
    assert store.update_configuration({"theme": "light"}) is True

    config = store.get_configuration()
    assert config.theme == Theme.LIGHT
    assert config.reminder_enabled is True
    assert config.reminder_time == "08:00"

    assert store.update_configuration(ConfigurationUpdate(reminder_enabled=False, reminder_time="21:30")) is True
    config = store.get_configuration()
    assert config.theme == Theme.LIGHT
    assert config.reminder_enabled is False
    assert config.reminder_time == "21:30"


def test_update_same_value(store):
    assert store.update_configuration({"theme": "dark"}) is True
    assert store.get_configuration().theme == Theme.DARK


def test_empty_update_returns_false(store):
    assert store.update_configuration({}) is False
    assert store.update_configuration({"theme": None}) is False


@pytest.mark.unit
@pytest.mark.parametrize("value", ["8:00", "24:00", "12:60", "noon"])
def test_reminder_time_format(value):
    with pytest.raises(ValidationError):
        ConfigurationUpdate(reminder_time=value)


@pytest.mark.unit
def test_theme_must_be_known():
    with pytest.raises(ValidationError):
        ConfigurationUpdate(theme="sepia")
