import scaleruler
from scaleruler.constants import APP_NAME, LAST_PATH_KEY, MEASUREMENTS_KEY_PREFIX, SCALE_KEY_PREFIX
from scaleruler.errors import ImageLoadError, ProjectError, SessionStateError
from scaleruler.paths import SETTINGS_FILE


def test_package_exports_modules():
    assert set(scaleruler.__all__) == {"constants", "domain", "errors", "infra", "paths"}
    assert APP_NAME == "Scale Ruler"


def test_persisted_key_conventions():
    assert LAST_PATH_KEY == "lastPath"
    assert SCALE_KEY_PREFIX == "scale."
    assert MEASUREMENTS_KEY_PREFIX == "meas."


def test_error_hierarchy():
    for error in (SessionStateError, ImageLoadError):
        assert issubclass(error, ProjectError)


def test_settings_file_is_properties_file():
    assert SETTINGS_FILE.endswith(".properties")
