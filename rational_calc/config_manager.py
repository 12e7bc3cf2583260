# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent / "config.json"


DEFAULT_SETTINGS = {
    "decimal_places": 24,
    "fractions": False,
    "copy_result": False,
    "debug": False,
    "prompt": "> ",
}

# decimal_places above this makes every result a huge string
MAX_DECIMAL_PLACES = 1000


def is_valid_setting(key_value, value):
    """Check a value against the type of its default. Unknown keys pass."""
    if key_value not in DEFAULT_SETTINGS:
        return True

    default = DEFAULT_SETTINGS[key_value]
    if isinstance(default, bool):
        return isinstance(value, bool)
    elif isinstance(default, int):
        return (isinstance(value, int) and not isinstance(value, bool)
                and 0 <= value <= MAX_DECIMAL_PLACES)
    else:
        return isinstance(value, type(default))


def load_setting_value(key_value):
    """Return one setting, or the whole settings dict for key_value == "all".

    Values missing from config.json, or of the wrong type, fall back to
    DEFAULT_SETTINGS; unknown keys give 0.
    """
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding='utf-8') as f:
            file_settings = json.load(f)

        for key, value in file_settings.items():
            if is_valid_setting(key, value):
                settings_dict[key] = value

    except (FileNotFoundError, json.JSONDecodeError, AttributeError):
        pass

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def save_setting(settings_dict):
    """Write the settings back to config.json. Returns {} if that failed."""
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return {}
