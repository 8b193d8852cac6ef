# config_manager.py
from pathlib import Path
import json

config_json = Path(__file__).resolve().parent / "config.json"


# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "decimal_precision": 10,
    "function_digits": 13,
    "degrees": False,
    "copy_result": False,
    "debug": False,
}


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict.update(json.load(f))

    except (FileNotFoundError, json.JSONDecodeError):
        pass


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)
