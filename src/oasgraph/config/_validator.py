import json
from importlib import resources

from jsonschema import Draft202012Validator

CONFIG_SCHEMA = json.loads(resources.files(__package__).joinpath("schema.json").read_text(encoding="utf-8"))
CONFIG_VALIDATOR = Draft202012Validator(CONFIG_SCHEMA)
