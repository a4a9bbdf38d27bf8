"""Package configuration, loaded from defaults and ``CARAFE_*`` variables."""
import json
import os

DEFAULTS = {
    "DEBUG": False,
    "DEFAULT_PROTOCOL_VERSION": "1.1",
    "COPY_BUFFER_SIZE": 64 * 1024,
}


class Config(dict):
    """A dict subclass holding carafe settings.

    Keys are uppercase strings by convention. Values can be loaded from
    mappings, objects and prefixed environment variables.
    """

    def __init__(self, defaults=None):
        super().__init__(defaults or {})

    def from_mapping(self, mapping=None, **kwargs):
        """Update config from a mapping or keyword arguments.

        Returns True.
        """
        if mapping is not None:
            if hasattr(mapping, "items"):
                for key, value in mapping.items():
                    self[key] = value
            else:
                for key, value in mapping:
                    self[key] = value
        for key, value in kwargs.items():
            self[key] = value
        return True

    def from_object(self, obj):
        """Update config from an object's uppercase attributes.

        The object can be a module, a class, or a dotted import path.
        """
        if isinstance(obj, str):
            import importlib
            obj = importlib.import_module(obj)
        for key in dir(obj):
            if key.isupper():
                self[key] = getattr(obj, key)
        return True

    def from_prefixed_env(self, prefix="CARAFE", loads=json.loads):
        """Update config from environment variables with the given prefix.

        ``CARAFE_COPY_BUFFER_SIZE=4096`` sets ``config["COPY_BUFFER_SIZE"]``
        to the integer 4096. Keys that already hold a string, and values
        that ``loads`` cannot decode, are kept as raw strings.
        """
        prefix = prefix + "_"
        plen = len(prefix)
        for key, value in sorted(os.environ.items()):
            if not key.startswith(prefix):
                continue
            config_key = key[plen:]
            if not isinstance(self.get(config_key), str):
                try:
                    value = loads(value)
                except ValueError:
                    pass
            self[config_key] = value
        return True

    def get_namespace(self, namespace, lowercase=True, trim_namespace=True):
        """Return a dict of config keys that start with the given namespace."""
        result = {}
        for key, value in self.items():
            if not key.startswith(namespace):
                continue
            if trim_namespace:
                key = key[len(namespace):]
            if lowercase:
                key = key.lower()
            result[key] = value
        return result

    def __repr__(self):
        return f"<Config {dict.__repr__(self)}>"


config = Config(DEFAULTS)
config.from_prefixed_env()
