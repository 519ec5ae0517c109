"""
Configuration Constants

Environment naming conventions, secret detection names and message formats
shared by the key mapper, the secret resolver and the loader.

Author: envbridge Project
License: MIT
"""

ENV_PREFIX = "AUTHELIA_"
ENV_DELIMITER = "_"
KEY_DELIMITER = "."
SECRET_SUFFIX = "_FILE"

DEFAULT_CONFIG_PATH = "/config/configuration.yml"

# Last key segment that marks a value as loadable from a secret file.
SECRET_NAMES = (
    "jwt_secret",
    "secret",
    "password",
    "encryption_key",
)

# Legacy key -> current key.
DEPRECATED_KEYS = {
    "logs_level": "log.level",
    "logs_file_path": "log.file_path",
    "host": "server.host",
    "port": "server.port",
}

ERR_FMT_SECRET_IO_ISSUE = "secret file path %s for key %s could not be read: %s"
ERR_FMT_SECRET_ALREADY_DEFINED = (
    "secret file path %s for key %s could not be loaded: the key is already defined "
    "in another configuration source"
)
ERR_FMT_ENV_KEY_UNEXPECTED = "configuration environment variable not expected: %s"
ERR_FMT_KEY_UNEXPECTED = "configuration key not expected: %s"
ERR_FMT_KEY_DEPRECATED_CONFLICT = (
    "configuration key '%s' is deprecated and '%s' is also set: remove '%s'"
)
ERR_FMT_FILE_PARSE = "configuration file %s could not be parsed: %s"
ERR_FMT_FILE_READ = "configuration file %s could not be read: %s"
ERR_FMT_FILE_NOT_MAPPING = "configuration file %s must contain a mapping at the top level"
ERR_FMT_SCHEMA = "configuration key '%s' is invalid: %s"

WARN_FMT_KEY_DEPRECATED = "configuration key '%s' is deprecated and has been replaced by '%s'"
