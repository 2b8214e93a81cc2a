import os

CONFIG_ENV_VAR = 'TAGSTORE_CONFIG'
CONFIG_FILE = os.environ.get(CONFIG_ENV_VAR, os.path.join(os.getcwd(), 'tagstore.yaml'))

DEFAULT_DB_URL = 'sqlite:///tags.db'

TAGS_TABLE = 'tags'
TAG_ASSIGNMENTS_TABLE = 'tag_assignments'

# Column used to identify rows of the host's object table (SQLite implicit key)
DEFAULT_OBJECT_ID_COLUMN = 'rowid'

# Aliases used in generated search queries
ASSIGNMENTS_ALIAS = 'ta'
EXCLUDED_ALIAS = 'ex'
OBJECT_ALIAS = 'o'
INCLUDED_ALIAS_PREFIX = 't'

LOGGER_NAME = 'tagstore'

DEFAULT_SETTINGS = {
    "database": {
        "url": DEFAULT_DB_URL,
        "echo": False,
    },
    "tables": {
        "tags": TAGS_TABLE,
        "assignments": TAG_ASSIGNMENTS_TABLE,
        "create": True,
    },
    "behaviour": {
        "cascade_tag_delete": False,
    },
    "logging": {
        "configure": False,
        "level": "INFO",
        "format": "console",
    },
}
