APP_NAME = "jsontree"
APP_VERSION = "0.4.0"

SETTINGS_FILENAME = "jsontree_settings.json"

# Node kinds double as the parent-kind tokens reported in mutation events.
NODE_MAPPING = "object"
NODE_SEQUENCE = "array"
NODE_PRIMITIVE = "primitive"

OP_ADD = "add"
OP_EDIT = "edit"
OP_DELETE = "delete"

ACTION_ADD = "add"
ACTION_EDIT = "edit"
ACTION_DELETE = "delete"
ACTION_COPY = "copy"
EDIT_ACTIONS = (ACTION_ADD, ACTION_EDIT, ACTION_DELETE)

MODE_VIEWING = "viewing"
MODE_ADDING = "adding"
MODE_DELETING = "deleting"

ROOT_DEPTH = 1

# Auto-collapse mappings/sequences holding more items than this.
SIZE_THRESHOLD_DEFAULT = 20
# Sequences longer than this are split into windows of CHUNK_SIZE_DEFAULT.
LARGE_SEQUENCE_THRESHOLD_DEFAULT = 100
CHUNK_SIZE_DEFAULT = 100
COPY_INDENT_DEFAULT = 2

DISPLAY_SIZE_MODES = ("collapsed", "expanded")

# First element of a window path token: ("__chunk__", start, stop).
CHUNK_PATH_TAG = "__chunk__"
