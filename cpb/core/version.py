"""CPB - version constants and widget defaults.

Keep this module tiny and dependency-free. It is imported by core, geom and
UI alike and must not have side effects.
"""

APP_NAME = "CircleProgressBar"
APP_SHORT = "CPB"

APP_VERSION = "1.0.0"
# Schema version of the persisted widget state (.cpb.json).
# NOTE: int, ProgressBarConfig.from_dict compares it as integer.
STATE_SCHEMA_VERSION = 1

# Widget defaults
DEFAULT_STROKE_WIDTH = 10
DEFAULT_FINISHED_COLOR = "#0000ff"
DEFAULT_UNFINISHED_COLOR = "#888888"
# -90 = 12 en punto (0 = 3 en punto, ángulos positivos en sentido horario).
DEFAULT_START_ANGLE = -90.0
DEFAULT_ROUND_CAP = True
# max=0 hasta que el llamador configure un valor positivo.
DEFAULT_MAX = 0
DEFAULT_PROGRESS = 0
