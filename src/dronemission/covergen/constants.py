# Default configuration values
DEFAULT_PITCH = 3.0
DEFAULT_THRESHOLD = 0.1
DEFAULT_MAX_CANDIDATES = 500
DEFAULT_ALTITUDE = 3.5
DEFAULT_TRANSLATION_X = 3.0
DEFAULT_TRANSLATION_Y = 3.0
DEFAULT_CARTESIAN_PRECISION = 2
DEFAULT_OUTPUT_TYPE = 'python'
DEFAULT_OUTPUT_DIR = 'output'

# Altitude used for cartesian waypoints whose source has none
DEFAULT_MISSING_ALTITUDE = 50.0

# Flat-earth conversion
EARTH_RADIUS = 6371000.0  # meters

# Number of segments used to approximate the overlap disc, 32 per quadrant
CIRCLE_SEGMENTS = 128

# Output types
OUTPUT_TYPES = ('python', 'plan')
OUTPUT_EXTENSIONS = {
    'python': '.py',
    'plan': '.plan',
}

# Configuration sections
LATTICE_SECTION_NAME = 'Lattice'
WAYPOINTS_SECTION_NAME = 'Waypoints'
OUTPUT_SECTION_NAME = 'Output'

# Mission script parameters
FLIGHT_SPEED = 2.0
HOVER_TIME = 2.0

# Templates
PLAN_BODY_TEMPLATE = 'plan_body_template.json'
PLAN_ITEM_TEMPLATE = 'plan_waypoint_template.json'
MISSION_SCRIPT_TEMPLATE = 'mission_script_template.py.txt'
