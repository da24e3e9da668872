"""
Rendering of coverage results into downloadable mission files.

Two formats are produced: a QGroundControl .plan document, and a Python
flight script that embeds both waypoint lists as literal coordinates.
"""

import json
import logging
from pathlib import Path
from string import Template

from dronemission.covergen import config
from dronemission.covergen import constants
from dronemission.covergen.models import CoverageResult

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# MAVLink command ids used by the .plan items
NAV_WAYPOINT = 16
NAV_RETURN_TO_LAUNCH = 20
NAV_LAND = 21
NAV_TAKEOFF = 22

# Seconds to hold at each survey waypoint
WAYPOINT_HOLD = 2


def plan_body_template():
    return initialize_template(constants.PLAN_BODY_TEMPLATE)

def plan_item_template():
    return initialize_template(constants.PLAN_ITEM_TEMPLATE)

def mission_script_template():
    return initialize_template(constants.MISSION_SCRIPT_TEMPLATE)

def initialize_template(file):
    with open(TEMPLATES_DIR / file) as template_file:
        template_str = template_file.read()

    return Template(template_str)


def render_plan(result: CoverageResult, altitude: float = constants.DEFAULT_ALTITUDE) -> str:
    """
    Returns a .plan document whose home position is the first waypoint.
    """
    home = result.absolute[0]
    body_json = json.loads(
        plan_body_template().safe_substitute({"home_lat": home.lat, "home_lng": home.lng})
    )
    items = body_json["mission"]["items"]
    item_template = plan_item_template()

    def item(command, lat, lng, hold=0):
        values = {
            "command": command,
            "do_jump_id": len(items) + 1,
            "hold": hold,
            "lat": lat,
            "lng": lng,
            "altitude": altitude,
        }
        return json.loads(item_template.safe_substitute(values))

    items.append(item(NAV_TAKEOFF, home.lat, home.lng))
    for waypoint in result.absolute:
        items.append(item(NAV_WAYPOINT, waypoint.lat, waypoint.lng, WAYPOINT_HOLD))
    items.append(item(NAV_LAND, home.lat, home.lng))
    items.append({
        "autoContinue": True,
        "command": NAV_RETURN_TO_LAUNCH,
        "doJumpId": len(items) + 1,
        "frame": 2,
        "params": [0, 0, 0, 0, 0, 0, 0],
        "type": "SimpleItem",
    })

    return json.dumps(body_json, indent=4)


def render_mission_script(result: CoverageResult, altitude: float = constants.DEFAULT_ALTITUDE) -> str:
    """
    Returns the flight script with both waypoint lists embedded verbatim.
    """
    absolute = ",\n".join(f"    [{w.lat}, {w.lng}, {w.alt}]" for w in result.absolute)
    cartesian = ",\n".join(f"    [{w.x}, {w.y}, {w.z}]" for w in result.cartesian)

    return mission_script_template().safe_substitute({
        "flight_altitude": altitude,
        "flight_speed": constants.FLIGHT_SPEED,
        "hover_time": constants.HOVER_TIME,
        "absolute_waypoints": absolute,
        "cartesian_waypoints": cartesian,
    })


def render(result: CoverageResult, configuration: config.Config) -> str:
    if configuration.output_type == "plan":
        return render_plan(result, configuration.altitude)
    return render_mission_script(result, configuration.altitude)


def write_mission(result: CoverageResult, configuration: config.Config, stem: str) -> Path:
    """
    Writes the rendered mission to the configured output directory.
    """
    output_dir = Path(configuration.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    extension = constants.OUTPUT_EXTENSIONS[configuration.output_type]
    mission_path = output_dir / f"{stem}{extension}"
    with open(mission_path, "tw") as f:
        print(render(result, configuration), file=f)

    logger.info(f"Wrote {configuration.output_type} mission to {mission_path}")
    return mission_path
