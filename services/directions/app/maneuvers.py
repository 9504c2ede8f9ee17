"""Readable turn instructions for providers that only return maneuver codes."""

from __future__ import annotations

from typing import Any, Mapping

TOMTOM_MANEUVERS: dict[str, str] = {
    "ARRIVE": "Arrive at your destination",
    "ARRIVE_LEFT": "Arrive at your destination on the left",
    "ARRIVE_RIGHT": "Arrive at your destination on the right",
    "DEPART": "Depart",
    "STRAIGHT": "Continue straight",
    "KEEP_RIGHT": "Keep right",
    "BEAR_RIGHT": "Bear right",
    "TURN_RIGHT": "Turn right",
    "SHARP_RIGHT": "Take a sharp right",
    "KEEP_LEFT": "Keep left",
    "BEAR_LEFT": "Bear left",
    "TURN_LEFT": "Turn left",
    "SHARP_LEFT": "Take a sharp left",
    "MAKE_UTURN": "Make a U-turn",
    "ENTER_MOTORWAY": "Enter the motorway",
    "ENTER_FREEWAY": "Enter the freeway",
    "ENTER_HIGHWAY": "Enter the highway",
    "TAKE_EXIT": "Take the exit",
    "MOTORWAY_EXIT_LEFT": "Take the exit on the left",
    "MOTORWAY_EXIT_RIGHT": "Take the exit on the right",
    "TAKE_FERRY": "Take the ferry",
    "ROUNDABOUT_CROSS": "Cross the roundabout",
    "ROUNDABOUT_RIGHT": "At the roundabout, turn right",
    "ROUNDABOUT_LEFT": "At the roundabout, turn left",
    "ROUNDABOUT_BACK": "At the roundabout, go back",
    "TRY_MAKE_UTURN": "Try to make a U-turn",
    "FOLLOW": "Follow the road",
    "SWITCH_PARALLEL_ROAD": "Switch to the parallel road",
    "SWITCH_MAIN_ROAD": "Switch to the main road",
    "ENTRANCE_RAMP": "Take the entrance ramp",
    "WAYPOINT_LEFT": "Waypoint on the left",
    "WAYPOINT_RIGHT": "Waypoint on the right",
    "WAYPOINT_REACHED": "Waypoint reached",
}

_DEFAULT_ROAD = "the road"


def describe_tomtom_maneuver(code: str) -> str:
    """Translate a TomTom maneuver code, humanizing codes we do not know."""

    return TOMTOM_MANEUVERS.get(code) or code.replace("_", " ").lower()


def describe_osrm_step(step: Mapping[str, Any]) -> str:
    """Render one OSRM route step as an English sentence."""

    maneuver = step.get("maneuver") or {}
    kind = maneuver.get("type") or ""
    modifier = maneuver.get("modifier") or ""
    name = step.get("name") or ""

    road = name if name and name != "-" else _DEFAULT_ROAD
    named = road != _DEFAULT_ROAD
    pretty = modifier.replace("_", " ")

    if kind == "depart":
        if named:
            return f"Head {pretty or 'along'} {road}"
        return f"Start and head {pretty or 'straight'}"
    if kind == "arrive":
        return "You have arrived at your destination"
    if kind in ("roundabout", "rotary"):
        exit_number = maneuver.get("exit")
        exit_text = f"exit {exit_number}" if isinstance(exit_number, int) else "the exit"
        return f"At the roundabout, take {exit_text}" + (f" onto {road}" if named else "")
    if kind == "fork":
        if modifier in ("left", "right"):
            return f"Keep {modifier} to stay on {road}"
        return f"Keep {pretty or 'straight'} on {road}"
    if kind == "merge":
        return " ".join(filter(None, ["Merge", pretty, "onto", road]))
    if kind in ("on ramp", "off ramp"):
        return " ".join(filter(None, ["Take the ramp", pretty, "onto", road]))
    if kind in ("turn", "continue", "new name"):
        if pretty:
            return f"Turn {pretty} onto {road}"
        return f"Continue on {road}"
    return f"Continue on {road}" if named else "Continue towards your destination"
