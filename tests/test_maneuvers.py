import pytest

from services.directions.app.maneuvers import (
    TOMTOM_MANEUVERS,
    describe_osrm_step,
    describe_tomtom_maneuver,
)


def test_every_known_maneuver_has_text() -> None:
    for code, text in TOMTOM_MANEUVERS.items():
        assert text.strip(), code
        assert describe_tomtom_maneuver(code) == text


def test_known_and_unknown_maneuvers() -> None:
    assert describe_tomtom_maneuver("ROUNDABOUT_LEFT") == "At the roundabout, turn left"
    assert describe_tomtom_maneuver("FOO_BAR") == "foo bar"


@pytest.mark.parametrize(
    ("step", "expected"),
    [
        (
            {"maneuver": {"type": "depart", "modifier": "left"}, "name": "Oxford Street"},
            "Head left Oxford Street",
        ),
        ({"maneuver": {"type": "depart"}, "name": "Oxford Street"}, "Head along Oxford Street"),
        ({"maneuver": {"type": "depart"}, "name": ""}, "Start and head straight"),
        ({"maneuver": {"type": "arrive"}, "name": "Ring Road"}, "You have arrived at your destination"),
        (
            {"maneuver": {"type": "roundabout", "exit": 2}, "name": "Ring Road"},
            "At the roundabout, take exit 2 onto Ring Road",
        ),
        ({"maneuver": {"type": "rotary"}, "name": "-"}, "At the roundabout, take the exit"),
        (
            {"maneuver": {"type": "fork", "modifier": "right"}, "name": "N1"},
            "Keep right to stay on N1",
        ),
        (
            {"maneuver": {"type": "fork", "modifier": "slight_left"}, "name": "N1"},
            "Keep slight left on N1",
        ),
        ({"maneuver": {"type": "merge", "modifier": "left"}, "name": "N1"}, "Merge left onto N1"),
        ({"maneuver": {"type": "merge"}, "name": ""}, "Merge onto the road"),
        ({"maneuver": {"type": "off ramp", "modifier": "right"}, "name": "N1"}, "Take the ramp right onto N1"),
        (
            {"maneuver": {"type": "turn", "modifier": "sharp right"}, "name": "Liberation Road"},
            "Turn sharp right onto Liberation Road",
        ),
        ({"maneuver": {"type": "new name"}, "name": "Liberation Road"}, "Continue on Liberation Road"),
        ({"maneuver": {"type": "notification"}, "name": "Liberation Road"}, "Continue on Liberation Road"),
        ({"maneuver": {"type": "notification"}}, "Continue towards your destination"),
        ({}, "Continue towards your destination"),
    ],
)
def test_describe_osrm_step(step: dict, expected: str) -> None:
    assert describe_osrm_step(step) == expected
