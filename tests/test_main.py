import numpy as np

from main import run_session


SMALL_CONFIG = {
    "session": {"seed": 123},
    "noise": {"width": 16, "height": 12, "freq": 4},
    "flow_field": {"width": 20, "height": 15, "scale": 3},
    "particles": {"count": 12, "frames": 20},
    "automaton": {"width": 10, "height": 10, "iterations": 5},
    "lsystem": {
        "axiom": "X",
        "rules": {"X": [["F[+X]F[-X]+X", 2.0], ["F[-X]", 1.0]], "F": "FF"},
        "iterations": 2,
        "angle": 25,
        "step": 1,
    },
    "palette": {"size": 4},
    "run_control": {"log_throttle_steps": 5},
}


def test_session_produces_every_output():
    outputs = run_session(SMALL_CONFIG)
    assert outputs["noise"].shape == (12, 16)
    assert outputs["flow_field"].shape == (15, 20, 2)
    assert len(outputs["particle_frames"]) == 20
    assert len(outputs["automaton"].snapshots) == 5
    assert len(outputs["lsystem"].points()) > 1
    assert len(outputs["palette"]) == 4


def test_session_is_reproducible_for_seed():
    a = run_session(SMALL_CONFIG)
    b = run_session(SMALL_CONFIG)
    assert np.array_equal(a["noise"], b["noise"])
    assert np.array_equal(a["particle_frames"][-1].positions, b["particle_frames"][-1].positions)
    assert np.array_equal(a["automaton"].snapshots[-1], b["automaton"].snapshots[-1])
    assert a["lsystem"].points() == b["lsystem"].points()
    assert a["palette"] == b["palette"]
