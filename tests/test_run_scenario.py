from __future__ import annotations

import json
from pathlib import Path

from run_scenario import build_controller, main, run_scenario

SCENARIO = {
    "name": "smoke",
    "building": {"number_of_cars": 2, "total_floors": 8, "loading_latency": 2.0, "travel_latency": 1.0},
    "duration": 60,
    "requests": [
        {"tick": 0, "floor": 5, "direction": "UP"},
        {"tick": 0, "floor": 5, "direction": "UP"},
        {"tick": 1, "floor": 12, "direction": "DOWN"},
        {"tick": 3, "floor": 2, "direction": "DOWN"},
    ],
}


def test_run_scenario_counts_outcomes_and_serves_calls():
    controller = build_controller(SCENARIO)
    outcomes = run_scenario(controller, SCENARIO)
    assert outcomes["accepted"] == 2
    assert outcomes["deduplicated"] == 1
    assert outcomes["rejected_invalid_floor"] == 1
    assert controller.get_state().pending_requests == ()


def test_main_writes_results(tmp_path: Path, capsys):
    config_path = tmp_path / "smoke.json"
    config_path.write_text(json.dumps(SCENARIO))
    output_path = tmp_path / "out" / "results.json"

    main([str(config_path), "--output", str(output_path)])

    results = json.loads(output_path.read_text())
    assert results["scenario"] == "smoke"
    assert len(results["final_state"]["cars"]) == 2
    assert results["final_state"]["cars"][0]["direction"] == "IDLE"
    assert "Scenario: smoke" in capsys.readouterr().out
