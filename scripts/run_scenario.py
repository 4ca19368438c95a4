"""CLI for running offline elevator bank scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from elevator_bank import BankConfig, Controller, RandomCallGenerator, RequestOutcome


def build_controller(config: Dict) -> Controller:
    building_cfg = config.get("building", {})
    return Controller(BankConfig.from_dict(building_cfg))


def build_generator(config: Dict, total_floors: int) -> Optional[RandomCallGenerator]:
    auto_cfg = config.get("auto_generate")
    if not auto_cfg:
        return None
    return RandomCallGenerator(
        total_floors,
        min_interval=auto_cfg.get("min_interval", 5.0),
        max_interval=auto_cfg.get("max_interval", 15.0),
        random_seed=config.get("random_seed"),
    )


def _apply_scheduled_requests(
    controller: Controller, requests: Iterable[Dict], current_tick: int, outcomes: Dict[str, int]
) -> None:
    for request in requests:
        if request.get("tick", 0) != current_tick:
            continue
        outcome = controller.request_elevator(request["floor"], request["direction"])
        outcomes[outcome.value] = outcomes.get(outcome.value, 0) + 1


def run_scenario(controller: Controller, config: Dict) -> Dict[str, int]:
    duration = config.get("duration", 60)
    tick_interval = config.get("tick_interval", 1.0)
    requests = config.get("requests", [])
    generator = build_generator(config, controller.total_floors)
    outcomes: Dict[str, int] = {outcome.value: 0 for outcome in RequestOutcome}

    for current_tick in range(duration):
        _apply_scheduled_requests(controller, requests, current_tick, outcomes)
        if generator is not None:
            call = generator.due(controller.current_time)
            if call is not None:
                outcome = controller.request_elevator(*call)
                outcomes[outcome.value] += 1
        controller.step(tick_interval)
    return outcomes


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the final state and log as JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Echo every log entry")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = json.loads(args.config.read_text())
    controller = build_controller(config)
    outcomes = run_scenario(controller, config)
    final_state = controller.get_state().to_dict()

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 60),
        "request_outcomes": outcomes,
        "final_state": final_state,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']} ticks")
    print("Requests:")
    for key, value in outcomes.items():
        print(f"  {key}: {value}")
    print("Cars:")
    for car in final_state["cars"]:
        print(
            f"  #{car['car_id']}: floor {car['current_floor']} {car['direction'].value} "
            f"{car['motion_state'].value} queue={list(car['destination_queue'])}"
        )
    print(f"Pending requests: {len(final_state['pending_requests'])}")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
