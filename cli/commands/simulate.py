"""
Simulate command: feed an action script through the optimistic reducer.

Script format (JSON list):
    [
      {"type": "ADD", "payload": {"amount": 5}, "optimistic": {"type": "BEGIN", "id": 1}},
      {"type": "ADD", "payload": {"amount": 2}},
      {"type": "SAVE_FAILED", "optimistic": {"type": "REVERT", "id": 1}}
    ]
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from optimist.config import OptimistConfig
from optimist.core import (
    BEGIN,
    COMMIT,
    REVERT,
    Action,
    ActionReducer,
    ConfigError,
    Optimistic,
    UnknownTransactionError,
    canonical_json_str,
    make_optimistic_reducer,
    optimistic_meta,
)

console = Console()

TOKENS = {"BEGIN": BEGIN, "COMMIT": COMMIT, "REVERT": REVERT}


class ScriptError(ValueError):
    """Raised when an action script cannot be parsed."""
    pass


def counter_reducer() -> ActionReducer:
    r = ActionReducer()
    r.register("ADD", lambda n, a: (n or 0) + a.payload.get("amount", 0))
    return r


def merge_reducer() -> ActionReducer:
    def handle_set(cur, action):
        new = dict(cur or {})
        new[action.payload["key"]] = action.payload.get("value")
        return new

    r = ActionReducer()
    r.register("SET", handle_set)
    return r


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


REDUCERS = {
    "counter": (counter_reducer, 0),
    "merge": (merge_reducer, {}),
}


def parse_initial(reducer_name: str, text: str) -> Any:
    """
    Decode --initial and check it suits the chosen reducer.

    Raises:
        ScriptError: If the state is not valid JSON or has the wrong shape
    """
    try:
        state = json.loads(text)
    except json.JSONDecodeError as e:
        raise ScriptError(f"--initial: invalid JSON: {e}") from e
    if reducer_name == "counter" and not is_number(state):
        raise ScriptError("--initial: counter state must be a number")
    if reducer_name == "merge" and not isinstance(state, dict):
        raise ScriptError("--initial: merge state must be an object")
    return state


def parse_action(entry: Any, index: int) -> Action:
    """
    Build an Action from one script entry.

    Raises:
        ScriptError: If the entry is malformed
    """
    if not isinstance(entry, dict) or not isinstance(entry.get("type"), str):
        raise ScriptError(f"entry {index}: expected object with a string 'type'")
    payload = entry.get("payload", {})
    if not isinstance(payload, dict):
        raise ScriptError(f"entry {index}: 'payload' must be an object")
    if entry["type"] == "SET" and "key" not in payload:
        raise ScriptError(f"entry {index}: SET needs payload.key")
    if entry["type"] == "ADD" and not is_number(payload.get("amount", 0)):
        raise ScriptError(f"entry {index}: ADD needs a numeric payload.amount")

    meta: Dict[str, Any] = {}
    raw = entry.get("optimistic")
    if raw is not None:
        if not isinstance(raw, dict):
            raise ScriptError(f"entry {index}: 'optimistic' must be an object")
        if not isinstance(raw.get("type"), str):
            raise ScriptError(f"entry {index}: 'optimistic.type' must be a string")
        kind = TOKENS.get(raw["type"], raw["type"])
        meta["optimistic"] = Optimistic(type=kind, id=raw.get("id"))
    return Action(type=entry["type"], payload=payload, meta=meta)


def load_script(path: Path) -> List[Action]:
    """
    Read and parse an action script.

    Raises:
        FileNotFoundError: If the script does not exist
        ScriptError: If the script is not a valid action list
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ScriptError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ScriptError("script must be a JSON list of actions")
    return [parse_action(entry, i) for i, entry in enumerate(data)]


def describe(action: Action) -> str:
    opt = optimistic_meta(action)
    if opt is None:
        return action.type
    return f"{action.type} [{opt.type.split('/')[-1]} #{opt.id}]"


def simulate_command(
    script: Path = typer.Argument(..., help="Path to JSON action script"),
    reducer_name: str = typer.Option("counter", "--reducer", "-r", help="Built-in reducer: counter or merge"),
    initial: Optional[str] = typer.Option(None, "--initial", "-i", help="Initial state as JSON"),
    max_history: Optional[int] = typer.Option(None, "--max-history", help="Leak warning threshold"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Run an action script through the optimistic reducer and show every step.

    Examples:
        optimist simulate actions.json
        optimist simulate actions.json --reducer merge --initial '{"a": 1}'
        optimist simulate actions.json --json
    """
    if reducer_name not in REDUCERS:
        console.print(f"[red]Error:[/red] unknown reducer {reducer_name!r} (choose from {', '.join(REDUCERS)})")
        raise typer.Exit(2)

    factory, default_state = REDUCERS[reducer_name]
    try:
        actions = load_script(script)
        state = parse_initial(reducer_name, initial) if initial is not None else default_state
        if max_history is not None:
            config = OptimistConfig(max_history=max_history)
        else:
            config = OptimistConfig.from_env()
    except FileNotFoundError:
        console.print(f"[red]Error: Script not found:[/red] {script}")
        raise typer.Exit(2)
    except (ScriptError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    warnings: List[str] = []
    optimistic = make_optimistic_reducer(
        factory(),
        config=config,
        on_diagnostic=lambda w: warnings.append(w.message),
    )

    steps = []
    env = optimistic.ensure_envelope(state)
    for index, action in enumerate(actions):
        try:
            env = optimistic(env, action)
        except UnknownTransactionError as e:
            if json_output:
                print(canonical_json_str({"error": str(e), "step": index, "steps": steps}, indent=2))
            else:
                console.print(f"[red]Error at step {index}:[/red] {e}")
            raise typer.Exit(1)
        steps.append({
            "step": index,
            "action": describe(action),
            "current": env.current,
            "pending": len(env.pending),
            "baseline": env.baseline,
        })

    if json_output:
        print(canonical_json_str({"steps": steps, "final": env.current, "warnings": warnings}, indent=2))
        raise typer.Exit(0)

    table = Table(title=f"Simulation ({reducer_name})")
    table.add_column("Step", style="cyan", justify="right")
    table.add_column("Action", style="green")
    table.add_column("Current")
    table.add_column("Pending", justify="right")
    table.add_column("Baseline", style="yellow")

    for step in steps:
        table.add_row(
            str(step["step"]),
            step["action"],
            canonical_json_str(step["current"]),
            str(step["pending"]),
            canonical_json_str(step["baseline"]) if step["pending"] else "-",
        )

    console.print(table)
    for message in warnings:
        console.print(f"[yellow]Warning:[/yellow] {message}")
    console.print(f"[bold]Final state:[/bold] {canonical_json_str(env.current)}")
