# cli/app.py
# CLI = тимчасовий UI для калькулятора. Його можна замінити на Web, не чіпаючи core.

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from core.calculator import calculate
from core.errors import PricingValidationError
from core.models import CalculationResult, CostInputs
from core.money import fmt_usd
from core.presets import PRESETS, apply_preset, infer_project_type
from core.rules import ALL_PROJECT_TYPES, ZONE_MULTIPLIER


# ---------- ДОПОМІЖНІ ФУНКЦІЇ ВВОДУ ----------

def ask_float_default(prompt: str, default: float, *, min_value: float | None = None) -> float:
    """Ввід числа з дефолтом: Enter -> default."""
    while True:
        raw = input(f"{prompt} [{default}]: ").strip()
        if raw == "":
            value = float(default)
        else:
            raw = raw.replace(",", ".")
            try:
                value = float(raw)
            except ValueError:
                print("❌ Enter a number or press Enter")
                continue

        if min_value is not None and value < min_value:
            print(f"❌ Value must be >= {min_value}")
            continue
        return value


def ask_int_default(prompt: str, default: int, *, min_value: int | None = None) -> int:
    while True:
        raw = input(f"{prompt} [{default}]: ").strip()
        if raw == "":
            value = default
        else:
            try:
                value = int(raw)
            except ValueError:
                print("❌ Enter a whole number or press Enter")
                continue

        if min_value is not None and value < min_value:
            print(f"❌ Value must be >= {min_value}")
            continue
        return value


def ask_choice(prompt: str, options: Sequence[str], default: str) -> str:
    """Вибір зі списку: Enter -> default."""
    while True:
        raw = input(f"{prompt} ({'/'.join(options)}) [{default}]: ").strip().lower()
        if raw == "":
            return default
        if raw in options:
            return raw
        print(f"❌ Choose one of: {', '.join(options)}")


def ask_yes_no(prompt: str) -> bool:
    """Безпечний ввід так/ні: повертає True або False."""
    while True:
        raw = input(prompt + " (y/n): ").strip().lower()
        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        print("❌ Enter y or n")


# ---------- HISTORY (JSON) ----------

def history_payload(result: CalculationResult, *, client_name: str, created_at: str) -> dict[str, Any]:
    return {
        "meta": {
            "created_at": created_at,
            "client_name": client_name,
        },
        "input": result.inputs.model_dump(mode="json"),
        "output": {
            "breakdown": result.breakdown.model_dump(mode="json"),
            "line_items": [li.model_dump(mode="json") for li in result.line_items],
        },
    }


def save_quote_json(payload: dict, root: Path | None = None) -> Path:
    """
    Зберігає розрахунок як JSON в data/history/.
    Повертає шлях до створеного файлу.
    """
    root = root or Path(__file__).resolve().parents[1]  # корінь проєкту
    history_dir = root / "data" / "history"
    history_dir.mkdir(parents=True, exist_ok=True)

    ts = payload["meta"]["created_at"].replace(":", "").replace("-", "")
    project_type = payload["input"]["project_type"]
    client = payload["meta"]["client_name"].strip().lower().replace(" ", "_") or "client"

    path = history_dir / f"{ts}_{project_type}_{client}.json"
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def print_breakdown(result: CalculationResult) -> None:
    b = result.breakdown
    zone = result.inputs.zone

    print("\n--- Breakdown ---")
    for li in result.line_items:
        print(f"{li.description:<34} {li.quantity} x {fmt_usd(li.unit_price)} = {fmt_usd(li.total)}")
    print(f"Zone multiplier:                   {zone} ({ZONE_MULTIPLIER[zone]}x)")
    print(f"Subtotal:                          {fmt_usd(b.subtotal)}")
    print(f"Tax (8.6%):                        {fmt_usd(b.tax)}")
    print(f"TOTAL:                             {fmt_usd(b.total)}")
    print("-----------------\n")


# ---------- ОСНОВНИЙ CLI СЦЕНАРІЙ ----------

def collect_inputs() -> CostInputs:
    zone = ask_choice("Zone", list(ZONE_MULTIPLIER), "residential")

    print("\nAvailable presets:")
    for k, p in PRESETS.items():
        print(f" - {k}: {p['label']}")
    preset_id = input("\nChoose preset id (Enter = manual): ").strip().lower()
    if preset_id in PRESETS:
        return apply_preset(preset_id, zone)

    title = input("Job title (optional): ").strip()
    suggested = infer_project_type(title) if title else "maintenance"
    project_type = ask_choice("Project type", ALL_PROJECT_TYPES, suggested)

    hours = ask_float_default("Hours", 2, min_value=0)
    sqft = ask_float_default("Area (sqft)", 1000, min_value=0)
    visits = ask_int_default("Visits", 1, min_value=1)

    return CostInputs(hours=hours, sqft=sqft, visits=visits, zone=zone, project_type=project_type)


def run_cli() -> None:
    print("\n=== Landscaping Job Cost Calculator (CLI) ===\n")

    client_name = input("Client name (optional): ").strip()

    inputs = collect_inputs()
    try:
        result = calculate(inputs)
    except PricingValidationError as e:
        print("\n❌ Invalid input:")
        for msg in e.errors:
            print(f" - {msg}")
        return

    print_breakdown(result)

    if ask_yes_no("Save calculation to history (JSON)?"):
        payload = history_payload(
            result,
            client_name=client_name,
            created_at=datetime.now().isoformat(timespec="seconds"),
        )
        path = save_quote_json(payload)
        print(f"✅ Saved JSON: {path}\n")


if __name__ == "__main__":
    run_cli()
