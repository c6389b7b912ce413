import json
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

CATEGORIES = ("CRITICAL", "ERROR", "WARNING", "INFO")


@dataclass(frozen=True)
class ListItem:
    label: str
    lines: int = 0


@dataclass(frozen=True)
class LegendEntry:
    label: str
    category: str


DEFAULT_ITEMS = [
    ListItem("Item0", 1),
    ListItem("Item1", 2),
    ListItem("Item2", 1),
    ListItem("Item3", 3),
    ListItem("Item4", 1),
    ListItem("Item5", 4),
    ListItem("Item6", 1),
]

DEFAULT_LEGEND = [
    LegendEntry("Quit: q", "CRITICAL"),
    LegendEntry("Hold timer: space", "WARNING"),
    LegendEntry("Next item: down", "INFO"),
    LegendEntry("Previous item: up", "INFO"),
    LegendEntry("Clear selection: left", "ERROR"),
]


def get_config_path() -> Path:
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "holdtimer" / "config.json"


def load_config() -> Dict[str, Any]:
    path = get_config_path()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError:
        return {}
    return {}


def get_items(config: Dict[str, Any]) -> List[ListItem]:
    raw = config.get("items")
    if not isinstance(raw, list):
        return list(DEFAULT_ITEMS)
    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        label = entry.get("label")
        lines = entry.get("lines", 0)
        if not isinstance(label, str):
            continue
        # bool is an int subclass
        if not isinstance(lines, int) or isinstance(lines, bool) or lines < 0:
            continue
        items.append(ListItem(label, lines))
    return items or list(DEFAULT_ITEMS)


def get_legend(config: Dict[str, Any]) -> List[LegendEntry]:
    raw = config.get("legend")
    if not isinstance(raw, list):
        return list(DEFAULT_LEGEND)
    legend = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        label = entry.get("label")
        category = entry.get("category")
        if not isinstance(label, str) or not isinstance(category, str):
            continue
        legend.append(LegendEntry(label, category))
    return legend or list(DEFAULT_LEGEND)
