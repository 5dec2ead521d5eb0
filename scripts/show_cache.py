"""Display the entries held in the portfolio cache file."""
import json
from src.application.expiring_cache import epoch_millis
from src.application.theme_controller import THEME_STORAGE_KEY
from src.config import load_settings
from src.infrastructure.file_storage import JsonFileStorage


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def describe(raw: str, now_ms: float) -> str:
    try:
        item = json.loads(raw)
        expiry = float(item["expiry"])
    except (ValueError, TypeError, KeyError):
        return "corrupt"
    remaining = (expiry - now_ms) / 60_000
    if remaining <= 0:
        return f"expired {-remaining:.0f} min ago"
    return f"valid for {remaining:.0f} min"


def display_cache():
    """Display every cache key with its state."""
    settings = load_settings()
    storage = JsonFileStorage(settings.cache_file)
    now_ms = epoch_millis()

    print_section(f"Cache file: {storage.path}")
    keys = storage.keys()
    if not keys:
        print("No entries.")
        return

    print(f"{'Key':<30} {'State':>28}")
    print("-" * 60)
    for key in sorted(keys):
        if key == THEME_STORAGE_KEY:
            print(f"{key:<30} {'preference: ' + storage.get_item(key):>28}")
            continue
        print(f"{key:<30} {describe(storage.get_item(key), now_ms):>28}")


if __name__ == "__main__":
    display_cache()
