from pathlib import Path

# Bundled reference data (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
CANTEENS_FILE = DATA_DIR / 'canteens.json'
LEGEND_FILE = DATA_DIR / 'legend.json'

__all__ = ['DATA_DIR', 'CANTEENS_FILE', 'LEGEND_FILE']
