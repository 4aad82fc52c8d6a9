"""
Item Database

In-memory item catalog built from the XML and NDJSON feeds.

Items are keyed by their deterministic id, so loading the same feed twice
(or two feeds that share items) never grows the catalog.
"""

from pathlib import Path
from typing import Dict, Optional, List, Iterable

import requests

from models import Item, Position
from code_tables import SLOT_TO_POSITION
from xml_item_parser import parse_items_xml, DEFAULT_XML_PATHS
from ndjson_parser import parse_ndjson, DEFAULT_NDJSON_PATH


REQUEST_TIMEOUT = 30


def detect_format(text: str, filename: str = '') -> str:
    """Guess 'xml' or 'ndjson' from the file suffix, then the first character."""
    suffix = Path(filename).suffix.lower() if filename else ''
    if suffix == '.xml':
        return 'xml'
    if suffix in ('.ndjson', '.jsonl', '.json'):
        return 'ndjson'
    return 'xml' if text.lstrip().startswith('<') else 'ndjson'


def parse_items_text(text: str, filename: str = '') -> List[Item]:
    if detect_format(text, filename) == 'xml':
        return parse_items_xml(text)
    return parse_ndjson(text)


class ItemDatabase:
    """
    Catalog of all known items.
    """

    def __init__(self):
        self.items: Dict[str, Item] = {}
        self.sources: List[str] = []

    def __len__(self) -> int:
        return len(self.items)

    def merge(self, items: Iterable[Item]) -> int:
        """
        Add items, replacing any with the same id.

        Returns:
            Number of ids that were not in the catalog before
        """
        added = 0
        for item in items:
            if item.id not in self.items:
                added += 1
            self.items[item.id] = item
        return added

    def load_text(self, text: str, filename: str = '') -> int:
        """Parse feed text (XML or NDJSON) and merge it."""
        items = parse_items_text(text, filename)
        if not items:
            print(f"Warning: No items found in {filename or 'input'}")
        added = self.merge(items)
        self.sources.append(filename or 'input')
        return added

    def load_file(self, path) -> int:
        """
        Load an XML or NDJSON file, chosen by suffix.

        Args:
            path: Path to items_*.xml or *.ndjson

        Returns:
            Number of new items
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.load_text(content, path.name)

    def load_url(self, url: str) -> int:
        """Fetch a feed over HTTP and merge it. Failures add nothing."""
        try:
            response = requests.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            print(f"Warning: Error loading items from {url}: {e}")
            return 0
        return self.load_text(response.text, url.split('?')[0])

    def get_item(self, item_id: str) -> Optional[Item]:
        return self.items.get(item_id)

    def all_items(self) -> List[Item]:
        return list(self.items.values())

    def get_items_for_position(self, position: Position) -> List[Item]:
        return [item for item in self.items.values() if item.position == position]

    def get_items_for_slot(self, slot_id: str) -> List[Item]:
        """All items that can go into a slot ('ring2', 'mainHand', ...)."""
        position = SLOT_TO_POSITION.get(slot_id)
        if position is None:
            return []
        return self.get_items_for_position(position)

    def search_items(self, query: str) -> List[Item]:
        """Search items by name substring."""
        query_lower = query.lower()
        return [item for item in self.items.values()
                if query_lower in item.name.lower()]

    def all_effect_ids(self) -> List[str]:
        """Every effect ID seen on any item, sorted."""
        ids = set()
        for item in self.items.values():
            ids.update(item.effects.keys())
        return sorted(ids)


def combine_items(db_items: Iterable[Item], owned_items: Iterable[Item]) -> List[Item]:
    """Catalog items plus owned items; an owned item replaces a catalog item with its id."""
    combined: Dict[str, Item] = {}
    for item in db_items:
        combined[item.id] = item
    for item in owned_items:
        combined[item.id] = item
    return list(combined.values())


def toggle_owned(owned_items: List[Item], item: Item) -> List[Item]:
    """Add the item to the owned list, or remove it if already owned."""
    if any(o.id == item.id for o in owned_items):
        return [o for o in owned_items if o.id != item.id]
    return list(owned_items) + [item]


# Global database instance
_database: Optional[ItemDatabase] = None


def get_database() -> ItemDatabase:
    """
    Get the global item database instance.

    Auto-loads from the default NDJSON and XML locations if not already loaded.
    """
    global _database
    if _database is None:
        _database = ItemDatabase()

        for path in [DEFAULT_NDJSON_PATH] + list(DEFAULT_XML_PATHS):
            if not path.exists():
                continue
            try:
                _database.load_file(path)
            except (OSError, UnicodeDecodeError) as e:
                print(f"Warning: Failed to auto-load item database from {path}: {e}")

    return _database


def reset_database():
    """Drop the global instance so the next get_database() reloads."""
    global _database
    _database = None


def load_database(paths: Iterable) -> ItemDatabase:
    """Load extra item files into the global database."""
    db = get_database()
    for path in paths:
        db.load_file(path)
    return db
