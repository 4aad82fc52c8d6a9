"""
XML Item Parser

Parses the legacy per-item XML exports (items_alb.xml, items_hib.xml,
items_mid.xml) into canonical Item objects.

Expected shape:

    <items>
      <item>
        <name>Cloak of the Ancients</name>
        <position>CLOAK</position>
        <realm>Albion</realm>
        <level>51</level>
        <quality>100</quality>
        <armor af="102">CHAIN</armor>
        <weapon damage="SLASH">SLASH</weapon>
        <effect id="STRENGTH">15</effect>
        <class_restriction>Armsman</class_restriction>
        <origin>Merchants: ...</origin>
        <online_url>https://...</online_url>
      </item>
    </items>

A malformed <item> is skipped on its own; unparseable documents yield no items.
"""

import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import requests

from models import Item, DEFAULT_LEVEL, DEFAULT_QUALITY
from code_tables import parse_position_name, parse_realm_name


SCRIPT_DIR = Path(__file__).parent

DEFAULT_XML_PATHS = [
    SCRIPT_DIR / 'data' / 'items_alb.xml',
    SCRIPT_DIR / 'data' / 'items_hib.xml',
    SCRIPT_DIR / 'data' / 'items_mid.xml',
]

REQUEST_TIMEOUT = 30


# =============================================================================
# DOM QUERY INTERFACE
# =============================================================================

class XmlQuery(ABC):
    """
    Element lookups the decoder needs, independent of the XML backend.

    All lookups search descendants, not just direct children.
    """

    @abstractmethod
    def first_child(self, element, tag: str):
        """First descendant with the given tag, or None."""

    @abstractmethod
    def all_children(self, element, tag: str) -> list:
        """All descendants with the given tag, in document order."""

    @abstractmethod
    def attribute(self, element, name: str) -> Optional[str]:
        """Attribute value, or None when absent."""

    @abstractmethod
    def content(self, element) -> str:
        """Full text content of an element, untrimmed."""

    def text_of(self, element, tag: str) -> Optional[str]:
        """Trimmed text of the first descendant with the tag; None if absent or blank."""
        child = self.first_child(element, tag)
        if child is None:
            return None
        text = self.content(child).strip()
        return text or None


class ElementTreeQuery(XmlQuery):
    """XmlQuery over xml.etree.ElementTree elements."""

    def first_child(self, element, tag: str):
        if element is None:
            return None
        return element.find(f'.//{tag}')

    def all_children(self, element, tag: str) -> list:
        if element is None:
            return []
        return element.findall(f'.//{tag}')

    def attribute(self, element, name: str) -> Optional[str]:
        return element.get(name)

    def content(self, element) -> str:
        return ''.join(element.itertext())


_default_query = ElementTreeQuery()


# =============================================================================
# PARSING
# =============================================================================

def _parse_int(text: Optional[str], default: int) -> int:
    """Leading-integer parse ('51', '51abc'); default when missing or non-numeric."""
    if text is None:
        return default
    match = re.match(r'\s*([+-]?\d+)', text)
    if not match:
        return default
    return int(match.group(1))


def clean_origin(origin: str) -> str:
    """Strip merchant/mob/quest ID noise from an origin string."""
    origin = re.sub(r'Merchants:\s*', '', origin, flags=re.IGNORECASE)
    origin = re.sub(r'Mobs:\s*;[\d;]+', '', origin, flags=re.IGNORECASE)
    origin = re.sub(r'Quest:\s*;[\d;]+', 'Quest', origin, flags=re.IGNORECASE)
    origin = re.sub(r'\s+', ' ', origin)
    return origin.strip()


def parse_item_element(item_el, query: XmlQuery = _default_query) -> Optional[Item]:
    """
    Convert one <item> element into an Item.

    Returns None when name or position is missing or the position is unknown.
    """
    name = query.text_of(item_el, 'name')
    if not name:
        return None

    position = parse_position_name(query.text_of(item_el, 'position'))
    if position is None:
        return None

    realm = parse_realm_name(query.text_of(item_el, 'realm'))
    level = _parse_int(query.text_of(item_el, 'level'), DEFAULT_LEVEL)
    quality = _parse_int(query.text_of(item_el, 'quality'), DEFAULT_QUALITY)

    armor_type = None
    armor_af = None
    armor_el = query.first_child(item_el, 'armor')
    if armor_el is not None:
        armor_type = query.content(armor_el).strip() or None
        armor_af = _parse_int(query.attribute(armor_el, 'af'), 0)

    weapon_type = None
    damage_type = None
    weapon_el = query.first_child(item_el, 'weapon')
    if weapon_el is not None:
        weapon_type = query.content(weapon_el).strip() or None
        damage_type = query.attribute(weapon_el, 'damage') or None

    # Repeated ids keep the last value
    effects = {}
    for effect_el in query.all_children(item_el, 'effect'):
        effect_id = query.attribute(effect_el, 'id')
        value = _parse_int(query.content(effect_el), 0)
        if effect_id and value:
            effects[effect_id] = value

    class_restrictions = []
    for class_el in query.all_children(item_el, 'class_restriction'):
        class_name = query.content(class_el).strip()
        if class_name and not class_name.isdigit():
            class_restrictions.append(class_name)

    origin = clean_origin(query.text_of(item_el, 'origin') or '')
    online_url = (query.text_of(item_el, 'online_url') or '').strip()

    return Item(
        id=Item.make_id(realm, position, name),
        name=name,
        position=position,
        realm=realm,
        level=level,
        quality=quality,
        armor_type=armor_type,
        armor_af=armor_af,
        weapon_type=weapon_type,
        damage_type=damage_type,
        effects=effects,
        class_restrictions=class_restrictions,
        origin=origin,
        online_url=online_url,
    )


def parse_items_xml(xml_text: str, query: XmlQuery = _default_query) -> List[Item]:
    """
    Parse an XML item export.

    Args:
        xml_text: Full XML document text
        query: DOM query backend

    Returns:
        List of Items; empty if the document does not parse
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        print(f"Warning: XML parse error: {e}")
        return []

    items = []
    item_elements = [root] if root.tag == 'item' else query.all_children(root, 'item')
    for index, item_el in enumerate(item_elements):
        try:
            item = parse_item_element(item_el, query)
            if item:
                items.append(item)
        except (ValueError, TypeError, AttributeError) as e:
            print(f"Warning: Failed to parse item at index {index}: {e}")

    return items


def load_items_from_file(path) -> List[Item]:
    """Read and parse an XML item file. Missing/unreadable files yield no items."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return parse_items_xml(f.read())
    except OSError as e:
        print(f"Warning: Error loading items from {path}: {e}")
        return []


def load_items_from_url(url: str) -> List[Item]:
    """Fetch and parse an XML item file over HTTP. Any failure yields no items."""
    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return parse_items_xml(response.text)
    except requests.RequestException as e:
        print(f"Warning: Error loading items from {url}: {e}")
        return []


def dedupe_by_name_position(items: List[Item]) -> List[Item]:
    """Keep the first item for each (name, position) pair."""
    seen = set()
    result = []
    for item in items:
        key = f"{item.name}_{item.position.value}"
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def load_all_items(urls: List[str]) -> List[Item]:
    """
    Load and merge several XML feeds.

    Items are de-duplicated by name and position, first feed wins.
    """
    all_items = []
    for url in urls:
        all_items.extend(load_items_from_url(url))
    return dedupe_by_name_position(all_items)
