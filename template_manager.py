"""
Template Manager

Saved-template list operations and the two JSON interchange formats:
- Template files: pretty-printed JSON array of templates
- Share codes: URL-safe, unpadded base64 of percent-encoded compact JSON,
  compatible with codes produced by the web planner
"""

import base64
import json
from typing import List, Optional
from urllib.parse import quote, unquote

from models import Template
from equipment_manager import generate_template_id, random_suffix


# Characters encodeURIComponent leaves alone (besides alphanumerics)
URI_COMPONENT_SAFE = "-_.!~*'()"


def generate_id() -> str:
    return generate_template_id()


def save_template(templates: List[Template], template: Template,
                  name: Optional[str] = None) -> List[Template]:
    """
    Insert or replace a template by id, optionally renaming it.

    Returns a new list; the input list is untouched.
    """
    saved = Template.from_dict(template.to_dict())
    if name:
        saved.name = name

    result = list(templates)
    for i, existing in enumerate(result):
        if existing.id == saved.id:
            result[i] = saved
            return result
    result.append(saved)
    return result


def delete_template(templates: List[Template], template_id: str) -> List[Template]:
    return [t for t in templates if t.id != template_id]


def find_template(templates: List[Template], template_id: str) -> Optional[Template]:
    for template in templates:
        if template.id == template_id:
            return template
    return None


# =============================================================================
# JSON FILES
# =============================================================================

def export_as_json(templates: List[Template]) -> str:
    """Serialize templates as a 2-space indented JSON array."""
    return json.dumps([t.to_dict() for t in templates], indent=2, ensure_ascii=False)


def import_from_json(existing: List[Template], text: str) -> Optional[List[Template]]:
    """
    Merge templates from a JSON file into an existing list.

    Imported templates replace existing ones with the same id; entries
    without an id get a fresh 'tpl_' id.

    Returns:
        Merged list, or None if the text is not a valid template array
    """
    try:
        parsed = json.loads(text)
        if not isinstance(parsed, list):
            raise ValueError("Expected a JSON array of templates")

        merged = {t.id: t for t in existing}
        for entry in parsed:
            if not isinstance(entry, dict):
                raise ValueError("Template entries must be objects")
            if not entry.get('id'):
                entry = dict(entry, id=f"tpl_{random_suffix(6)}")
            template = Template.from_dict(entry)
            merged[template.id] = template
        return list(merged.values())

    except (ValueError, TypeError, KeyError, AttributeError) as e:
        print(f"Warning: Failed to import templates: {e}")
        return None


# =============================================================================
# SHARE CODES
# =============================================================================

def encode_share_code(template: Template) -> str:
    """Encode a template as a URL-safe share code. Returns '' on failure."""
    try:
        compact = json.dumps(template.to_dict(), separators=(',', ':'), ensure_ascii=False)
        encoded = quote(compact, safe=URI_COMPONENT_SAFE)
        b64 = base64.b64encode(encoded.encode('ascii')).decode('ascii')
        return b64.replace('+', '-').replace('/', '_').rstrip('=')
    except (ValueError, TypeError, AttributeError) as e:
        print(f"Warning: Failed to encode share code: {e}")
        return ''


def decode_share_code(code: str) -> Optional[Template]:
    """Decode a share code back into a Template. Returns None on any failure."""
    try:
        code = code.strip()
        padding = '=' * (-len(code) % 4)
        raw = base64.urlsafe_b64decode(code + padding).decode('ascii')
        data = json.loads(unquote(raw, errors='strict'))
        if not isinstance(data, dict):
            return None
        return Template.from_dict(data)
    except (ValueError, TypeError, KeyError, AttributeError):
        return None
