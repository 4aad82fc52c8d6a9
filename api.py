#!/usr/bin/env python3
"""
DAoC Template Builder - FastAPI Backend

Provides REST API endpoints for the web UI: item catalog browsing, template
editing, stat calculation, and the Zenkraft / JSON / share-code interchange.
"""

import traceback
from pathlib import Path
from typing import Dict, List, Optional, Any

from fastapi import FastAPI, HTTPException, UploadFile, File
from fastapi.responses import HTMLResponse, FileResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# =============================================================================
# PATH SETUP
# =============================================================================

SCRIPT_DIR = Path(__file__).parent

# =============================================================================
# IMPORTS FROM CORE
# =============================================================================

from models import Item, Template, SLOT_IDS
from item_database import ItemDatabase, get_database, combine_items, toggle_owned
from code_tables import get_slot_display
from stats_calculator import calculate_stats, calculate_item_utility, generate_template_report
from equipment_manager import (
    find_compatible_slot,
    equip_item,
    unequip_slot,
    create_empty_template,
)
from zenkraft_converter import (
    export_zenkraft_template,
    parse_zenkraft_template,
    apply_zenkraft_result,
)
from template_manager import (
    save_template,
    delete_template,
    export_as_json,
    import_from_json,
    encode_share_code,
    decode_share_code,
)
from item_filter import (
    ItemFilterService,
    ItemFilterCriteria,
    StatFilter,
    get_classes_for_realm,
    sort_items,
    paginate,
    ITEMS_PER_PAGE,
    DEFAULT_SORT_COLUMN,
)


# =============================================================================
# FastAPI App Setup
# =============================================================================

app = FastAPI(
    title="DAoC Template Builder",
    description="Build, score and share Dark Age of Camelot equipment templates",
    version="1.0.0"
)

# CORS middleware for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# Global State
# =============================================================================

class AppState:
    """Global application state."""
    def __init__(self):
        self.database: Optional[ItemDatabase] = None
        self.owned_items: List[Item] = []
        self.template: Template = create_empty_template()
        self.templates: List[Template] = []
        self.items_filename: str = ""

state = AppState()


def get_catalog() -> ItemDatabase:
    """The item catalog, auto-loaded from the default locations on first use."""
    if state.database is None:
        state.database = get_database()
    return state.database


def find_item(item_id: str) -> Optional[Item]:
    """Look up an item among owned items first, then the catalog."""
    for item in state.owned_items:
        if item.id == item_id:
            return item
    return get_catalog().get_item(item_id)


def resolve_template(data: Optional[Dict[str, Any]]) -> Template:
    """Template from a request body, or the current template when none was sent."""
    if data:
        return Template.from_dict(data)
    return state.template


def item_summary(item: Item) -> Dict[str, Any]:
    data = item.to_dict()
    data["utility"] = calculate_item_utility(item)
    data["slotDisplay"] = get_slot_display(item)
    return data


def template_response(template: Template) -> Dict[str, Any]:
    return {
        "success": True,
        "template": template.to_dict(),
        "stats": calculate_stats(template).to_dict(),
    }


def parse_stat_filters(stats: Optional[str]) -> List[StatFilter]:
    """'STRENGTH:10,RES_CRUSH:5' -> StatFilters."""
    filters = []
    if not stats:
        return filters
    for part in stats.split(","):
        part = part.strip()
        if not part:
            continue
        stat, _, min_value = part.partition(":")
        filters.append(StatFilter(stat=stat.strip(), min_value=int(min_value or 0)))
    return filters

# =============================================================================
# Pydantic Models for API
# =============================================================================

class StatusResponse(BaseModel):
    status: str
    item_count: int
    owned_count: int
    saved_templates: int
    items_filename: str
    sources: List[str]

class TemplateRequest(BaseModel):
    template: Optional[Dict[str, Any]] = None

class ItemRequest(BaseModel):
    item: Dict[str, Any]

class EquipRequest(BaseModel):
    item_id: Optional[str] = None
    item: Optional[Dict[str, Any]] = None
    slot: Optional[str] = None  # picked automatically when omitted

class UnequipRequest(BaseModel):
    slot: str

class ZenkraftImportRequest(BaseModel):
    text: str
    apply: bool = True

class ShareDecodeRequest(BaseModel):
    code: str
    load: bool = False

class SaveTemplateRequest(BaseModel):
    template: Optional[Dict[str, Any]] = None
    name: Optional[str] = None

class ImportTemplatesRequest(BaseModel):
    text: str

class ToggleOwnedRequest(BaseModel):
    item_id: Optional[str] = None
    item: Optional[Dict[str, Any]] = None

# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the main HTML page."""
    html_path = SCRIPT_DIR / "static" / "index.html"
    if html_path.exists():
        return FileResponse(html_path)
    return HTMLResponse("<h1>DAoC Template Builder API</h1><p>Static files not found</p>")


@app.get("/api/status", response_model=StatusResponse)
async def get_status():
    """Get the current application status."""
    db = get_catalog()
    return StatusResponse(
        status="ready" if len(db) else "no_items",
        item_count=len(db),
        owned_count=len(state.owned_items),
        saved_templates=len(state.templates),
        items_filename=state.items_filename,
        sources=list(db.sources),
    )


@app.post("/api/upload/items")
async def upload_items(file: UploadFile = File(...)):
    """Upload an XML or NDJSON item file and merge it into the catalog."""
    try:
        content = await file.read()
        db = get_catalog()
        added = db.load_text(content.decode("utf-8"), file.filename or "")
        state.items_filename = file.filename or ""
        return {
            "success": True,
            "filename": file.filename,
            "added": added,
            "item_count": len(db),
            "message": f"Loaded {added} new items",
        }
    except Exception as e:
        return {
            "success": False,
            "error": str(e),
            "traceback": traceback.format_exc()
        }


@app.get("/api/items")
async def get_items(realm: str = "", slot: str = "", character_class: str = "",
                    search: str = "", owned_only: bool = False, stats: str = "",
                    sort: str = DEFAULT_SORT_COLUMN, descending: bool = True,
                    page: int = 1, per_page: int = ITEMS_PER_PAGE):
    """
    Browse the catalog (plus owned items).

    Args:
        realm: Albion/Hibernia/Midgard, 'Any' for realm-less only, '' for all
        slot: Position name or weapon group ('WT_SLASH', 'WT_TWO_HAND', ...)
        character_class: Only items this class can use
        search: Name substring
        owned_only: Only owned items
        stats: Minimum effects, e.g. 'STRENGTH:10,RES_CRUSH:5'
        sort: name, slot, level or utility
        descending: Sort direction
        page: 1-based page number
        per_page: Page size
    """
    try:
        items = combine_items(get_catalog().all_items(), state.owned_items)
        criteria = ItemFilterCriteria(
            realm=realm,
            slot=slot,
            character_class=character_class,
            search_term=search,
            owned_only=owned_only,
            owned_ids={o.id for o in state.owned_items},
            stat_filters=parse_stat_filters(stats),
        )
        filtered = sort_items(ItemFilterService.filter(items, criteria), sort, descending)
        page_items, page, total_pages = paginate(filtered, page, per_page)
        return {
            "success": True,
            "items": [item_summary(item) for item in page_items],
            "count": len(filtered),
            "page": page,
            "total_pages": total_pages,
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.get("/api/items/effects")
async def get_effect_ids():
    """All effect IDs present in the catalog, for stat-filter autocomplete."""
    return {"effects": get_catalog().all_effect_ids()}


@app.get("/api/classes")
async def get_classes(realm: str = ""):
    """Class names for the given realm (all realms when empty)."""
    return {"classes": get_classes_for_realm(realm)}


@app.post("/api/stats/calculate")
async def calculate_template_stats(request: TemplateRequest):
    """Calculate capped stats and utility for a template (default: current)."""
    try:
        template = resolve_template(request.template)
        return {"success": True, "stats": calculate_stats(template).to_dict()}
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.post("/api/item/utility")
async def item_utility(request: ItemRequest):
    """Utility score for a single item."""
    try:
        item = Item.from_dict(request.item)
        return {"success": True, "utility": calculate_item_utility(item)}
    except Exception as e:
        return {"success": False, "error": str(e)}


# =============================================================================
# Current Template
# =============================================================================

@app.get("/api/template")
async def get_template():
    """The template being edited, with its calculated stats."""
    return template_response(state.template)


@app.post("/api/template/new")
async def new_template():
    """Replace the current template with an empty one."""
    state.template = create_empty_template()
    return template_response(state.template)


@app.post("/api/template/equip")
async def equip(request: EquipRequest):
    """Equip an item (by id, or inline) into the current template."""
    try:
        if request.item is not None:
            item = Item.from_dict(request.item)
        elif request.item_id:
            item = find_item(request.item_id)
            if item is None:
                return {"success": False, "error": f"Item {request.item_id} not found"}
        else:
            return {"success": False, "error": "Either item_id or item is required"}

        slot_id = request.slot or find_compatible_slot(item, state.template)
        if slot_id not in SLOT_IDS:
            return {"success": False, "error": f"No slot for item {item.name}"}

        state.template = equip_item(state.template, slot_id, item)
        response = template_response(state.template)
        response["slot"] = slot_id
        return response
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.post("/api/template/unequip")
async def unequip(request: UnequipRequest):
    """Empty a slot of the current template."""
    if request.slot not in SLOT_IDS:
        return {"success": False, "error": f"Invalid slot: {request.slot}"}
    state.template = unequip_slot(state.template, request.slot)
    return template_response(state.template)


@app.post("/api/template/report")
async def template_report(request: TemplateRequest):
    """Plain-text report for a template (default: current)."""
    try:
        template = resolve_template(request.template)
        report = generate_template_report(template, calculate_stats(template))
        return {"success": True, "report": report}
    except Exception as e:
        return {"success": False, "error": str(e)}


# =============================================================================
# Zenkraft
# =============================================================================

@app.post("/api/zenkraft/export")
async def zenkraft_export(request: TemplateRequest):
    """Export a template (default: current) in Zenkraft's text format."""
    try:
        template = resolve_template(request.template)
        text = export_zenkraft_template(template, calculate_stats(template))
        return {"success": True, "text": text}
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.post("/api/zenkraft/import")
async def zenkraft_import(request: ZenkraftImportRequest):
    """Parse a Zenkraft export; optionally merge it into the current template."""
    result = parse_zenkraft_template(request.text)
    if result is None:
        return {"success": False, "error": "No Zenkraft slots found"}

    response = {"success": True, "result": result.to_dict()}
    if request.apply:
        state.template = apply_zenkraft_result(state.template, result)
        response["template"] = state.template.to_dict()
        response["stats"] = calculate_stats(state.template).to_dict()
    return response


# =============================================================================
# Share Codes
# =============================================================================

@app.post("/api/share/encode")
async def share_encode(request: TemplateRequest):
    """Share code for a template (default: current)."""
    try:
        template = resolve_template(request.template)
    except Exception as e:
        return {"success": False, "error": str(e)}

    code = encode_share_code(template)
    if not code:
        return {"success": False, "error": "Failed to encode template"}
    return {"success": True, "code": code}


@app.post("/api/share/decode")
async def share_decode(request: ShareDecodeRequest):
    """Decode a share code; optionally make it the current template."""
    template = decode_share_code(request.code)
    if template is None:
        return {"success": False, "error": "Invalid share code"}
    if request.load:
        state.template = template
    return template_response(template)


# =============================================================================
# Saved Templates
# =============================================================================

@app.get("/api/templates")
async def list_templates():
    return {"templates": [t.to_dict() for t in state.templates]}


@app.post("/api/templates")
async def save_current_template(request: SaveTemplateRequest):
    """Save a template (default: current) into the saved list, optionally renamed."""
    try:
        template = resolve_template(request.template)
        state.templates = save_template(state.templates, template, request.name)
        if request.name and template.id == state.template.id:
            state.template.name = request.name
        return {"success": True, "templates": [t.to_dict() for t in state.templates]}
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.delete("/api/templates/{template_id}")
async def remove_template(template_id: str):
    before = len(state.templates)
    state.templates = delete_template(state.templates, template_id)
    return {"success": True, "deleted": before - len(state.templates)}


@app.get("/api/templates/export", response_class=PlainTextResponse)
async def export_templates():
    """Saved templates as a JSON file."""
    return PlainTextResponse(
        export_as_json(state.templates),
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=templates.json"},
    )


@app.post("/api/templates/import")
async def import_templates(request: ImportTemplatesRequest):
    """Merge templates from an exported JSON file into the saved list."""
    merged = import_from_json(state.templates, request.text)
    if merged is None:
        raise HTTPException(status_code=400, detail="Invalid template file")
    state.templates = merged
    return {"success": True, "templates": [t.to_dict() for t in state.templates]}


# =============================================================================
# Owned Items
# =============================================================================

@app.get("/api/owned")
async def get_owned():
    return {"items": [item_summary(item) for item in state.owned_items]}


@app.post("/api/owned/toggle")
async def toggle_owned_item(request: ToggleOwnedRequest):
    """Mark an item as owned, or unmark it if already owned."""
    try:
        if request.item is not None:
            item = Item.from_dict(request.item)
        elif request.item_id:
            item = find_item(request.item_id)
            if item is None:
                return {"success": False, "error": f"Item {request.item_id} not found"}
        else:
            return {"success": False, "error": "Either item_id or item is required"}

        state.owned_items = toggle_owned(state.owned_items, item)
        owned = any(o.id == item.id for o in state.owned_items)
        return {"success": True, "owned": owned, "count": len(state.owned_items)}
    except Exception as e:
        return {"success": False, "error": str(e)}
