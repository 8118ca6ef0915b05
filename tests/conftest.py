"""Shared test fixtures."""

import json

import pytest

from token_codec.host.bridge import HostBridge
from token_codec.host.catalog import InMemoryCatalog


# ── Structural Encodings ─────────────────────────────────────────────────


def key(name):
    """Encoded-map key descriptor."""
    return {"ns": None, "name": name, "fqn": name, "$fqn$": name, "$hash$": 12345}


def encoded_map(*pairs):
    entries = []
    for k, v in pairs:
        entries.extend([key(k), v])
    return {"$meta$": None, "$cnt$": len(pairs), "$arr$": entries, "$hash$": None}


def encoded_vector(*items):
    return {"$meta$": None, "$cnt$": len(items), "$arr$": list(items)}


# Persistent set of one font: the name sits inside the trie's root node,
# surrounded by bookkeeping fields.
FONT_SET_INTER = {
    "meta": None,
    "cnt": 1,
    "shift": 5,
    "edit": "root",
    "root": {
        "edit": None,
        "bitmap": 64,
        "arr": [{"edit": None, "arr": ["Inter", True]}],
    },
    "tail": [],
}

ENCODED_TYPOGRAPHY = encoded_map(
    ("font-family", FONT_SET_INTER),
    ("font-size", "16"),
    ("font-weight", 400),
    ("line-height", 1.5),
    ("letter-spacing", "{spacing.tight}"),
)

API_SHADOW = [{
    "offsetX": "4",
    "offsetY": "4",
    "blur": "8",
    "spread": "0",
    "color": "#000000",
    "inset": False,
}]

ENCODED_SHADOW = encoded_vector(encoded_map(
    ("offset-x", "2"),
    ("offset-y", "3"),
    ("blur", "6"),
    ("spread", "1"),
    ("color", encoded_map(("value", "{color.shadow}"))),
    ("inset", True),
))


@pytest.fixture
def encoded_typography():
    return json.dumps(ENCODED_TYPOGRAPHY)


@pytest.fixture
def api_shadow():
    return json.dumps(API_SHADOW)


@pytest.fixture
def encoded_shadow():
    return json.dumps(ENCODED_SHADOW)


# ── Catalogs ─────────────────────────────────────────────────────────────

CATALOG_DATA = {
    "sets": [
        {
            "id": "core",
            "name": "Core",
            "active": True,
            "tokens": [
                {"id": "t-red", "name": "color.red", "type": "color", "value": "#ff0000"},
                {"id": "t-brand", "name": "color.brand", "type": "color", "value": "{color.red}",
                 "description": "Brand color"},
                {"id": "t-sm", "name": "spacing.sm", "type": "spacing", "value": "4px"},
                {"id": "t-body", "name": "type.body", "type": "typography",
                 "value": {"fontFamilies": ["Inter"], "fontSizes": "16", "fontWeight": "400"}},
                {"id": "t-card", "name": "shadow.card", "type": "shadow",
                 "value": [{"offsetX": "0", "offsetY": "2", "blur": "4", "spread": "0",
                            "color": "{color.red}", "inset": False}]},
            ],
        },
        {
            "id": "dark",
            "name": "Dark",
            "active": True,
            "tokens": [
                {"id": "t-bg", "name": "color.bg", "type": "color", "value": "#111111"},
            ],
        },
        {
            "id": "empty",
            "name": "Empty",
            "active": False,
            "tokens": [],
        },
    ],
    "themes": [
        {"id": "th-light", "group": "Mode", "name": "Light", "active": True, "sets": ["core"]},
        {"id": "th-dark", "group": "Mode", "name": "Dark", "active": False, "sets": ["core", "dark"]},
    ],
    # Document tree scanned for fonts; only text shapes count
    "document": {
        "type": "frame",
        "children": [
            {"type": "text", "fontFamily": "Inter"},
            {"type": "rect", "fontFamily": "Ignored"},
            {
                "type": "group",
                "children": [{
                    "type": "text",
                    "fontFamily": "",
                    "paragraphs": [{
                        "fontFamily": "Roboto",
                        "children": [{"fontFamily": "Inter"}, {"fontFamily": "Fira Code"}],
                    }],
                }],
            },
        ],
    },
}


@pytest.fixture
def catalog_data():
    return json.loads(json.dumps(CATALOG_DATA))


@pytest.fixture
def catalog(catalog_data):
    return InMemoryCatalog.from_dict(catalog_data)


@pytest.fixture
def bridge(catalog_data):
    return HostBridge.from_catalog_dict(catalog_data)


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_data))
    return str(path)
