"""Shared constants, regex patterns, and field key tables.

Centralizes the patterns and per-type key configuration shared by the
flattener, the harvester, the codecs and the host-side adapters.
"""

import re

from token_codec.domain.models import FieldSpec

# ── Alias Patterns ───────────────────────────────────────────────────────

# Entire string is exactly one reference: {color.brand.primary}
ALIAS_RE = re.compile(r'^\{[^{}]+\}$')

# One reference span anywhere in a string; the group keeps the delimiters
ALIAS_SPAN_RE = re.compile(r'(\{[^{}]+\})')

# ── Structural Encoding ──────────────────────────────────────────────────

# Wrapper key holding the entries of an encoded map or vector
ENTRIES_KEY = '$arr$'

# Key descriptor fields, probed in order
KEY_NAME_FIELDS = ('$fqn$', 'name')

# Metadata / trie internals, never user-visible data
TRAVERSE_SKIP_KEYS = frozenset({'$meta$', '$cnt$', 'shift', 'edit', '__hash__'})

# Language protocol masks, e.g. cljs$lang$protocol_mask$partition0$
PROTOCOL_MASK_RE = re.compile(r'^cljs\$')

# Internal identifiers that show up as strings inside trie nodes
FONT_NAME_STOP_WORDS = frozenset({'root', 'tail', 'shift', 'edit', 'ns', 'fqn', 'meta', 'cnt'})

PLAUSIBLE_NAME_FORBIDDEN = ('$', '/', '(', '[', '{')
PLAUSIBLE_NAME_MIN_LEN = 2
PLAUSIBLE_NAME_MAX_LEN = 80

DEFAULT_HARVEST_DEPTH = 8

# ── Token Types ──────────────────────────────────────────────────────────

TYPOGRAPHY = 'typography'
SHADOW = 'shadow'
FONT_FAMILIES = 'fontFamilies'

# type → (label, placeholder)
TOKEN_TYPES: dict[str, tuple[str, str]] = {
    'color': ('Color', 'Enter a value or alias with {alias}'),
    'borderRadius': ('Border Radius', 'e.g. 4px or {alias.radius}'),
    'dimension': ('Dimension', 'e.g. 16px or {alias}'),
    'fontFamilies': ('Font Family', 'e.g. Inter'),
    'fontSizes': ('Font Size', 'e.g. 16px or {alias}'),
    'fontWeights': ('Font Weight', 'e.g. 400 or bold'),
    'letterSpacing': ('Letter Spacing', 'e.g. 0.05em or {alias}'),
    'number': ('Number', 'e.g. 8'),
    'opacity': ('Opacity', 'e.g. 0.5 or 50%'),
    'rotation': ('Rotation', 'e.g. 45'),
    'shadow': ('Shadow', ''),
    'sizing': ('Sizing', 'e.g. 100px or {alias}'),
    'spacing': ('Spacing', 'e.g. 8px or {alias}'),
    'borderWidth': ('Stroke Width', 'e.g. 1px or {alias}'),
    'textCase': ('Text Case', 'uppercase | lowercase | capitalize | none'),
    'textDecoration': ('Text Decoration', 'none | underline | line-through'),
    'typography': ('Typography', ''),
}

# ── Field Key Tables ─────────────────────────────────────────────────────
#
# One table per composite type drives both directions: normalizers probe
# `read_keys` in order, sanitizers emit under `api_key`.

TYPOGRAPHY_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec('fontFamily', 'fontFamilies',
              ('fontFamilies', 'fontFamily', 'font-families', 'font-family'), 'fontFamilies'),
    FieldSpec('fontSize', 'fontSizes',
              ('fontSizes', 'fontSize', 'font-sizes', 'font-size'), 'fontSizes'),
    FieldSpec('fontWeight', 'fontWeight',
              ('fontWeight', 'fontWeights', 'font-weight', 'font-weights'), 'fontWeights'),
    FieldSpec('lineHeight', 'lineHeight', ('lineHeight', 'line-height'), 'number'),
    FieldSpec('letterSpacing', 'letterSpacing', ('letterSpacing', 'letter-spacing'), 'letterSpacing'),
    FieldSpec('textCase', 'textCase', ('textCase', 'text-case'), 'textCase'),
    FieldSpec('textDecoration', 'textDecoration', ('textDecoration', 'text-decoration'), 'textDecoration'),
)

SHADOW_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec('x', 'offsetX', ('offsetX', 'x', 'offset-x'), 'dimension'),
    FieldSpec('y', 'offsetY', ('offsetY', 'y', 'offset-y'), 'dimension'),
    FieldSpec('blur', 'blur', ('blur',), 'dimension'),
    FieldSpec('spread', 'spread', ('spread',), 'dimension'),
    FieldSpec('color', 'color', ('color',), 'color'),
    FieldSpec('type', 'inset', ('type',), None),
)

SHADOW_INSET_KEY = 'inset'
SHADOW_COLOR_KEYS = ('value', 'color', 'hex', 'rgba', 'name')
DROP_SHADOW = 'drop-shadow'
INNER_SHADOW = 'inner-shadow'

SHADOW_DEFAULTS: dict[str, str] = {
    'x': '0',
    'y': '0',
    'blur': '0',
    'spread': '0',
    'color': 'rgba(0,0,0,0.25)',
    'type': DROP_SHADOW,
}

FONT_FAMILY_FIELD = 'fontFamily'
SCALAR_FIELD = 'value'

# ── Message Protocol ─────────────────────────────────────────────────────

MSG_INIT = 'init'
MSG_GET_TOKENS = 'get-tokens'
MSG_GET_TOKENS_OF_TYPE = 'get-tokens-of-type'
MSG_CREATE_TOKEN = 'create-token'
MSG_UPDATE_TOKEN = 'update-token'
MSG_DUPLICATE_TOKEN = 'duplicate-token'
MSG_DELETE_TOKEN = 'delete-token'
MSG_MOVE_TOKEN = 'move-token'
MSG_CREATE_SET = 'create-set'
MSG_RENAME_SET = 'rename-set'
MSG_DUPLICATE_SET = 'duplicate-set'
MSG_DELETE_SET = 'delete-set'
MSG_SCAN_FONTS = 'scan-fonts'

MSG_LOADED = 'loaded'
MSG_TOKENS_LOADED = 'tokens-loaded'
MSG_TOKENS_OF_TYPE_LOADED = 'tokens-of-type-loaded'
MSG_TOKENS_UPDATED = 'tokens-updated'
MSG_SETS_UPDATED = 'sets-updated'
MSG_FONTS_LOADED = 'fonts-loaded'
MSG_ERROR = 'error'

# Envelope keys different transports have been seen to wrap payloads in
MESSAGE_ENVELOPE_KEYS = ('data', 'pluginMessage', 'message', 'payload')
