"""
Token Codec MCP Server.

Exposes the design token value codec (normalization, encoding, mixed-value
parsing, sub-value editing) and an optional token catalog to LLM clients
via the Model Context Protocol.

Usage:
    python -m mcp_server.server [--catalog /path/to/catalog.json]
"""

from __future__ import annotations

import sys

from mcp.server.fastmcp import FastMCP

from mcp_server.datasource import LocalTokenSource, TokenSource
from token_codec.codec_registry import CodecRegistry
from token_codec.domain.constants import TOKEN_TYPES
from token_codec.domain.models import SerializedToken
from token_codec.resolution.alias_parser import classify_value, is_alias, parse_mixed, rename_reference
from token_codec.resolution.alias_resolver import AliasResolver
from token_codec.sub_value_editor import SubValueEditor

# ── Globals ─────────────────────────────────────────────────────────────

_source: TokenSource | None = None
_registry = CodecRegistry()
mcp = FastMCP("token-codec")


def _token_source() -> TokenSource:
    if _source is None:
        raise RuntimeError("Token catalog not loaded; start the server with --catalog")
    return _source


# ── Codec Tools ─────────────────────────────────────────────────────────


@mcp.tool()
def list_token_types() -> list[dict]:
    """List the supported design token types.

    Composite types (typography, shadow) have sub-values that can be
    edited one field at a time with edit_sub_value.
    """
    return [
        {
            "type": t,
            "label": TOKEN_TYPES.get(t, (t, ""))[0],
            "placeholder": TOKEN_TYPES.get(t, ("", ""))[1],
            "composite": _registry.is_composite(t),
            "fields": _registry.get_codec(t).field_keys if _registry.is_composite(t) else [],
        }
        for t in _registry.get_supported_types()
    ]


@mcp.tool()
def normalize_token_value(token_type: str, value: str) -> dict:
    """Normalize a raw token value into its canonical field form.

    Accepts any wire shape the host has been seen to produce: JSON with
    camelCase, plural or kebab-case keys, structurally encoded maps, shadow
    lists, font family lists. Unrecognized input yields an empty form.

    Args:
        token_type: Token type (e.g. "typography", "shadow", "color").
        value: Raw wire value string.
    """
    return _registry.get_codec(token_type).normalize(value)


@mcp.tool()
def encode_token_form(token_type: str, form: dict) -> str:
    """Encode a canonical form into the value string the host write API accepts.

    Args:
        token_type: Token type.
        form: Canonical form, e.g. {"fontFamily": "Inter", "fontSize": "16"}.
    """
    return _registry.get_codec(token_type).encode(form)


@mcp.tool()
def parse_mixed_value(value: str, known_names: list[str] | None = None) -> dict:
    """Split a value into alias references and literal text.

    Args:
        value: Value string, e.g. "calc({spacing.sm} + 4px)".
        known_names: Optional token names; references to other names are
                     reported as broken.
    """
    result = {
        "kind": classify_value(value).value,
        "segments": [s.to_dict() for s in parse_mixed(value)],
    }
    if known_names is not None:
        result["broken_references"] = AliasResolver(known_names).broken_references(value)
    return result


@mcp.tool()
def rename_alias_reference(value: str, old_name: str, new_name: str) -> str:
    """Repoint every reference to one token name inside a value.

    Works on pure aliases and mixed values alike; literal text and other
    references are kept exactly as they are.

    Args:
        value: Value string, e.g. "calc({spacing.sm} * 2)".
        old_name: Referenced token name to replace, e.g. "spacing.sm".
        new_name: Token name to reference instead.
    """
    return rename_reference(value, old_name, new_name)


@mcp.tool()
def list_sub_values(token_type: str, value: str) -> list[dict]:
    """List the set fields of a composite token value, flagging alias fields.

    Args:
        token_type: "typography" or "shadow".
        value: Wire value string.
    """
    token = SerializedToken(id="", name="", type=token_type, value=value)
    return [sv.to_dict() for sv in SubValueEditor(_registry).sub_values(token)]


@mcp.tool()
def edit_sub_value(token_type: str, value: str, field_key: str, new_value: str | None = None) -> dict:
    """Read, or rewrite, one field of a composite token value.

    Sibling fields are preserved. A blank new_value removes the field.

    Args:
        token_type: "typography" or "shadow".
        value: Current wire value string.
        field_key: Canonical field key (e.g. "color", "lineHeight").
        new_value: New field value; omit to read the current one.
    """
    editor = SubValueEditor(_registry)
    token = SerializedToken(id="", name="", type=token_type, value=value)
    if new_value is None:
        return {"field": field_key, "value": editor.get_sub_value(token, field_key)}
    return {"field": field_key, "value": editor.set_sub_value(token, field_key, new_value)}


# ── Catalog Tools ───────────────────────────────────────────────────────


@mcp.tool()
def list_sets() -> list[dict]:
    """List the token sets of the loaded catalog with their token counts."""
    return [s.to_dict() for s in _token_source().list_sets()]


@mcp.tool()
def list_tokens(set_id: str, token_type: str | None = None) -> list[dict]:
    """List the tokens of one set, with resolved values where available.

    Args:
        set_id: Set id (from list_sets).
        token_type: Optional filter, e.g. "color".
    """
    return [t.to_dict() for t in _token_source().list_tokens(set_id, token_type)]

@mcp.tool()
def find_broken_references(set_id: str | None = None) -> list[dict]:
    """Find tokens that reference token names missing from the catalog.

    Composite values are checked field by field.

    Args:
        set_id: Only report tokens of this set; all sets when omitted.
    """
    source = _token_source()
    all_tokens = [t for s in source.list_sets() for t in source.list_tokens(s.id)]
    resolver = AliasResolver.from_tokens(all_tokens)
    editor = SubValueEditor(_registry)

    report = []
    for token in source.list_tokens(set_id) if set_id else all_tokens:
        if _registry.is_composite(token.type) and not is_alias(token.value):
            values = [sv.value for sv in editor.sub_values(token)]
        else:
            values = [token.value]
        broken = [name for v in values for name in resolver.broken_references(v)]
        if broken:
            report.append({"id": token.id, "name": token.name, "broken_references": broken})
    return report


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Token Codec MCP Server")
    parser.add_argument("--catalog", help="Catalog JSON file with token sets")

    args = parser.parse_args()

    global _source
    if args.catalog:
        import os
        path = os.path.abspath(args.catalog)
        if not os.path.isfile(path):
            print(f"Error: {path} is not a file", file=sys.stderr)
            sys.exit(1)
        _source = LocalTokenSource(path)

    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
