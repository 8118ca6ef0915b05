"""Simple Flask web interface for the token codec."""

import json
import logging
import os

from flask import Flask, request, jsonify

from token_codec.codec_registry import CodecRegistry
from token_codec.domain.constants import TOKEN_TYPES
from token_codec.domain.models import SerializedToken
from token_codec.exceptions import NotCompositeError, SetNotFoundError, TokenNotFoundError, UnknownFieldError
from token_codec.host.bridge import HostBridge
from token_codec.host.serialization import serialize_token
from token_codec.resolution.alias_parser import classify_value, parse_mixed
from token_codec.resolution.alias_resolver import AliasResolver
from token_codec.sub_value_editor import SubValueEditor
from token_codec.ui.editor_session import EditorController

logger = logging.getLogger(__name__)

app = Flask(__name__)
registry = CodecRegistry()

# Configuration
app.config.setdefault('CATALOG_PATH', os.environ.get('TOKEN_CODEC_CATALOG'))


def get_bridge() -> HostBridge:
    """The app's host bridge, loaded from CATALOG_PATH on first use."""
    bridge = app.config.get('HOST_BRIDGE')
    if bridge is None:
        path = app.config.get('CATALOG_PATH')
        if path:
            with open(path) as f:
                bridge = HostBridge.from_catalog_dict(json.load(f))
            logger.info("Loaded token catalog from %s", path)
        else:
            bridge = HostBridge()
        app.config['HOST_BRIDGE'] = bridge
    return bridge


def get_editor() -> EditorController:
    """The app's alias editor; its host traffic goes through the bridge."""
    editor = app.config.get('EDITOR')
    if editor is None:
        editor = EditorController(_send_to_host, SubValueEditor(registry))
        app.config['EDITOR'] = editor
    return editor


def _send_to_host(message: dict) -> None:
    editor = get_editor()
    for reply in get_bridge().exchange(message):
        editor.receive(reply)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@app.route('/api/types')
def list_types():
    """List supported token types."""
    return jsonify([
        {
            'type': t,
            'label': TOKEN_TYPES.get(t, (t, ''))[0],
            'composite': registry.is_composite(t),
            'fields': registry.get_codec(t).field_keys if registry.is_composite(t) else [],
        }
        for t in registry.get_supported_types()
    ])


@app.route('/api/normalize', methods=['POST'])
def normalize():
    """Normalize a wire value to its canonical form."""
    data = _json_body()
    if not data.get('type'):
        return jsonify({'error': 'No token type provided'}), 400
    codec = registry.get_codec(data['type'])
    return jsonify({'type': data['type'], 'form': codec.normalize(data.get('value') or '')})


@app.route('/api/encode', methods=['POST'])
def encode():
    """Encode a canonical form into the host write shape."""
    data = _json_body()
    if not data.get('type'):
        return jsonify({'error': 'No token type provided'}), 400
    form = data.get('form')
    if not isinstance(form, dict):
        return jsonify({'error': 'Form must be a JSON object'}), 400
    codec = registry.get_codec(data['type'])
    return jsonify({'type': data['type'], 'value': codec.encode(form)})


@app.route('/api/parse-mixed', methods=['POST'])
def mixed():
    """Split a value into alias and text segments.

    With `known_names`, also returns how the value displays, with each
    reference flagged broken or not.
    """
    data = _json_body()
    value = data.get('value') or ''
    result = {
        'kind': classify_value(value).value,
        'segments': [s.to_dict() for s in parse_mixed(value)],
    }
    if isinstance(data.get('known_names'), list):
        result['display'] = AliasResolver(data['known_names']).describe(value).to_dict()
    return jsonify(result)


@app.route('/api/sub-value', methods=['POST'])
def sub_value():
    """Read one field of a composite value, or rewrite it when `new_value` is given."""
    data = _json_body()
    if not data.get('type') or not data.get('field'):
        return jsonify({'error': 'Token type and field are required'}), 400

    editor = SubValueEditor(registry)
    token = SerializedToken(id='', name='', type=data['type'], value=data.get('value') or '')
    try:
        if 'new_value' in data:
            value = editor.set_sub_value(token, data['field'], data.get('new_value') or '')
        else:
            value = editor.get_sub_value(token, data['field'])
    except (NotCompositeError, UnknownFieldError) as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'field': data['field'], 'value': value})


@app.route('/api/message', methods=['POST'])
def message():
    """Send one UI message to the host and return the messages it sends back."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Message must be a JSON object'}), 400
    return jsonify(get_bridge().exchange(data))


# ── Alias Editor ─────────────────────────────────────────────────────────


def _editor_state(editor: EditorController) -> dict:
    session = editor.session
    if session is None:
        return {'open': False}
    return {
        'open': True,
        'tokenId': session.token.id,
        'field': session.field_key,
        'mode': session.mode.value,
        'input': session.input_value,
        'search': session.search_value,
        'pickerType': session.picker_type,
        'pickerSets': [s.to_dict() for s in editor.visible_picker_sets()],
    }


@app.route('/api/editor')
def editor_state():
    """Current state of the alias editor."""
    return jsonify(_editor_state(get_editor()))


@app.route('/api/editor/<action>', methods=['POST'])
def editor_action(action):
    """Apply one user action to the alias editor and return its new state."""
    editor = get_editor()
    data = _json_body()
    actions = {
        'close': editor.close,
        'list': editor.show_list,
        'edit': editor.show_edit,
        'input': lambda: editor.set_input(data.get('value') or ''),
        'search': lambda: editor.set_search(data.get('value') or ''),
        'toggle-group': lambda: editor.toggle_group(data.get('setId') or ''),
        'pick': lambda: editor.pick(data.get('name') or ''),
    }

    if action == 'open':
        try:
            token = get_bridge().catalog.require_token(data.get('setId'), data.get('tokenId'))
            editor.open(serialize_token(token), data.get('field'))
        except (SetNotFoundError, TokenNotFoundError) as e:
            return jsonify({'error': str(e)}), 404
        except (NotCompositeError, UnknownFieldError) as e:
            return jsonify({'error': str(e)}), 400
    elif action == 'save':
        if not data.get('setId'):
            return jsonify({'error': 'No set id provided'}), 400
        sent = editor.save(data['setId'])
        return jsonify({'sent': sent, 'state': _editor_state(editor)})
    elif action in actions:
        actions[action]()
    else:
        return jsonify({'error': f'Unknown editor action: {action}'}), 404
    return jsonify(_editor_state(editor))


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=5002)
