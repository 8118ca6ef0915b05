"""CLI for token-codec."""

import argparse
import json
import logging
import sys

from token_codec.codec_registry import CodecOptions, CodecRegistry
from token_codec.domain.constants import TOKEN_TYPES
from token_codec.domain.models import SerializedToken
from token_codec.exceptions import TokenCodecError
from token_codec.resolution.alias_parser import classify_value, parse_mixed
from token_codec.sub_value_editor import SubValueEditor

logger = logging.getLogger(__name__)


def normalize_value(token_type: str, value: str, options: CodecOptions) -> dict:
    """Canonical form of a wire value."""
    codec = CodecRegistry(options.max_harvest_depth).get_codec(token_type)
    return codec.normalize(value)


def encode_form(token_type: str, form: dict, options: CodecOptions) -> str:
    """Wire value for a canonical form."""
    codec = CodecRegistry(options.max_harvest_depth).get_codec(token_type)
    return codec.encode(form)


def describe_mixed(value: str) -> dict:
    return {
        'kind': classify_value(value).value,
        'segments': [s.to_dict() for s in parse_mixed(value)],
    }


def edit_sub_value(token_type: str, value: str, field_key: str, new_value: str | None,
                   options: CodecOptions) -> dict:
    """Read one field of a composite value, or rewrite it when `new_value` is given."""
    editor = SubValueEditor(CodecRegistry(options.max_harvest_depth))
    token = SerializedToken(id='', name='', type=token_type, value=value)
    if new_value is None:
        return {'field': field_key, 'value': editor.get_sub_value(token, field_key)}
    return {'field': field_key, 'value': editor.set_sub_value(token, field_key, new_value)}


def _emit(result, options: CodecOptions) -> None:
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=2 if options.pretty else None))


def main(argv=None):
    parser = argparse.ArgumentParser(prog='token-codec', description='Design token value codec')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--pretty', action='store_true', help='Pretty-print JSON output')
    parser.add_argument('--max-depth', type=int, default=CodecOptions.max_harvest_depth,
                        help='Maximum nesting depth searched for font names (default: 8)')
    subparsers = parser.add_subparsers(dest='command')

    # normalize command
    normalize_parser = subparsers.add_parser('normalize', help='Normalize a wire value to canonical form')
    normalize_parser.add_argument('type', help='Token type, e.g. typography')
    normalize_parser.add_argument('value', help='Wire value string')

    # encode command
    encode_parser = subparsers.add_parser('encode', help='Encode a canonical form for the host write API')
    encode_parser.add_argument('type', help='Token type, e.g. shadow')
    encode_parser.add_argument('form', help='Canonical form as a JSON object')

    # parse-mixed command
    mixed_parser = subparsers.add_parser('parse-mixed', help='Split a value into alias and text segments')
    mixed_parser.add_argument('value', help='Value string')

    # sub-value command
    sub_parser = subparsers.add_parser('sub-value', help='Read or rewrite one field of a composite value')
    sub_parser.add_argument('type', help='Composite token type (typography or shadow)')
    sub_parser.add_argument('value', help='Wire value string')
    sub_parser.add_argument('field', help='Canonical field key, e.g. color')
    sub_parser.add_argument('new', nargs='?', help='New field value; blank removes the field')

    # types command
    subparsers.add_parser('types', help='List supported token types')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    options = CodecOptions(max_harvest_depth=args.max_depth, pretty=args.pretty)

    try:
        if args.command == 'normalize':
            _emit(normalize_value(args.type, args.value, options), options)

        elif args.command == 'encode':
            try:
                form = json.loads(args.form)
            except ValueError as e:
                print(f"Error: form is not valid JSON: {e}", file=sys.stderr)
                sys.exit(1)
            if not isinstance(form, dict):
                print("Error: form must be a JSON object", file=sys.stderr)
                sys.exit(1)
            _emit(encode_form(args.type, form, options), options)

        elif args.command == 'parse-mixed':
            _emit(describe_mixed(args.value), options)

        elif args.command == 'sub-value':
            _emit(edit_sub_value(args.type, args.value, args.field, args.new, options), options)

        elif args.command == 'types':
            registry = CodecRegistry()
            for t in registry.get_supported_types():
                label = TOKEN_TYPES.get(t, (t, ''))[0]
                print(f"  {t:<16} {label}")

        else:
            parser.print_help()

    except TokenCodecError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
