#!/usr/bin/env python3
"""
cellanim command line tool

Converts BXCAD files (BCCAD/BRCAD) to editable JSON and back, and converts
between the two formats.

Usage:
    cellanim serialize agb_tap.bccad
    cellanim serialize cellanim.brcad --labels rcad_labels.h --indexize
    cellanim deserialize agb_tap.json agb_tap.bccad
    cellanim convert cellanim.brcad cellanim.bccad --rescale
    cellanim info agb_tap.bccad
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import ToolConfig, load_config
from .conversion import bccad_from_brcad, brcad_from_bccad
from .errors import CellAnimError, LabelsOnNonBRCADError
from .formats import BCCAD, BRCAD, BXCAD, BXCADType, codec_for, identify
from .serialization import Envelope, dumps, loads
from .utils import log, logError, init_logging, print_summary, get_counts


def _read_document(path: Path, labels: Optional[Path] = None) -> BXCAD:
    """Read a BXCAD file, optionally naming BRCAD animations from a labels file."""
    with open(path, 'rb') as f:
        document = codec_for(identify(f)).from_binary(f)

    if labels is not None:
        if not isinstance(document, BRCAD):
            raise LabelsOnNonBRCADError("--labels can only be used for BRCAD files")
        with open(labels, 'rb') as f:
            document.apply_labels(f)

    return document


def _write_document(document: BXCAD, path: Path):
    # Encode fully before touching an existing output file
    data = document.to_bytes()
    path.write_bytes(data)


def _suffix_for(bxcad_type: BXCADType) -> str:
    return "." + bxcad_type.value.lower()


def cmd_serialize(args: argparse.Namespace, config: ToolConfig):
    document = _read_document(args.input, args.labels)
    output = args.output or args.input.with_suffix(".json")
    indexize = args.indexize or config.indexize

    envelope = Envelope.wrap(document, tool_version=__version__, indexize=indexize)
    output.write_text(dumps(envelope, indent=config.indent) + "\n", encoding='utf-8')
    log(f"Serialized {args.input} to {output}")


def cmd_deserialize(args: argparse.Namespace, config: ToolConfig):
    envelope = loads(args.input.read_text(encoding='utf-8'))
    document = envelope.unwrap(tool_version=__version__)
    output = args.output or args.input.with_suffix(_suffix_for(envelope.bxcad_type))

    _write_document(document, output)
    log(f"Deserialized {args.input} to {output}")


def cmd_convert(args: argparse.Namespace, config: ToolConfig):
    document = _read_document(args.input, args.labels)
    rescale = config.rescale if args.rescale is None else args.rescale

    if isinstance(document, BRCAD):
        converted = bccad_from_brcad(document, rescale=rescale)
    else:
        converted = brcad_from_bccad(document, rescale=rescale)

    output = args.output or args.input.with_suffix(_suffix_for(converted.BXCAD_TYPE))
    _write_document(converted, output)
    log(f"Converted {args.input} ({document.BXCAD_TYPE.value}) to {output} "
        f"({converted.BXCAD_TYPE.value}){' with rescaling' if rescale else ''}")


def cmd_info(args: argparse.Namespace, config: ToolConfig):
    document = _read_document(args.input)
    part_count = sum(len(sprite.parts) for sprite in document.sprites)
    step_count = sum(len(animation.steps) for animation in document.animations)
    revision = "current" if document.timestamp is None else str(document.timestamp)

    log(f"{args.input}")
    log(f"  Format:      {document.BXCAD_TYPE.value} (revision {revision})")
    log(f"  Texture:     {document.texture_width}x{document.texture_height}")
    log(f"  Sprites:     {len(document.sprites)} ({part_count} parts)")
    log(f"  Animations:  {len(document.animations)} ({step_count} steps)")
    if isinstance(document, BRCAD):
        log(f"  Variations:  {'yes' if document.has_variations.enabled else 'no'}")
    if isinstance(document, BCCAD):
        for animation in document.animations:
            log(f"    {animation.name}: {len(animation.steps)} steps")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cellanim',
        description='Serialize, deserialize and convert BCCAD/BRCAD cell animation files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    cellanim serialize agb_tap.bccad
    cellanim deserialize agb_tap.json

    # Name BRCAD animations from the game's labels header:
    cellanim serialize cellanim.brcad --labels rcad_labels.h

Note: defaults for --indexize, --rescale and logging can be set in cellanim.ini:
    [output]
    indent = 2
    indexize = false

    [convert]
    rescale = true
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to configuration file (default: ./cellanim.ini if present)')
    parser.add_argument('--log-file', type=Path, default=None,
                        help='Also write output to this file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show debug messages')

    subparsers = parser.add_subparsers(dest='command', required=True)

    serialize = subparsers.add_parser('serialize', help='Convert a BXCAD file into editable JSON')
    serialize.add_argument('input', type=Path, help='The BXCAD file to convert')
    serialize.add_argument('output', type=Path, nargs='?', help='Location of the JSON file (optional)')
    serialize.add_argument('--labels', type=Path, help='BRCAD labels file (Shift-JIS #define header)')
    serialize.add_argument('--indexize', action='store_true',
                           help='Write sprites as an index -> sprite mapping')
    serialize.set_defaults(handler=cmd_serialize)

    deserialize = subparsers.add_parser('deserialize', help='Convert JSON written by cellanim back into a BXCAD')
    deserialize.add_argument('input', type=Path, help='The JSON file to convert')
    deserialize.add_argument('output', type=Path, nargs='?', help='Location of the BXCAD file (optional)')
    deserialize.set_defaults(handler=cmd_deserialize)

    convert = subparsers.add_parser('convert', help='Convert BRCAD to BCCAD or BCCAD to BRCAD')
    convert.add_argument('input', type=Path, help='The BXCAD file to convert')
    convert.add_argument('output', type=Path, nargs='?', help='Location of the converted file (optional)')
    convert.add_argument('--labels', type=Path, help='BRCAD labels file, used for BCCAD animation names')
    convert.add_argument('--rescale', action=argparse.BooleanOptionalAction, default=None,
                         help='Rescale texture geometry between resolutions')
    convert.set_defaults(handler=cmd_convert)

    info = subparsers.add_parser('info', help='Show a summary of a BXCAD file')
    info.add_argument('input', type=Path, help='The BXCAD file to inspect')
    info.set_defaults(handler=cmd_info)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        init_logging(args.log_file or config.log_file, verbose=args.verbose or config.verbose)
        args.handler(args, config)
    except (CellAnimError, OSError, ValueError) as e:
        logError(f"{e}")
        print_summary()
        return 1

    errors, warnings = get_counts()
    if warnings:
        print_summary()
    return 1 if errors else 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
