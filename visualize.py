"""
Command line driver that prints Huffman and LZW traces step by step.
"""

import argparse
import logging
import sys

from coding_errors import CodingError
from huffman import (count_symbols, make_huffman_tree_with_steps, make_encoding_dictionary,
                     huffman_encode, huffman_decode)
from lzw import INITIAL_DICT_SIZE, LZWEncoder, lzw_decode, parse_codes, format_code
from metrics import huffman_stats, lzw_stats
from samples import SAMPLE_INPUTS, get_sample


def setup_logging(level=logging.INFO):
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            handlers=[logging.StreamHandler()],
        )
    return logging.getLogger('visualize')


def read_input(args):
    if args.sample:
        return get_sample(args.sample)
    if args.file:
        with open(args.file, encoding='utf-8') as f:
            return f.read()
    return args.text


def show_queue(queue):
    return ' '.join(f'{n.symbol if n.is_leaf else n.node_id}:{n.frequency}' for n in queue)


def run_huffman(text, show_steps):
    freqs = count_symbols(text)
    tree, steps = make_huffman_tree_with_steps(freqs)
    if tree is None:
        print('Nothing to encode')
        return

    print('Frequencies:')
    for s, f in freqs.items():
        print(f'  {s!r}: {f}')

    if show_steps:
        print('Tree building:')
        for step in steps:
            if step.combined is None:
                print(f'  [{step.iteration}] start    {show_queue(step.queue)}')
            else:
                c = step.combined
                print(f'  [{step.iteration}] merge {c.left.frequency}+{c.right.frequency}'
                      f'  {show_queue(step.queue)}')

    codes = make_encoding_dictionary(tree)
    print('Codes:')
    for s, code in sorted(codes.items(), key=lambda kv: (len(kv[1]), kv[1])):
        print(f'  {s!r}: {code}')

    encoded = huffman_encode(text, codes)
    print(f'Encoded: {encoded}')
    print(f'Round trip ok: {huffman_decode(encoded, tree) == text}')
    huffman_stats(text, encoded).print_stats()


def run_lzw(text, show_steps):
    encoder = LZWEncoder(text)
    if show_steps:
        print('Encoding:')
        while not encoder.done:
            step = encoder.step()
            print(f'  [{step.position}] {step.description}')
    else:
        encoder.finish()

    print(f'New dictionary entries: {encoder.dictionary_size - INITIAL_DICT_SIZE}')
    print('Codes:')
    for e in encoder.emitted:
        print(f'  {e.code:>6}  {format_code(e.code, e.bits)}')
    print(f'Encoded: {", ".join(str(c) for c in encoder.output)}')
    if encoder.output:
        print(f'Round trip ok: {lzw_decode(encoder.output) == text}')
    lzw_stats(text, encoder.emitted).print_stats()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Huffman and LZW step-by-step tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python visualize.py huffman --sample simple --steps
  python visualize.py lzw --text abababab --steps
  python visualize.py lzw-decode "97, 98, 256, 258, 98"
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every step')

    subparsers = parser.add_subparsers(dest='command', help='Command')

    for name in ('huffman', 'lzw'):
        sub = subparsers.add_parser(name, help=f'Encode with {name.upper()}')
        source = sub.add_mutually_exclusive_group(required=True)
        source.add_argument('--text', help='Text to encode')
        source.add_argument('--file', help='Text file to encode')
        source.add_argument('--sample', choices=sorted(SAMPLE_INPUTS), help='Preset sample input')
        sub.add_argument('--steps', action='store_true', help='Print every step')

    decode_parser = subparsers.add_parser('lzw-decode', help='Decode comma-separated LZW codes')
    decode_parser.add_argument('codes', help='Codes, e.g. "97, 98, 256"')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == 'huffman':
            run_huffman(read_input(args), args.steps)

        elif args.command == 'lzw':
            run_lzw(read_input(args), args.steps)

        elif args.command == 'lzw-decode':
            print(lzw_decode(parse_codes(args.codes)))

    except (CodingError, OSError, UnicodeDecodeError) as e:
        logger.debug('Command %s failed', args.command, exc_info=True)
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
