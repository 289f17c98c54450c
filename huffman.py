"""Huffman coding over text, with a replayable trace of the tree build."""

import logging
from dataclasses import dataclass
from functools import total_ordering
from heapq import heapify, heappop, heappush

from bitstring import ConstBitStream

from coding_errors import HuffmanDecodeError, UnknownSymbolError


logger = logging.getLogger(__name__)

SINGLE_SYMBOL_CODE = '0'


@total_ordering
@dataclass(frozen=True, eq=False)
class HuffmanNode:
    # serial is the creation order; earlier nodes win frequency ties
    frequency: int
    symbol: str = None
    left: 'HuffmanNode' = None
    right: 'HuffmanNode' = None
    node_id: str = ''
    serial: int = 0

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __lt__(self, other):
        return (self.frequency, self.serial) < (other.frequency, other.serial)

    def __repr__(self):
        if self.is_leaf:
            return f'HuffmanNode({self.symbol!r}, {self.frequency})'
        return f'HuffmanNode({self.node_id}, {self.frequency})'


@dataclass(frozen=True)
class BuildStep:
    queue: tuple
    combined: HuffmanNode
    iteration: int


def count_symbols(text):
    freqs = {}
    for s in text:
        freqs[s] = freqs.get(s, 0) + 1
    return freqs


def make_huffman_tree_with_steps(freqs):
    # steps[0] is the initial queue, each later step the queue right after a merge
    if not freqs:
        return None, []

    pq = [HuffmanNode(f, symbol=s, node_id=f'leaf-{i}-{s}', serial=i)
          for i, (s, f) in enumerate(freqs.items())]
    steps = [BuildStep(tuple(sorted(pq)), None, 0)]
    if len(pq) == 1:
        return pq[0], steps

    heapify(pq)
    serial = len(pq)
    iteration = 1
    while len(pq) > 1:
        left = heappop(pq)
        right = heappop(pq)
        parent = HuffmanNode(left.frequency + right.frequency, left=left, right=right,
                             node_id=f'internal-{iteration}', serial=serial)
        heappush(pq, parent)
        logger.debug('Merge %d: %r + %r -> %d', iteration, left, right, parent.frequency)
        steps.append(BuildStep(tuple(sorted(pq)), parent, iteration))
        serial += 1
        iteration += 1
    return pq[0], steps


def make_huffman_tree(freqs):
    tree, _ = make_huffman_tree_with_steps(freqs)
    return tree


def make_encoding_dictionary(tree):
    if tree is None:
        return {}
    if tree.is_leaf:
        # An empty code could not be told apart from no symbol at all
        return {tree.symbol: SINGLE_SYMBOL_CODE}

    def encode_node(node, code):
        if node.is_leaf:
            return {node.symbol: code}
        merged = {}
        merged.update(encode_node(node.left, code + '0'))
        merged.update(encode_node(node.right, code + '1'))
        return merged
    return encode_node(tree, '')


def make_decoding_dictionary(tree):
    return {v: k for k, v in make_encoding_dictionary(tree).items()}


def huffman_encode(text, codes, skip_unknown=False):
    out = []
    skipped = 0
    for i, s in enumerate(text):
        code = codes.get(s)
        if code is None:
            if not skip_unknown:
                raise UnknownSymbolError(s, i)
            skipped += 1
            continue
        out.append(code)
    if skipped:
        logger.warning('Skipped %d symbol(s) with no Huffman code', skipped)
    return ''.join(out)


def huffman_decode(encoded, tree):
    if not encoded:
        return ''
    if tree is None:
        raise HuffmanDecodeError('Cannot decode without a Huffman tree')
    invalid = set(encoded) - {'0', '1'}
    if invalid:
        raise HuffmanDecodeError(f'Encoded data contains non-binary characters: {sorted(invalid)}')

    if tree.is_leaf:
        if '1' in encoded:
            raise HuffmanDecodeError(f'Bit 1 at position {encoded.index("1")} has no branch to follow')
        return tree.symbol * len(encoded)

    bits = ConstBitStream(bin=encoded)
    out = []
    node = tree
    while bits.pos < bits.len:
        node = node.right if bits.read('bool') else node.left
        if node.is_leaf:
            out.append(node.symbol)
            node = tree

    if node is not tree:
        raise HuffmanDecodeError('Encoded data ends in the middle of a code')
    return ''.join(out)


if __name__ == '__main__':
    from samples import get_sample

    input_data = get_sample('simple')

    print('Counting...')
    freqs = count_symbols(input_data)
    tree, steps = make_huffman_tree_with_steps(freqs)
    codes = make_encoding_dictionary(tree)

    print('Encoding...')
    enc = huffman_encode(input_data, codes)

    print('Decoding...')
    dec = huffman_decode(enc, tree)

    assert input_data == dec
    print(f'Frequencies: {freqs}')
    print(f'Codes: {codes}')
    print(f'Merge steps: {len(steps) - 1}')
    print(f'Original size: {len(input_data) * 8} bits')
    print(f'Compressed size: {len(enc)} bits')
