"""Size statistics for Huffman and LZW results, counted in bits."""

BITS_PER_SYMBOL = 8


class CompressionStats:
    def __init__(self, name, symbol_count, compressed_bits):
        self.name = name
        self.original_bits = symbol_count * BITS_PER_SYMBOL
        self.compressed_bits = compressed_bits
        self.saved_bits = self.original_bits - compressed_bits

        self.ratio = (
            self.original_bits / compressed_bits
            if compressed_bits > 0 else 0.0
        )
        self.percent_saved = (
            self.saved_bits / self.original_bits * 100
            if self.original_bits > 0 else 0.0
        )

    def __repr__(self):
        return (f'CompressionStats({self.name!r}, original_bits={self.original_bits}, '
                f'compressed_bits={self.compressed_bits})')

    def print_stats(self):
        print(f'{self.name} Compression Statistics:')
        print(f'  Original size:       {self.original_bits} bits')
        print(f'  Compressed size:     {self.compressed_bits} bits')
        print(f'  Space saved:         {self.saved_bits} bits ({self.percent_saved:.1f}%)')
        print(f'  Compression ratio:   {self.ratio:.2f}')


def huffman_stats(text, encoded):
    return CompressionStats('Huffman', len(text), len(encoded))


def lzw_stats(text, emitted):
    return CompressionStats('LZW', len(text), sum(e.bits for e in emitted))
