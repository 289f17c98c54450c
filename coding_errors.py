"""Errors raised by the Huffman and LZW coders."""


class CodingError(ValueError):
    pass


class UnknownSymbolError(CodingError):
    def __init__(self, symbol, position):
        super().__init__(f'No code for symbol {symbol!r} at position {position}')
        self.symbol = symbol
        self.position = position


class HuffmanDecodeError(CodingError):
    pass


class LZWDecodeError(CodingError):
    pass


class EncoderFinishedError(CodingError):
    pass
