"""Steppable LZW encoding and decoding over text."""

import logging
from dataclasses import dataclass

from bitstring import Bits

from coding_errors import EncoderFinishedError, LZWDecodeError, UnknownSymbolError


logger = logging.getLogger(__name__)

INITIAL_DICT_SIZE = 256

EXTEND = 'extend'
EMIT = 'emit'
FLUSH = 'flush'


def initial_dictionary():
    return {chr(i): i for i in range(INITIAL_DICT_SIZE)}


def bits_for(size):
    return (size - 1).bit_length() if size > 1 else 0


def format_code(code, bits):
    return Bits(uint=code, length=bits).bin


@dataclass(frozen=True)
class EmittedCode:
    code: int
    bits: int


@dataclass(frozen=True)
class LZWStep:
    kind: str
    position: int
    char: str
    candidate: str
    code: int = None
    new_entry: str = None
    new_code: int = None
    description: str = ''


class LZWEncoder:
    # One session per text; step() makes one transition, finish() runs the rest

    def __init__(self, text):
        self._text = text
        self.reset()

    def reset(self):
        self._dictionary = initial_dictionary()
        self._position = 0
        self._current = ''
        self._emitted = []
        self._done = not self._text

    @property
    def text(self):
        return self._text

    @property
    def position(self):
        return self._position

    @property
    def current(self):
        return self._current

    @property
    def next_char(self):
        if self._position < len(self._text):
            return self._text[self._position]
        return ''

    @property
    def dictionary(self):
        return dict(self._dictionary)

    @property
    def dictionary_size(self):
        return len(self._dictionary)

    @property
    def output(self):
        return [e.code for e in self._emitted]

    @property
    def emitted(self):
        return list(self._emitted)

    @property
    def bits_per_code(self):
        return bits_for(len(self._dictionary))

    @property
    def done(self):
        return self._done

    def _emit(self, s):
        e = EmittedCode(self._dictionary[s], self.bits_per_code)
        self._emitted.append(e)
        return e.code

    def step(self):
        if self._done:
            raise EncoderFinishedError('LZW encoding is already complete')

        if self._position == len(self._text):
            code = self._emit(self._current)
            self._done = True
            result = LZWStep(FLUSH, self._position, None, self._current, code=code,
                             description=f'End of input, outputting code {code} for "{self._current}"')
            logger.debug(result.description)
            return result

        c = self._text[self._position]
        if c not in self._dictionary:
            raise UnknownSymbolError(c, self._position)

        candidate = self._current + c
        if candidate in self._dictionary:
            result = LZWStep(EXTEND, self._position, c, candidate,
                             description=f'"{candidate}" is already in the dictionary, '
                                         'continuing to the next character')
            self._current = candidate
        else:
            previous = self._current
            code = self._emit(previous)
            new_code = len(self._dictionary)
            self._dictionary[candidate] = new_code
            result = LZWStep(EMIT, self._position, c, candidate, code=code,
                             new_entry=candidate, new_code=new_code,
                             description=f'Adding "{candidate}" to dictionary with code {new_code}, '
                                         f'outputting code for "{previous}"')
            self._current = c
        self._position += 1
        logger.debug(result.description)
        return result

    def finish(self):
        steps = []
        while not self._done:
            steps.append(self.step())
        return steps


def lzw_encode(text):
    encoder = LZWEncoder(text)
    encoder.finish()
    return encoder.output


def lzw_decode(codes):
    codes = list(codes)
    if not codes:
        raise LZWDecodeError('No codes to decode')
    for k in codes:
        if isinstance(k, bool) or not isinstance(k, int):
            raise LZWDecodeError(f'Code {k!r} is not an integer')

    dictionary = [chr(i) for i in range(INITIAL_DICT_SIZE)]
    prev = codes[0]
    if not 0 <= prev < INITIAL_DICT_SIZE:
        raise LZWDecodeError(f'First code {prev} is outside the initial dictionary')
    out = [dictionary[prev]]

    for i, k in enumerate(codes[1:], start=1):
        c = len(dictionary)
        if 0 <= k < c:
            entry = dictionary[k]
        elif k == c:
            # Code not added yet: it can only be the previous entry plus its own first character
            entry = dictionary[prev] + dictionary[prev][0]
        else:
            raise LZWDecodeError(f'Code {k} at position {i} is outside the dictionary (size {c})')
        out.append(entry)
        dictionary.append(dictionary[prev] + entry[0])
        prev = k
    return ''.join(out)


def parse_codes(text):
    # "97, 98, 256" -> [97, 98, 256]
    codes = []
    for part in text.split(','):
        part = part.strip()
        if not part:
            continue
        try:
            codes.append(int(part))
        except ValueError:
            raise LZWDecodeError(f'Invalid code {part!r}') from None
    return codes


if __name__ == '__main__':
    from samples import get_sample

    orig = get_sample('repeatingPatterns')

    print('Encoding...')
    encoder = LZWEncoder(orig)
    encoder.finish()
    enc = encoder.output

    print('Decoding...')
    dec = lzw_decode(enc)

    print(f'Decoded data matches original: {orig == dec}')
    print(f'Codes: {enc}')
    print(f'Dictionary size: {encoder.dictionary_size}')
    print(f'Original size: {len(orig) * 8} bits')
    print(f'Compressed size: {sum(e.bits for e in encoder.emitted)} bits')
