import random

import pytest

from coding_errors import EncoderFinishedError, LZWDecodeError, UnknownSymbolError
from lzw import (EMIT, EXTEND, FLUSH, INITIAL_DICT_SIZE, LZWEncoder, bits_for, format_code,
                 lzw_decode, lzw_encode, parse_codes)
from samples import SAMPLE_INPUTS


def test_known_vector():
    encoder = LZWEncoder('abababab')
    encoder.finish()
    assert encoder.output == [97, 98, 256, 258, 98]
    assert encoder.dictionary['ab'] == 256
    assert encoder.dictionary['ba'] == 257
    assert encoder.dictionary['aba'] == 258
    assert encoder.dictionary['abab'] == 259
    assert lzw_decode(encoder.output) == 'abababab'


def test_known_vector_step_kinds():
    encoder = LZWEncoder('abababab')
    steps = encoder.finish()
    assert [s.kind for s in steps] == [EXTEND, EMIT, EMIT, EXTEND, EMIT, EXTEND, EXTEND, EMIT, FLUSH]

    second = steps[1]
    assert second.position == 1
    assert second.char == 'b'
    assert second.candidate == 'ab'
    assert second.code == 97
    assert (second.new_entry, second.new_code) == ('ab', 256)
    assert second.description == 'Adding "ab" to dictionary with code 256, outputting code for "a"'

    assert steps[3].description == '"ab" is already in the dictionary, continuing to the next character'
    assert steps[-1].char is None
    assert steps[-1].position == 8
    assert steps[-1].code == 98


def test_initial_state():
    encoder = LZWEncoder('hello')
    assert encoder.position == 0
    assert encoder.current == ''
    assert encoder.next_char == 'h'
    assert encoder.output == []
    assert encoder.dictionary_size == INITIAL_DICT_SIZE
    assert encoder.dictionary['A'] == 65
    assert encoder.bits_per_code == 8
    assert not encoder.done


def test_cursor_advances_one_character_per_step():
    encoder = LZWEncoder('abc')
    encoder.step()
    assert (encoder.position, encoder.current, encoder.next_char) == (1, 'a', 'b')
    encoder.step()
    assert (encoder.position, encoder.current, encoder.next_char) == (2, 'b', 'c')
    assert encoder.output == [97]


@pytest.mark.parametrize('name', sorted(SAMPLE_INPUTS))
def test_stepping_matches_finish(name):
    text = SAMPLE_INPUTS[name]
    stepped = LZWEncoder(text)
    while not stepped.done:
        stepped.step()
    finished = LZWEncoder(text)
    finished.finish()
    assert stepped.output == finished.output
    assert stepped.emitted == finished.emitted
    assert stepped.dictionary == finished.dictionary


def test_finish_after_some_steps():
    text = SAMPLE_INPUTS['repeatingPatterns']
    encoder = LZWEncoder(text)
    for _ in range(7):
        encoder.step()
    encoder.finish()
    assert encoder.output == lzw_encode(text)


def test_step_after_done():
    encoder = LZWEncoder('ab')
    encoder.finish()
    assert encoder.done
    with pytest.raises(EncoderFinishedError):
        encoder.step()
    assert encoder.finish() == []


def test_reset_restores_initial_state():
    text = SAMPLE_INPUTS['englishText']
    encoder = LZWEncoder(text)
    encoder.finish()
    first = encoder.output

    encoder.reset()
    assert encoder.position == 0
    assert encoder.current == ''
    assert encoder.output == []
    assert encoder.dictionary == LZWEncoder(text).dictionary
    assert not encoder.done

    encoder.finish()
    assert encoder.output == first


def test_snapshots_do_not_leak_state():
    encoder = LZWEncoder('abab')
    snapshot = encoder.dictionary
    snapshot['zz'] = 999
    out = encoder.output
    out.append(1)
    assert 'zz' not in encoder.dictionary
    assert encoder.output == []


def test_dictionary_grows_once_per_emit():
    encoder = LZWEncoder(SAMPLE_INPUTS['htmlMarkup'])
    size = encoder.dictionary_size
    while not encoder.done:
        step = encoder.step()
        if step.kind == EMIT:
            assert encoder.dictionary_size == size + 1
            assert step.new_code == size
        else:
            assert encoder.dictionary_size == size
        size = encoder.dictionary_size


def test_multi_character_entries_extend_existing_ones():
    encoder = LZWEncoder(SAMPLE_INPUTS['asciiArt'])
    encoder.finish()
    d = encoder.dictionary
    for pattern, code in d.items():
        if len(pattern) > 1:
            assert d[pattern[:-1]] < code


def test_bits_per_emitted_code():
    encoder = LZWEncoder('abababab')
    encoder.finish()
    # The first code is written while the dictionary still holds 256 entries
    assert [e.bits for e in encoder.emitted] == [8, 9, 9, 9, 9]


def test_bits_for():
    assert bits_for(1) == 0
    assert bits_for(2) == 1
    assert bits_for(256) == 8
    assert bits_for(257) == 9
    assert bits_for(512) == 9
    assert bits_for(513) == 10


def test_format_code():
    assert format_code(97, 8) == '01100001'
    assert format_code(256, 9) == '100000000'


def test_empty_input():
    encoder = LZWEncoder('')
    assert encoder.done
    assert lzw_encode('') == []


def test_single_character():
    assert lzw_encode('a') == [97]
    assert lzw_decode([97]) == 'a'


def test_character_outside_dictionary():
    encoder = LZWEncoder('ab中')
    with pytest.raises(UnknownSymbolError) as exc:
        encoder.finish()
    assert exc.value.position == 2


@pytest.mark.parametrize('name', sorted(SAMPLE_INPUTS))
def test_roundtrip_samples(name):
    text = SAMPLE_INPUTS[name]
    assert lzw_decode(lzw_encode(text)) == text


def test_roundtrip_random_text():
    rng = random.Random(99)
    for n in (1, 2, 5, 100, 1000):
        text = ''.join(rng.choice('ab cÿ') for _ in range(n))
        assert lzw_decode(lzw_encode(text)) == text


def test_decode_self_reference():
    assert lzw_decode([97, 256]) == 'aaa'


def test_decode_empty():
    with pytest.raises(LZWDecodeError):
        lzw_decode([])


def test_decode_bad_first_code():
    with pytest.raises(LZWDecodeError):
        lzw_decode([256, 97])


def test_decode_code_beyond_dictionary():
    with pytest.raises(LZWDecodeError):
        lzw_decode([97, 98, 300])


def test_decode_negative_code():
    with pytest.raises(LZWDecodeError):
        lzw_decode([97, -1])


def test_decode_non_integer():
    with pytest.raises(LZWDecodeError):
        lzw_decode([97, '98'])


def test_parse_codes():
    assert parse_codes('97, 98, 256,258 ,98') == [97, 98, 256, 258, 98]
    assert parse_codes('') == []


def test_parse_codes_invalid():
    with pytest.raises(LZWDecodeError):
        parse_codes('97, x')
