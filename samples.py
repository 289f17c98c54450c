"""Preset inputs for trying out the coders."""

SAMPLE_INPUTS = {
    'simple': 'AABCABAACAABCABCABAAACAABBCA',
    'repeatingPatterns': 'abc' * 20,
    'englishText': 'The quick brown fox jumps over the lazy dog. ' * 2
                   + 'The quick brown fox jumps over the lazy dog.',
    'htmlMarkup': (
        '<div class="container"><div class="header"><h1>Hello World</h1></div>'
        '<div class="content"><p>This is a paragraph.</p><p>This is another paragraph.</p></div>'
        '<div class="footer"><p>Copyright 2023</p></div></div>'
    ),
    'asciiArt': r"""
    /\_/\
   ( o.o )
    > ^ <
   /     \
  /       \
 /         \
/           \
/\_/\       /\_/\
( o.o )     ( o.o )
 > ^ <       > ^ <
  """,
}


def get_sample(name):
    try:
        return SAMPLE_INPUTS[name]
    except KeyError:
        raise KeyError(f'Unknown sample {name!r}, choose from: {", ".join(SAMPLE_INPUTS)}') from None
