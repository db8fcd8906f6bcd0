"""Word, line and byte counter reading from stdin.

-b only takes effect together with -l; on its own the tool still counts
words. Scripts already depend on that, so it stays.

Words are runs of anything but Unicode white space (the Latin-1 spaces,
NEL, NBSP and the Zs/line/paragraph separators). The ASCII information
separators \\x1c-\\x1f are not spaces here even though str.split() treats
them as such. Undecodable bytes count as word characters.
"""
import re
import sys
from typing import BinaryIO
import click

CHUNK_SIZE = 64 * 1024

# Unicode white space, minus the \x1c-\x1f separators.
_SPACES = '\t\n\v\f\r \x85\xa0' + ''.join(
    chr(code) for code in (0x1680, *range(0x2000, 0x200b), 0x2028, 0x2029, 0x202f, 0x205f, 0x3000)
)
_WORD_RE = re.compile('[^' + re.escape(_SPACES) + ']+')


def _words(line: bytes) -> int:
    return len(_WORD_RE.findall(line.decode('utf-8', errors='surrogateescape')))


def count(stream: BinaryIO, count_lines: bool = False, count_bytes: bool = False) -> int:
    """Count words (default), lines (-l) or bytes (-l -b) in a binary stream."""
    if not count_lines:
        return sum(_words(line) for line in stream)
    if count_bytes:
        total = 0
        for chunk in iter(lambda: stream.read(CHUNK_SIZE), b''):
            total += len(chunk)
        return total
    return sum(1 for _ in stream)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('-l', 'lines', is_flag=True, help='Count lines')
@click.option('-b', 'bytes_', is_flag=True, help='Count bytes (with -l)')
def wc(lines: bool, bytes_: bool) -> None:
    """Count words, lines or bytes read from standard input."""
    try:
        total = count(sys.stdin.buffer, lines, bytes_)
    except OSError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(total)


def main() -> None:
    wc(prog_name='wcount')


if __name__ == '__main__':  # pragma: no cover
    main()
