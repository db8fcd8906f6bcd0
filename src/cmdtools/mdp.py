"""Markdown preview: markdown -> sanitized HTML -> temp file -> browser.

The body is produced by Python-Markdown and cleaned by nh3, whose default
rules are meant for user-generated content: script and style elements are
dropped with their content, event handler attributes are stripped and
links are marked rel="noopener noreferrer".

Templates are string.Template documents with $title, $body and $footer.
Title and footer are escaped; the body is already sanitized HTML.
"""
import contextlib
import html
import logging
import os
import shutil
import subprocess
import sys
import tempfile
import time
from pathlib import Path
from string import Template
from typing import Iterator, Optional, TextIO, Union
import click
import markdown
import nh3
from cmdtools.config import DEFAULT_BROWSER, PREVIEW_GRACE_SECONDS, configure_logging
from cmdtools.errors import PreviewError

logger = logging.getLogger(__name__)

TITLE = 'Markdown Preview Tool'

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <title>$title</title>
  </head>
  <body>
$body
    <footer>
$footer
    </footer>
  </body>
</html>
"""

PathLike = Union[str, Path]


def load_template(template_path: Optional[PathLike] = None) -> Template:
    if not template_path:
        return Template(DEFAULT_TEMPLATE)
    try:
        return Template(Path(template_path).read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as exc:
        raise PreviewError(f"cannot read template {template_path}: {exc}") from exc


def render_body(source: str) -> str:
    """Convert markdown to HTML and sanitize the result."""
    return nh3.clean(markdown.markdown(source))


def parse_content(source: str, template_path: Optional[PathLike] = None, out_name: str = '') -> str:
    """Build the full HTML document for a markdown source text."""
    template = load_template(template_path)
    try:
        return template.substitute(
            title=html.escape(TITLE),
            body=render_body(source),
            footer=html.escape(out_name),
        )
    except (KeyError, ValueError) as exc:
        raise PreviewError(f"invalid template {template_path or '<default>'}: {exc}") from exc


def save_html(out_name: PathLike, data: str) -> None:
    try:
        Path(out_name).write_text(data, encoding='utf-8')
    except OSError as exc:
        raise PreviewError(f"cannot write {out_name}: {exc}") from exc


@contextlib.contextmanager
def removing(path: PathLike) -> Iterator[Path]:
    """Yield path and delete the file on every way out."""
    try:
        yield Path(path)
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.remove(path)
            logger.debug("removed %s", path)


def preview(fname: PathLike, browser: Optional[str] = None) -> None:
    """Open fname in a browser and give it time to load the file."""
    name = browser or DEFAULT_BROWSER
    browser_path = shutil.which(name)
    if browser_path is None:
        raise PreviewError(f'exec: "{name}": executable file not found in $PATH')
    try:
        subprocess.Popen([browser_path, str(fname)], stdout=subprocess.DEVNULL,
                         stderr=subprocess.DEVNULL, start_new_session=True)
    except OSError as exc:
        raise PreviewError(f"cannot start {browser_path}: {exc}") from exc
    logger.debug("launched %s for %s", browser_path, fname)
    time.sleep(PREVIEW_GRACE_SECONDS)


def run(filename: PathLike, template_path: Optional[PathLike] = None, browser: Optional[str] = None,
        out: Optional[TextIO] = None, skip_preview: bool = False) -> str:
    """Generate the preview file, print its path and optionally open it.

    Returns the path of the generated file. When a preview is opened the
    file is gone by the time this returns.
    """
    out = out if out is not None else sys.stdout
    try:
        source = Path(filename).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise PreviewError(f"cannot read {filename}: {exc}") from exc

    try:
        fd, out_name = tempfile.mkstemp(prefix='mdp', suffix='.html')
        os.close(fd)
    except OSError as exc:
        raise PreviewError(f"cannot create temp file: {exc}") from exc
    logger.debug("writing preview to %s", out_name)

    try:
        save_html(out_name, parse_content(source, template_path, out_name))
    except PreviewError:
        os.remove(out_name)
        raise
    print(out_name, file=out)

    if skip_preview:
        return out_name
    with removing(out_name):
        preview(out_name, browser)
    return out_name


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('-file', 'filename', default=None, type=click.Path(dir_okay=False),
              help='Markdown file to preview')
@click.option('-s', 'skip_preview', is_flag=True, help='Skip auto-preview')
@click.option('-t', 'template_path', default=None, type=click.Path(dir_okay=False),
              help='Alternate template name')
@click.option('-b', 'browser', default=None, help='Preferred browser')
@click.pass_context
def mdp(ctx: click.Context, filename: Optional[str], skip_preview: bool,
        template_path: Optional[str], browser: Optional[str]) -> None:
    """Render a markdown file to HTML and open it in a browser."""
    if not filename:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(1)
    try:
        run(filename, template_path, browser, out=sys.stdout, skip_preview=skip_preview)
    except PreviewError as exc:
        raise click.ClickException(str(exc)) from exc


def main() -> None:
    configure_logging()
    mdp(prog_name='mdp')


if __name__ == '__main__':  # pragma: no cover
    main()
