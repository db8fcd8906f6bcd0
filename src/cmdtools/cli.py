"""Command-line interface for the todo manager.

Exactly one operation runs per invocation: -add, -list, -complete or
-del. The list is loaded before the operation and, for mutating
operations, saved back before the command returns.
"""
import sys
from typing import Iterable, List, Optional, Sequence, TextIO
import click
from cmdtools.config import configure_logging, todo_file_path
from cmdtools.errors import ItemNotFoundError, StorageError
from cmdtools.storage import Storage


def get_tasks(stream: TextIO, words: Sequence[str]) -> List[str]:
    """Decide where task descriptions come from.

    Words from the command line form a single task. Without words, each
    stdin line is a task, up to the first blank line or EOF.
    """
    if words:
        return [' '.join(words)]
    tasks: List[str] = []
    for line in stream:
        line = line.rstrip('\r\n')
        if not line:
            break
        tasks.append(line)
    return tasks


def _selected(flags: Iterable[bool]) -> int:
    return sum(1 for flag in flags if flag)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('-add', 'add', is_flag=True, help='Add task to the ToDo list')
@click.option('-list', 'list_', is_flag=True, help='List all tasks')
@click.option('-complete', 'complete', type=int, default=None, metavar='N', help='Item to be completed')
@click.option('-del', 'delete', type=int, default=None, metavar='N', help='Item to be deleted')
@click.option('-v', 'verbose', is_flag=True, help='Enable verbose output')
@click.option('-c', 'hide_completed', is_flag=True, help='Hide completed tasks from output')
@click.argument('words', nargs=-1)
def todo(add: bool, list_: bool, complete: Optional[int], delete: Optional[int],
         verbose: bool, hide_completed: bool, words: Sequence[str]) -> None:
    """todo tool. Manage a ToDo list stored as JSON.

    The list lives in .todo.json unless TODO_FILENAME names another file.
    """
    if _selected([add, list_, complete is not None, delete is not None]) != 1:
        raise click.ClickException('Invalid option')

    path = todo_file_path()
    try:
        task_list = Storage.load_tasks(path)
        if list_:
            click.echo(task_list.render(verbose=verbose, hide_completed=hide_completed), nl=False)
            return
        if add:
            for description in get_tasks(sys.stdin, words):
                task_list.add(description)
        elif complete is not None:
            task_list.complete(complete)
        else:
            task_list.delete(delete)
        Storage.save_tasks(task_list, path)
    except (ItemNotFoundError, StorageError, OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(str(exc)) from exc


def main() -> None:
    configure_logging()
    todo(prog_name='todo')


if __name__ == '__main__':  # pragma: no cover
    main()
