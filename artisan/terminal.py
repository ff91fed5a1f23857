"""
Terminal capabilities used by commands: styled output, prompts, tables, progress.

Every helper takes an optional rich Console so callers (and tests) can route
output elsewhere; by default standard output is used and errors go to stderr.
"""
import asyncio
import concurrent.futures
import inspect
from collections import defaultdict

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

console = Console()
errors = Console(stderr=True)


def styles():
    """
    Return the output palette, merged with any __styles__ mapping in __main__.
    """
    return defaultdict(str, {
        "info": "green",
        "comment": "dim",
        "error": "red",
        "warning-badge": "black on yellow",
        "alert-badge": "white on red",
        "table-header": "bold #00E6FF",
        "choice-index": "bold #FFD600",
    } | getattr(__import__("__main__"), "__styles__", {}))


def write(message, style="", /, *, target=None):
    (target or console).print(Text(str(message), style))


def badge(label, message, style, /, *, target=None):
    (target or console).print(Text.assemble((f" {label} ", style), " ", str(message)))


def ask(question, /, *, password=False, target=None):
    return Prompt.ask(question, password=password, console=target or console)


def confirm(question, initial=False, /, *, target=None):
    return Confirm.ask(question, default=initial, console=target or console)


def choose(question, options, /, initial=None, *, multiple=False, target=None):
    """
    Present a numbered menu and return the selected option(s).

    - single selection returns one option; the initial index is the default answer.
    - multiple selection accepts comma-separated indexes and returns a list.
    - an empty answer with no initial index returns None (or [] when multiple).
    """
    target = target or console
    palette = styles()
    options = list(options)
    if not options:
        raise ValueError("choose() options cannot be empty")
    if initial is not None and not 0 <= initial < len(options):
        raise ValueError("invalid initial option index")

    target.print(Text(question))
    for index, option in enumerate(options, 1):
        target.print(Text.assemble("  ", (f"[{index}]", palette["choice-index"]), " ", str(option)))

    default = str(initial + 1) if initial is not None else ""
    while True:
        answer = Prompt.ask("choose", default=default, show_default=bool(default), console=target).strip()
        if not answer:
            return [] if multiple else None
        try:
            indexes = [int(part) - 1 for part in answer.split(",") if part.strip()]
        except ValueError:
            target.print(Text("please enter option numbers", palette["error"]))
            continue
        if not indexes or not all(0 <= index < len(options) for index in indexes):
            target.print(Text("please enter numbers between 1 and %d" % len(options), palette["error"]))
            continue
        if multiple:
            return [options[index] for index in indexes]
        return options[indexes[0]]


def anticipate(question, options, /, fallback=None, *, target=None):
    """
    Ask a free-text question with suggested answers shown as hints.

    - an answer that is the prefix of exactly one suggestion (case-insensitive)
      completes to that suggestion;
    - any other answer is returned as typed;
    - an empty answer returns fallback.
    """
    options = [str(option) for option in options]
    prompt = Text(question)
    if options:
        prompt.append(" (%s)" % ", ".join(options), styles()["comment"])
    answer = Prompt.ask(prompt, console=target or console).strip()
    if not answer:
        return fallback
    matches = [option for option in options if option.lower().startswith(answer.lower())]
    return matches[0] if len(matches) == 1 else answer


def table(head, rows, /, *, target=None):
    palette = styles()
    grid = Table(*map(str, head), header_style=palette["table-header"])
    for row in rows:
        grid.add_row(*map(str, row))
    (target or console).print(grid)


def _complete(processor, item, /):
    # each worker thread owns its own event loop for coroutine processors
    result = processor(item)
    if inspect.iscoroutine(result):
        result = asyncio.run(result)
    return result


def progress(items, processor, /, *, workers=4, target=None):
    """
    Run processor over items with at most `workers` in flight, advancing a
    progress bar as each item completes. Results keep the input order; the
    first failure is re-raised after the bar is closed. A coroutine function
    processor is run to completion inside its worker.
    """
    if workers < 1:
        raise ValueError("progress() workers must be a positive integer")
    items = list(items)
    bar = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(bar_width=None),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=target or console,
        transient=True,
    )
    results = [None] * len(items)
    with bar, concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        task = bar.add_task("processing", total=len(items))
        futures = {executor.submit(_complete, processor, item): index for index, item in enumerate(items)}
        for future in concurrent.futures.as_completed(futures):
            results[futures[future]] = future.result()
            bar.advance(task)
    return results


__all__ = (
    "console",
    "errors",
    "styles",
    "write",
    "badge",
    "ask",
    "confirm",
    "choose",
    "anticipate",
    "table",
    "progress",
)
