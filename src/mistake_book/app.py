"""Interactive CLI application."""
import logging
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt
from rich.table import Table

from mistake_book.clock import Clock, system_clock
from mistake_book.config import DEFAULT_DB_PATH, LOG_LEVEL
from mistake_book.dashboard import (
    get_review_stats, get_subject_stats, get_mastery_distribution, get_daily_review_counts,
)
from mistake_book.db import init_db
from mistake_book.errors import TutorError
from mistake_book.importer import import_file
from mistake_book.logs import list_review_logs, list_reflections, save_reflection
from mistake_book.models import QuestionKind, Rating, Subject, new_question
from mistake_book.pool import (
    select_due_pool, select_random_pool, due_session_label, random_session_label,
)
from mistake_book.review import commit_session, master_question
from mistake_book.session import SessionState, start_session
from mistake_book.settings import get_session_size, set_setting
from mistake_book.store import create_question, delete_question, get_question, list_questions

console = Console()

EXIT_WORDS = ("q", "menu")
RATING_CHOICES = {"1": 1, "3": 3, "5": 5, "m": Rating.FULLY_MASTERED}
KIND_CHOICES = {"example": QuestionKind.WORKED_EXAMPLE, "missed": QuestionKind.MISSED_PROBLEM}


class SessionExitRequested(Exception):
    """Raised when the user leaves a review session early."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def _format_ts(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def show_welcome():
    console.print(Panel(
        "[bold]Mistake Book[/bold]\n[dim]Spaced repetition for worked examples and missed problems[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("review", "Review due questions"),
        ("examples", "Practice worked examples"),
        ("random", "Random practice over all questions"),
        ("add", "Add a question"),
        ("bank", "List the question bank"),
        ("master", "Mark a question as mastered"),
        ("delete", "Delete a question"),
        ("import", "Import questions from a file"),
        ("dashboard", "Progress overview"),
        ("logs", "Recent review sessions"),
        ("reflect", "Write today's reflection"),
        ("settings", "Change session size"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def ask_subject(allow_all: bool = True) -> Subject | None:
    choices = [s.value for s in Subject] + (["all"] if allow_all else [])
    answer = Prompt.ask("Subject", choices=choices, default="all" if allow_all else Subject.MATH.value)
    return None if answer == "all" else Subject(answer)


def ask_kind(allow_all: bool = True) -> QuestionKind | None:
    choices = list(KIND_CHOICES) + (["all"] if allow_all else [])
    answer = Prompt.ask("Kind", choices=choices, default="all" if allow_all else "missed")
    return None if answer == "all" else KIND_CHOICES[answer]


def run_review_session(db_path: str, queue: list, label: str, clock: Clock = system_clock) -> dict | None:
    """Drive one session in the terminal and commit it when it finishes."""
    session = start_session(queue, label, clock=clock)
    if session.state is SessionState.EMPTY:
        console.print("[green]All done! Nothing to review here.[/green]")
        return None

    console.print(f"\n[bold]{label}[/bold] — {len(queue)} questions [dim](q to leave without saving)[/dim]\n")
    while not session.done:
        question = session.current
        position, total = session.progress
        badge = " [red](from example)[/red]" if question.transformed_from_example else ""
        tags = " ".join(f"#{t}" for t in question.tags)
        console.print(Panel(
            question.prompt + (f"\n\n[dim]{tags}[/dim]" if tags else ""),
            title=f"{position}/{total} · {question.subject.value} · {question.kind.label}{badge}",
            border_style="cyan",
        ))
        session_prompt("[dim]Press Enter to reveal the solution[/dim]", default="")
        session.reveal()
        console.print(Panel(question.solution or "[dim]No solution recorded[/dim]", border_style="green"))
        if question.analysis:
            console.print(f"[dim]{question.analysis}[/dim]")
        forgot = "not learned, make it a missed problem" if question.kind is QuestionKind.WORKED_EXAMPLE else "forgot"
        answer = session_prompt(
            f"Rate yourself (1={forgot}, 3=fuzzy, 5=easy, m=fully mastered)",
            choices=list(RATING_CHOICES) + list(EXIT_WORDS),
        )
        session.rate(RATING_CHOICES[answer])
        console.print()

    outcome = commit_session(db_path, queue, session.results, label, clock())
    if not outcome["saved"]:
        console.print("[red]Session could not be saved. The ratings from this session were not recorded.[/red]")
    elif not outcome["log_saved"]:
        console.print("[yellow]Schedule updated, but this session is missing from the review history.[/yellow]")
    else:
        console.print("[green]Session complete! Your review schedule has been updated.[/green]")
    return outcome


def _run_and_catch_exit(db_path: str, queue: list, label: str) -> None:
    try:
        run_review_session(db_path, queue, label)
    except SessionExitRequested:
        console.print("[dim]Session abandoned. Nothing was saved.[/dim]")


def cmd_review(db_path: str):
    console.print("\n[bold]Due Review[/bold]")
    subject = ask_subject()
    kind = ask_kind()
    queue = select_due_pool(list_questions(db_path), system_clock(), subject=subject, kind=kind)
    _run_and_catch_exit(db_path, queue, due_session_label(subject, kind))


def cmd_examples(db_path: str):
    console.print("\n[bold]Worked Example Practice[/bold]")
    subject = ask_subject()
    kind = QuestionKind.WORKED_EXAMPLE
    queue = select_due_pool(
        list_questions(db_path), system_clock(), subject=subject, kind=kind,
        limit=get_session_size(db_path),
    )
    _run_and_catch_exit(db_path, queue, due_session_label(subject, kind))


def cmd_random(db_path: str):
    console.print("\n[bold]Random Practice[/bold]")
    subject = ask_subject()
    kind = ask_kind()
    count = IntPrompt.ask("Number of questions", default=get_session_size(db_path))
    if count <= 0:
        console.print("[red]Number of questions must be positive.[/red]")
        return
    queue = select_random_pool(list_questions(db_path), count, subject=subject, kind=kind)
    _run_and_catch_exit(db_path, queue, random_session_label(subject, kind))


def cmd_add(db_path: str):
    console.print("\n[bold]New Question[/bold]")
    subject = ask_subject(allow_all=False)
    kind = ask_kind(allow_all=False)
    prompt = Prompt.ask("Question")
    solution = Prompt.ask("Solution")
    analysis = Prompt.ask("Analysis", default="")
    source = Prompt.ask("Source", default="")
    tags = [t.strip() for t in Prompt.ask("Tags (comma separated)", default="").split(",") if t.strip()]
    question = new_question(
        prompt, solution, kind, subject, system_clock(),
        analysis=analysis, source=source, tags=tags,
    )
    if create_question(db_path, question):
        console.print(f"[green]Saved question {question.id[:8]}.[/green]")
    else:
        console.print("[red]Saving the question failed, please try again.[/red]")


def cmd_bank(db_path: str):
    questions = list_questions(db_path)
    if not questions:
        console.print("[yellow]The question bank is empty. Use 'add' or 'import'.[/yellow]")
        return
    table = Table(title=f"Question Bank ({len(questions)})")
    table.add_column("ID", style="dim")
    table.add_column("Subject", style="cyan")
    table.add_column("Kind")
    table.add_column("Question")
    table.add_column("Reviews", justify="right")
    table.add_column("Next Review")
    table.add_column("Status")
    for q in questions:
        status = "[green]Mastered[/green]" if q.is_mastered else f"Level {q.mastery_level}"
        table.add_row(
            q.id[:8], q.subject.value, q.kind.label,
            q.prompt if len(q.prompt) <= 40 else q.prompt[:37] + "...",
            str(q.review_count), _format_ts(q.next_review), status,
        )
    console.print(table)


def _find_question(db_path: str):
    prefix = Prompt.ask("Question ID").strip()
    matches = [q for q in list_questions(db_path) if q.id.startswith(prefix)] if prefix else []
    if len(matches) != 1:
        console.print(f"[red]{'No' if not matches else 'Ambiguous'} question id: {prefix}[/red]")
        return None
    return get_question(db_path, matches[0].id)


def cmd_master(db_path: str):
    question = _find_question(db_path)
    if question is None:
        return
    if master_question(db_path, question):
        console.print("[green]Marked as mastered.[/green]")
    else:
        console.print("[red]Operation failed, please try again.[/red]")


def cmd_delete(db_path: str):
    question = _find_question(db_path)
    if question is None:
        return
    if Prompt.ask(f"Delete '{question.prompt[:40]}'?", choices=["y", "n"], default="n") != "y":
        return
    if delete_question(db_path, question.id):
        console.print("[green]Deleted.[/green]")
    else:
        console.print("[red]Delete failed, please try again.[/red]")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    kind = ask_kind(allow_all=False)
    result = import_file(db_path, file_path, kind=kind)
    msg = f"Imported {result['imported']} questions from {result['filename']}"
    if result["failed"]:
        msg += f" ([red]{result['failed']} failed[/red])"
    console.print(f"[green]{msg}[/green]")


def cmd_dashboard(db_path: str):
    now = system_clock()
    stats = get_review_stats(db_path, now)
    console.print(Panel(
        f"Questions: [bold]{stats['total_questions']}[/bold]  |  "
        f"Due now: [bold]{stats['due_count']}[/bold]  |  "
        f"Mastered: [bold]{stats['mastered_count']}[/bold]  |  "
        f"Streak: [bold]{stats['streak_days']}[/bold] days",
        title="Dashboard", border_style="blue",
    ))

    table = Table(title="Subjects")
    table.add_column("Subject", style="cyan")
    table.add_column("Due", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Avg Level", justify="right")
    for s in get_subject_stats(db_path, now):
        due = f"[dark_orange]{s['due']}[/dark_orange]" if s["due"] else "0"
        table.add_row(s["subject"].value, due, str(s["total"]), str(s["mastery_avg"]))
    console.print(table)

    dist = get_mastery_distribution(db_path)
    console.print(
        f"\n  New: {dist['new']}  |  Familiar: {dist['familiar']}  |  "
        f"Strong: {dist['strong']}  |  [green]Mastered: {dist['mastered']}[/green]"
    )
    console.print("\n[bold]Last 7 days:[/bold]")
    for day, count in get_daily_review_counts(db_path, now):
        console.print(f"  {day.isoformat()}  {'█' * min(count, 40)} {count}")


def cmd_logs(db_path: str):
    logs = list_review_logs(db_path, limit=20)
    if not logs:
        console.print("[yellow]No review sessions yet.[/yellow]")
        return
    table = Table(title="Recent Sessions")
    table.add_column("When")
    table.add_column("Scope", style="cyan")
    table.add_column("Reviewed", justify="right")
    for log in logs:
        table.add_row(_format_ts(log.timestamp), log.subject, str(log.count))
    console.print(table)


def cmd_reflect(db_path: str):
    today = date.today().isoformat()
    existing = list_reflections(db_path).get(today, "")
    if existing:
        console.print(Panel(existing, title=f"Reflection for {today}"))
    content = Prompt.ask("Today's reflection (blank to clear)", default=existing)
    if save_reflection(db_path, today, content, now=system_clock()):
        console.print("[green]Reflection saved.[/green]")
    else:
        console.print("[red]Saving the reflection failed.[/red]")


def cmd_settings(db_path: str):
    size = IntPrompt.ask("Questions per practice session", default=get_session_size(db_path))
    if size <= 0:
        console.print("[red]Session size must be positive.[/red]")
        return
    set_setting(db_path, "session_size", str(size))
    console.print(f"[green]Session size set to {size}.[/green]")


COMMANDS = {
    "review": cmd_review,
    "examples": cmd_examples,
    "random": cmd_random,
    "add": cmd_add,
    "bank": cmd_bank,
    "master": cmd_master,
    "delete": cmd_delete,
    "import": cmd_import,
    "dashboard": cmd_dashboard,
    "logs": cmd_logs,
    "reflect": cmd_reflect,
    "settings": cmd_settings,
}


def main():
    logging.basicConfig(
        level=LOG_LEVEL, format="%(message)s", datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    db_path = DEFAULT_DB_PATH
    init_db(db_path)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="review").strip().lower()
        try:
            if choice in ("quit", "exit", "q"):
                console.print("[dim]Keep it up![/dim]")
                break
            elif choice in COMMANDS:
                COMMANDS[choice](db_path)
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except TutorError as e:
            console.print(f"[red]{e}[/red]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
