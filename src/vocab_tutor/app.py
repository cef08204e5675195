"""Interactive CLI application."""
import logging
import sqlite3
import sys

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from vocab_tutor.catalog import WordCatalog, load_catalog
from vocab_tutor.config import settings
from vocab_tutor.db import init_db
from vocab_tutor.errors import CatalogError, VocabTutorError
from vocab_tutor.library import (
    delete_word, favorite_items, is_saved, load_items, record_review,
    reset_progress, save_word, search_items, toggle_favorite,
)
from vocab_tutor.logging_config import setup_logging
from vocab_tutor.models import LearningItem, Outcome, SelectionPolicy, VocabularyEntry
from vocab_tutor.prefs import (
    get_daily_limit, get_proficiency_level, set_daily_limit, set_proficiency_level,
)
from vocab_tutor.scheduler import Scheduler
from vocab_tutor.srs import INTERVAL_TABLE
from vocab_tutor.stats import difficult_words, get_study_stats, stage_distribution, words_saved_today
from vocab_tutor.widget import save_progress, save_snapshot

logger = logging.getLogger(__name__)
console = Console()

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the learner types q or menu inside a session."""


def session_prompt(prompt: str, choices: list[str] | None = None, **kwargs) -> str:
    if choices is not None:
        choices = list(choices) + [w for w in EXIT_WORDS if w not in choices]
    value = Prompt.ask(prompt, choices=choices, **kwargs)
    if value.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return value


def session_int_prompt(prompt: str, choices: list[str] | None = None, **kwargs) -> int:
    return int(session_prompt(prompt, choices=choices, **kwargs))


def build_scheduler(db_path: str, catalog: WordCatalog) -> Scheduler:
    return Scheduler(catalog, load_items(db_path), get_proficiency_level(db_path))


def show_welcome():
    console.print(Panel(
        "[bold]Vocabulary Tutor[/bold]\n[dim]Word of the day and spaced review[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("today", "Word of the day"),
        ("practice", "Review due words"),
        ("learn", "Discover new words"),
        ("library", "Saved words, favorites, search"),
        ("stats", "Progress and streaks"),
        ("level", "Proficiency level and daily limit"),
        ("reset", "Reset review progress"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<10}[/cyan] {desc}")


def show_word(entry: VocabularyEntry, title: str = "Word", reveal: bool = True):
    body = f"[bold]{entry.text}[/bold]"
    if reveal:
        body += f"\n[cyan]{entry.pronunciation_hint}[/cyan]\n{entry.meaning}"
        if entry.example_sentence:
            body += f"\n[dim]{entry.example_sentence}[/dim]"
    console.print(Panel(body, title=title, border_style="cyan"))


def run_review_session(db_path: str, items: list[LearningItem]) -> tuple[int, int]:
    """Quiz each item and grade it. Returns (remembered, reviewed)."""
    if not items:
        console.print("[yellow]Nothing due for review right now![/yellow]")
        return 0, 0
    remembered = 0
    reviewed = 0
    console.print(f"\n[bold]Review[/bold] — {len(items)} words  [dim](q to stop)[/dim]\n")
    for i, item in enumerate(items, 1):
        entry = item.to_entry()
        show_word(entry, title=f"Word {i}/{len(items)}", reveal=False)
        session_prompt("[dim]Press Enter to reveal[/dim]", default="", show_default=False)
        show_word(entry, title="Answer")
        answer = session_prompt("Did you remember it? (r=remembered, f=forgot)", choices=["r", "f"])
        outcome = Outcome.REMEMBERED if answer == "r" else Outcome.FORGOTTEN
        record_review(db_path, item, outcome)
        reviewed += 1
        if outcome == Outcome.REMEMBERED:
            remembered += 1
            console.print(f"[green]Next review in {INTERVAL_TABLE[item.srs_stage]} days.[/green]\n")
        else:
            console.print("[red]Back to the start — see it again tomorrow.[/red]\n")
    console.print(f"[bold]Remembered {remembered}/{reviewed}[/bold]\n")
    return remembered, reviewed


def cmd_today(db_path: str, catalog: WordCatalog):
    scheduler = build_scheduler(db_path, catalog)
    entry = scheduler.select_next_word(SelectionPolicy.DAILY)
    if entry is None:
        console.print("[yellow]The word catalog is empty.[/yellow]")
        return
    title = "Due for Review" if scheduler.due_items() else "Word of the Day"
    show_word(entry, title=title)
    save_snapshot(db_path, entry)
    if not is_saved(db_path, entry.text):
        if session_prompt("Save to your library?", choices=["y", "n"], default="y") == "y":
            save_word(db_path, entry)
            console.print("[green]Saved![/green]")
    save_progress(db_path, words_saved_today(db_path), get_daily_limit(db_path))


def cmd_practice(db_path: str, catalog: WordCatalog):
    scheduler = build_scheduler(db_path, catalog)
    run_review_session(db_path, scheduler.due_items())


def cmd_learn(db_path: str, catalog: WordCatalog):
    scheduler = build_scheduler(db_path, catalog)
    due = scheduler.due_items()
    if due:
        console.print(f"[yellow]{len(due)} words are due. Finish 'practice' before learning new ones.[/yellow]")
        return
    limit = get_daily_limit(db_path)
    remaining = limit - words_saved_today(db_path)
    if remaining <= 0:
        console.print(f"[yellow]Daily limit of {limit} new words reached. Come back tomorrow![/yellow]")
        return
    console.print(f"\n[bold]New Words[/bold] — up to {remaining} today  [dim](q to stop)[/dim]\n")
    while remaining > 0:
        entry = scheduler.select_next_word(SelectionPolicy.RANDOM)
        if entry is None or is_saved(db_path, entry.text):
            console.print("[green]You have saved every word at this level![/green]")
            return
        show_word(entry, title=f"Level {entry.proficiency_level}")
        if session_prompt("Save this word? (s=save, n=next)", choices=["s", "n"], default="s") == "s":
            scheduler.items.append(save_word(db_path, entry))
            remaining -= 1
            console.print("[green]Saved![/green]\n")
    save_progress(db_path, words_saved_today(db_path), limit)
    console.print("[green]That's today's new words done.[/green]")


def show_items(items: list[LearningItem], title: str = "Library"):
    table = Table(title=title)
    table.add_column("", width=1)
    table.add_column("Word", style="bold")
    table.add_column("Pronunciation", style="cyan")
    table.add_column("Meaning")
    table.add_column("Stage", justify="right")
    table.add_column("Next review")
    for item in items:
        table.add_row(
            "★" if item.is_favorite else "",
            item.word,
            item.pronunciation_hint,
            item.meaning,
            str(item.srs_stage),
            item.next_review_at.date().isoformat(),
        )
    console.print(table)


def cmd_library(db_path: str, catalog: WordCatalog):
    items = load_items(db_path)
    if not items:
        console.print("[yellow]Your library is empty. Try 'today' or 'learn'.[/yellow]")
        return
    show_items(items)
    while True:
        action = session_prompt(
            "search / favorites / fav <word> / delete <word> / back", default="back",
        ).strip()
        command, _, arg = action.partition(" ")
        if command == "back":
            return
        if command == "search":
            query = arg or session_prompt("Search for")
            show_items(search_items(db_path, query), title=f"Matches for '{query}'")
        elif command == "favorites":
            show_items(favorite_items(db_path), title="Favorites")
        elif command == "fav" and arg:
            value = toggle_favorite(db_path, arg)
            console.print(f"[green]{arg} {'added to' if value else 'removed from'} favorites.[/green]")
        elif command == "delete" and arg:
            delete_word(db_path, arg)
            console.print(f"[green]Deleted {arg}.[/green]")
        else:
            console.print("[red]Unknown action.[/red]")


def cmd_stats(db_path: str, catalog: WordCatalog):
    stats = get_study_stats(db_path)
    console.print(Panel(
        f"Saved: [bold]{stats['words_saved']}[/bold]  |  "
        f"Today: [bold]{stats['saved_today']}[/bold]  |  "
        f"Favorites: [bold]{stats['favorites']}[/bold]\n"
        f"Reviews: [bold]{stats['reviews']}[/bold]  |  "
        f"Retention: [bold]{stats['retention']}%[/bold]\n"
        f"Streak: [bold]{stats['current_streak']}[/bold] days  |  "
        f"Longest: [bold]{stats['longest_streak']}[/bold] days",
        title="Progress", border_style="blue",
    ))

    table = Table(title="Stages")
    table.add_column("Stage", justify="right")
    table.add_column("Interval", justify="right")
    table.add_column("Words", justify="right")
    for stage, count in stage_distribution(db_path).items():
        table.add_row(str(stage), f"{INTERVAL_TABLE[stage]}d", str(count))
    console.print(table)

    hard = difficult_words(db_path)
    if hard:
        console.print("\n[bold]Difficult words:[/bold]")
        for h in hard[:5]:
            console.print(f"  [red]{h['accuracy']}%[/red] — {h['word']} ({h['meaning']})")


def cmd_level(db_path: str, catalog: WordCatalog):
    current = get_proficiency_level(db_path)
    levels = [str(level) for level in catalog.levels()]
    console.print(f"Current level: [bold]{current}[/bold]  Available: {', '.join(levels)}")
    level = session_int_prompt("Proficiency level", choices=levels, default=str(current))
    set_proficiency_level(db_path, level)
    limit = session_int_prompt("New words per day", default=str(get_daily_limit(db_path)))
    set_daily_limit(db_path, limit)
    console.print(f"[green]Level {level}, {limit} new words per day.[/green]")


def cmd_reset(db_path: str, catalog: WordCatalog):
    if session_prompt("Reset all review progress?", choices=["y", "n"], default="n") == "y":
        reset_progress(db_path)
        console.print("[green]Progress reset.[/green]")


COMMANDS = {
    "today": cmd_today,
    "practice": cmd_practice,
    "learn": cmd_learn,
    "library": cmd_library,
    "stats": cmd_stats,
    "level": cmd_level,
    "reset": cmd_reset,
}


def main():
    setup_logging()
    db_path = settings.database.path
    init_db(db_path)
    try:
        catalog = load_catalog(settings.catalog.path)
    except CatalogError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]加油! See you tomorrow.[/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(db_path, catalog)
        except SessionExitRequested:
            console.print("[dim]Back to menu.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except (VocabTutorError, sqlite3.Error, ValueError) as e:
            logger.error("Command %s failed: %s", choice, e)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
